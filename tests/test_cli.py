"""Tests for the ``toon`` command line."""

import io
import json

import pytest

from toon_core.cli import build_parser, main


def _run(argv, stdin_text=""):
    out = io.StringIO()
    code = main(argv, stdin=io.StringIO(stdin_text), stdout=out)
    return code, out.getvalue()


# ---------------------------------------------------------------------------
# encode
# ---------------------------------------------------------------------------

def test_encode_stdin_to_stdout():
    code, out = _run(["encode"], '{"name":"Alice","tags":["a","b"]}')
    assert code == 0
    assert out == "name: Alice\ntags[2]: a,b\n"

def test_encode_options():
    code, out = _run(["encode", "-d", "pipe", "-m", "#", "-i", "4"], '{"a":{"b":[1,2]}}')
    assert code == 0
    assert out == "a:\n    b[#2|]: 1|2\n"

def test_encode_file_to_file(tmp_path):
    src = tmp_path / "in.json"
    dst = tmp_path / "out.toon"
    src.write_text('[{"id":1,"ok":true},{"id":2,"ok":false}]', encoding="utf-8")
    code, out = _run(["encode", str(src), "-o", str(dst)])
    assert code == 0
    assert out == ""
    assert dst.read_text(encoding="utf-8") == "[2]{id,ok}:\n  1,true\n  2,false"

def test_encode_bad_json(capsys):
    code, _ = _run(["encode"], "{not json")
    assert code == 1
    assert "invalid JSON" in capsys.readouterr().err

def test_encode_bad_indent(capsys):
    code, _ = _run(["encode", "-i", "wide"], "{}")
    assert code == 1
    assert "indent" in capsys.readouterr().err

def test_encode_missing_file(tmp_path, capsys):
    code, _ = _run(["encode", str(tmp_path / "missing.json")])
    assert code == 1
    assert capsys.readouterr().err.startswith("Error:")


# ---------------------------------------------------------------------------
# decode
# ---------------------------------------------------------------------------

def test_decode_compact():
    code, out = _run(["decode"], "name: Alice\nage: 30\n")
    assert code == 0
    assert json.loads(out) == {"name": "Alice", "age": 30}
    assert out == '{"name": "Alice", "age": 30}\n'

def test_decode_pretty():
    code, out = _run(["decode", "--pretty"], "tags[2]: a,b")
    assert code == 0
    assert out == '{\n  "tags": [\n    "a",\n    "b"\n  ]\n}\n'

def test_decode_non_ascii_kept():
    code, out = _run(["decode"], "city: Zürich")
    assert code == 0
    assert "Zürich" in out

def test_decode_with_delimiter():
    code, out = _run(["decode", "-d", "|"], "[2|]: x|y")
    assert code == 0
    assert json.loads(out) == ["x", "y"]


# ---------------------------------------------------------------------------
# parser / misc
# ---------------------------------------------------------------------------

def test_no_command_prints_help():
    code, out = _run([])
    assert code == 0
    assert "encode" in out

def test_version(capsys):
    with pytest.raises(SystemExit) as exc:
        build_parser().parse_args(["--version"])
    assert exc.value.code == 0
    assert "toon" in capsys.readouterr().out
