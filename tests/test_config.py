"""Tests for ToonConfig."""

import dataclasses

import pytest

from toon_core import DEFAULT_CONFIG, ToonConfig, ToonConfigError


def test_defaults():
    cfg = ToonConfig()
    assert cfg.delimiter == ","
    assert cfg.indent == 2
    assert cfg.length_marker == ""

def test_indent_clamped_to_one():
    assert ToonConfig(indent=0).indent == 1
    assert ToonConfig(indent=-4).indent == 1

def test_empty_delimiter_falls_back_to_comma():
    assert ToonConfig(delimiter="").delimiter == ","

def test_frozen():
    with pytest.raises(dataclasses.FrozenInstanceError):
        DEFAULT_CONFIG.indent = 4

def test_delimiter_display():
    assert ToonConfig().delimiter_display == ""
    assert ToonConfig(delimiter="|").delimiter_display == "|"


# ---------------------------------------------------------------------------
# from_options
# ---------------------------------------------------------------------------

def test_from_options_parses_strings():
    cfg = ToonConfig.from_options(indent="4", delimiter="|", length_marker="#")
    assert cfg == ToonConfig(delimiter="|", indent=4, length_marker="#")

def test_from_options_defaults():
    assert ToonConfig.from_options() == DEFAULT_CONFIG

@pytest.mark.parametrize("alias, expected", [
    ("tab", "\t"),
    ("\\t", "\t"),
    ("pipe", "|"),
    ("comma", ","),
    (";", ";"),
])
def test_from_options_delimiter_aliases(alias, expected):
    assert ToonConfig.from_options(delimiter=alias).delimiter == expected

def test_from_options_bad_indent():
    with pytest.raises(ToonConfigError):
        ToonConfig.from_options(indent="two")
