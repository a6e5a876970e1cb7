"""
Tests for the YAML folding configuration loader.
"""
from __future__ import annotations

# --- Standard Library Imports ---
from pathlib import Path

# --- Third-Party Imports ---
import pytest

# --- Local Application Imports ---
from rna_nussinov_fold.config import NussinovConfigLoader, default_config_path, read_yaml
from rna_nussinov_fold.folding.nussinov_recurrences import NussinovFoldingConfig


@pytest.fixture
def write_yaml(tmp_path):
    """
    Provides a helper that writes YAML text into a temporary file.
    """
    def write(text: str, name: str = "folding.yaml") -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return write


def test_bundled_default_exists_and_parses():
    """
    The packaged YAML is found through `importlib.resources` and holds a
    `folding` mapping with the default values.
    """
    path = default_config_path()
    assert path.exists()

    data = read_yaml(path)
    assert data["folding"]["min_loop_length"] == 4
    assert data["folding"]["fill_order"] == "bottom_up"


def test_load_without_path_uses_defaults():
    """
    Loading with no file yields the dataclass defaults.
    """
    config = NussinovConfigLoader().load()

    assert isinstance(config, NussinovFoldingConfig)
    assert config.min_loop_length == 4
    assert config.fill_order == "bottom_up"
    assert config.verbose is False


def test_load_reads_values_from_file(write_yaml):
    path = write_yaml("folding:\n  min_loop_length: 3\n  fill_order: memoized\n")
    config = NussinovConfigLoader().load(path)

    assert config.min_loop_length == 3
    assert config.fill_order == "memoized"


def test_missing_folding_block_keeps_defaults(write_yaml):
    """
    A file without a `folding` entry leaves every setting at its default.
    """
    config = NussinovConfigLoader().load(write_yaml("metadata:\n  name: empty\n"))
    assert config.min_loop_length == 4


def test_overrides_replace_file_values_and_none_is_ignored(write_yaml):
    """
    Keyword overrides win over the file; `None` means "not given".
    """
    path = write_yaml("folding:\n  min_loop_length: 3\n")
    config = NussinovConfigLoader().load(path, min_loop_length=6, fill_order=None)

    assert config.min_loop_length == 6
    assert config.fill_order == "bottom_up"


def test_unknown_override_raises():
    with pytest.raises(ValueError, match="Unknown folding override"):
        NussinovConfigLoader().load(temperature=37)


@pytest.mark.parametrize(
    "text",
    [
        "folding:\n  min_loop: 3\n",           # Unknown key.
        "folding: [1, 2]\n",                   # Not a mapping.
        "folding:\n  fill_order: sideways\n",  # Rejected by the dataclass.
        "folding:\n  min_loop_length: -2\n",
        "- a\n- b\n",                          # Top level is a list.
    ],
)
def test_invalid_files_raise_value_error(write_yaml, text):
    """
    Malformed or out-of-range settings surface as `ValueError`.
    """
    with pytest.raises(ValueError):
        NussinovConfigLoader().load(write_yaml(text))


def test_malformed_yaml_raises_value_error(write_yaml):
    """
    A YAML syntax error surfaces as `ValueError`, not as a parser exception.
    """
    path = write_yaml("folding: {min_loop_length: [\n")
    with pytest.raises(ValueError, match="Malformed YAML"):
        read_yaml(path)


@pytest.mark.parametrize(
    "text,key",
    [
        ("folding:\n  min_loop_length:\n", "min_loop_length"),        # Null.
        ("folding:\n  min_loop_length: [3]\n", "min_loop_length"),    # List.
        ("folding:\n  min_loop_length: 4.7\n", "min_loop_length"),    # Float is not truncated.
        ("folding:\n  min_loop_length: true\n", "min_loop_length"),   # Bool is not an int here.
        ("folding:\n  verbose: 'false'\n", "verbose"),                # Quoted bool.
        ("folding:\n  verbose: 1\n", "verbose"),
        ("folding:\n  fill_order: 3\n", "fill_order"),
    ],
)
def test_wrongly_typed_values_raise_value_error(write_yaml, text, key):
    """
    Values of the wrong type are rejected with a message naming the key.
    """
    with pytest.raises(ValueError, match=key):
        NussinovConfigLoader().load(write_yaml(text))


def test_typed_values_are_kept_as_is(write_yaml):
    path = write_yaml("folding:\n  min_loop_length: 0\n  verbose: true\n")
    config = NussinovConfigLoader().load(path)

    assert config.min_loop_length == 0
    assert config.verbose is True


def test_non_yaml_suffix_is_rejected(write_yaml):
    path = write_yaml("folding: {}\n", name="folding.json")
    with pytest.raises(ValueError, match="Only YAML"):
        read_yaml(path)


def test_missing_file_raises_os_error(tmp_path):
    with pytest.raises(OSError):
        NussinovConfigLoader().load(tmp_path / "absent.yaml")
