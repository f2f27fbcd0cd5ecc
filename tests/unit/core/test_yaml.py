"""
Unit tests for core.yaml module.

Tests:
- load_yaml() with mappings, nesting, and empty files
- Missing files, invalid YAML, and non-mapping top levels
"""

from pathlib import Path

import pytest

from groupbrotr.core.exceptions import ConfigurationError
from groupbrotr.core.yaml import load_yaml


def _write(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "config.yaml"
    path.write_text(text, encoding="utf-8")
    return path


class TestLoadYaml:
    """Successful loads."""

    def test_simple_mapping(self, tmp_path: Path) -> None:
        path = _write(tmp_path, "invite_code_length: 12\nsubscription_prefix: chat\n")
        assert load_yaml(path) == {"invite_code_length": 12, "subscription_prefix": "chat"}

    def test_nested_mapping(self, tmp_path: Path) -> None:
        path = _write(tmp_path, "limits:\n  messages: 200\n  reactions: 10\n")
        assert load_yaml(str(path)) == {"limits": {"messages": 200, "reactions": 10}}

    def test_utf8_content(self, tmp_path: Path) -> None:
        path = _write(tmp_path, "default_reaction: 🤙\n")
        assert load_yaml(path) == {"default_reaction": "🤙"}

    @pytest.mark.parametrize("text", ["", "   \n", "# only a comment\n", "---\n"])
    def test_empty_returns_empty_dict(self, tmp_path: Path, text: str) -> None:
        assert load_yaml(_write(tmp_path, text)) == {}


class TestLoadYamlErrors:
    """Failure modes."""

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError, match="Config file not found"):
            load_yaml(tmp_path / "absent.yaml")

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        path = _write(tmp_path, "limits: [unclosed\n")
        with pytest.raises(ConfigurationError, match="Invalid YAML"):
            load_yaml(path)

    def test_top_level_list_rejected(self, tmp_path: Path) -> None:
        path = _write(tmp_path, "- a\n- b\n")
        with pytest.raises(ConfigurationError, match="must contain a mapping"):
            load_yaml(path)

    def test_unsafe_tags_rejected(self, tmp_path: Path) -> None:
        path = _write(tmp_path, "x: !!python/object/apply:os.getcwd []\n")
        with pytest.raises(ConfigurationError):
            load_yaml(path)
