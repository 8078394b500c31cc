# tests/core/test_loader.py
from __future__ import annotations

import os

import pytest

from devkitchen.hub.core.loader import import_attr, load_yaml_files, substitute_env_vars


class TestImportAttr:
    def test_import_valid_path(self):
        assert import_attr("os.path:join") is os.path.join

    def test_import_invalid_format_no_colon(self):
        with pytest.raises(ValueError, match="expected 'module:attr'"):
            import_attr("os.path.join")

    def test_import_nonexistent_module(self):
        with pytest.raises(ImportError):
            import_attr("nonexistent.module:attr")

    def test_import_nonexistent_attr(self):
        with pytest.raises(AttributeError):
            import_attr("os.path:nonexistent_function")


class TestSubstituteEnvVars:
    def test_env_value_wins_over_default(self, monkeypatch):
        monkeypatch.setenv("HUB_NAMESPACE", "from_env")
        assert substitute_env_vars("${HUB_NAMESPACE:-realEstate}") == "from_env"

    def test_default_used_when_unset(self, monkeypatch):
        monkeypatch.delenv("HUB_NAMESPACE", raising=False)
        assert substitute_env_vars("${HUB_NAMESPACE:-realEstate}") == "realEstate"

    def test_missing_without_default_raises(self, monkeypatch):
        monkeypatch.delenv("HUB_NAMESPACE", raising=False)
        with pytest.raises(ValueError, match="not set"):
            substitute_env_vars("${HUB_NAMESPACE}")

    def test_nested_structures(self, monkeypatch):
        monkeypatch.setenv("REDIS_HOST", "cache")

        result = substitute_env_vars(
            {"redis": {"hosts": ["${REDIS_HOST}", "static"]}, "port": 6379}
        )

        assert result == {"redis": {"hosts": ["cache", "static"]}, "port": 6379}


class TestLoadYamlFiles:
    def test_loads_in_sorted_order(self, tmp_path):
        (tmp_path / "b.yaml").write_text("name: b\n")
        (tmp_path / "a.yaml").write_text("name: a\n")

        docs = load_yaml_files([str(tmp_path / "*.yaml")])

        assert docs == [{"name": "a"}, {"name": "b"}]

    def test_empty_file_is_empty_dict(self, tmp_path):
        (tmp_path / "empty.yaml").write_text("")

        assert load_yaml_files([str(tmp_path / "empty.yaml")]) == [{}]

    def test_no_matches(self, tmp_path):
        assert load_yaml_files([str(tmp_path / "missing/*.yaml")]) == []
