"""
Tests for configuration loading, merging and validation.
"""

import json
from pathlib import Path

import pytest

from obj_for_dto.core.config import (
    ConfigError,
    ConfigManager,
    GeneratorConfig,
    load_config,
)


class TestLanguageDefaults:
    def test_typescript(self):
        config = load_config("typescript")
        assert config.flat is False
        assert config.presence_helper_file == "has-value.ts"
        assert config.test_helpers_file == "setup-jest-esm.ts"
        assert config.indent == "    "

    def test_python(self):
        config = load_config("python")
        assert config.flat is True
        assert config.presence_helper_file == "has_value.py"

    def test_unknown_language_gets_base_defaults(self):
        assert load_config("cobol") == GeneratorConfig()


class TestMerging:
    def test_custom_config_overrides_defaults(self):
        config = load_config("typescript", custom_config={"flat": True, "indent_size": 2})
        assert config.flat is True
        assert config.indent == "  "
        assert config.presence_helper_file == "has-value.ts"

    def test_unknown_keys_go_to_custom(self):
        config = load_config("python", custom_config={"banner": "x"})
        assert config.custom == {"banner": "x"}

    def test_file_then_custom(self, tmp_path: Path):
        path = tmp_path / "dto.json"
        path.write_text(json.dumps({"sort_properties": True, "indent_size": 8}))

        config = load_config("python", custom_config={"indent_size": 2}, config_file=path)
        assert config.sort_properties is True
        assert config.indent_size == 2

    def test_type_aliases_from_file(self, tmp_path: Path):
        path = tmp_path / "dto.json"
        path.write_text(json.dumps({"type_aliases": {"e": "Employee"}}))
        assert load_config("typescript", config_file=path).type_aliases == {"e": "Employee"}


class TestConfigFileErrors:
    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(ConfigError, match="not found"):
            load_config("python", config_file=tmp_path / "nope.json")

    def test_not_json_suffix(self, tmp_path: Path):
        path = tmp_path / "dto.yaml"
        path.write_text("flat: true")
        with pytest.raises(ConfigError, match="must be JSON"):
            load_config("python", config_file=path)

    def test_invalid_json(self, tmp_path: Path):
        path = tmp_path / "dto.json"
        path.write_text("{not json")
        with pytest.raises(ConfigError, match="Invalid JSON"):
            load_config("python", config_file=path)

    def test_non_object(self, tmp_path: Path):
        path = tmp_path / "dto.json"
        path.write_text("[1, 2]")
        with pytest.raises(ConfigError, match="JSON object"):
            load_config("python", config_file=path)


class TestValidate:
    def test_valid_config_has_no_warnings(self):
        assert ConfigManager().validate_config(load_config("typescript")) == []

    def test_warnings(self):
        config = GeneratorConfig(
            indent_size=0,
            type_aliases={"s": "Secret", "e": "not a type"},
            search_depth=-1,
        )
        warnings = ConfigManager().validate_config(config)

        assert "Invalid indent_size: 0" in warnings
        assert any("shadows a built-in" in w for w in warnings)
        assert any("invalid type name" in w for w in warnings)
        assert "Invalid search_depth: -1" in warnings
