"""
Unit tests for configuration models, settings loading and config commands.
"""

import pytest
from pydantic import ValidationError

from solcheck.config import config_get, config_set, load_config
from solcheck.core.models.config import ToolchainConfig, ValidationConfig
from solcheck.core.settings import load_settings


class TestValidationConfig:
    """Tests for the validation section."""

    def test_defaults(self):
        config = ValidationConfig()

        assert config.linter is None
        assert config.enabled_as_you_type_compilation_error_check is True
        assert config.validation_delay == 1500
        assert config.delay_seconds == 1.5
        assert config.package_default_dependencies_directory == "lib"
        assert config.package_default_dependencies_contracts_directory == "src"

    @pytest.mark.parametrize(
        "value,expected",
        [(True, "solhint"), (False, None), ("", None), ("none", None), ("Solium", "solium")],
    )
    def test_legacy_linter_values(self, value, expected):
        assert ValidationConfig(linter=value).linter == expected

    def test_unknown_linter_rejected(self):
        with pytest.raises(ValidationError):
            ValidationConfig(linter="eslint")

    def test_editor_camel_case_aliases(self):
        config = ValidationConfig.model_validate(
            {
                "enabledAsYouTypeCompilationErrorCheck": False,
                "validationDelay": 300,
                "packageDefaultDependenciesDirectory": "deps",
                "soliumRules": {"indentation": "off"},
            }
        )

        assert config.enabled_as_you_type_compilation_error_check is False
        assert config.validation_delay == 300
        assert config.package_default_dependencies_directory == "deps"
        assert config.solium_rules == {"indentation": "off"}

    def test_linter_rules_follow_selected_linter(self):
        config = ValidationConfig(linter="solium", solium_rules={"a": 1}, solhint_rules={"b": 2})

        assert config.linter_rules() == {"a": 1}

    def test_negative_delay_rejected(self):
        with pytest.raises(ValidationError):
            ValidationConfig(validation_delay=-1)


class TestToolchainConfig:
    def test_source_url_scheme_is_checked(self):
        with pytest.raises(ValidationError):
            ToolchainConfig(source_url="ftp://example.com")


class TestSettings:
    """Tests for settings loading from TOML and environment."""

    def test_loads_config_toml(self, tmp_path):
        config_dir = tmp_path / ".solcheck"
        config_dir.mkdir()
        (config_dir / "config.toml").write_text(
            '[validation]\nlinter = "solium"\nvalidation_delay = 200\n\n[layout]\nbuild_dir = "out"\n'
        )

        settings = load_settings(start_dir=str(tmp_path))

        assert settings.validation.linter == "solium"
        assert settings.validation.validation_delay == 200
        assert settings.layout.build_dir == "out"
        assert settings._config_file == str(config_dir / "config.toml")

    def test_pyproject_tool_section(self, tmp_path):
        (tmp_path / "pyproject.toml").write_text('[tool.solcheck.toolchain]\ncompiler_version = "0.66.0"\n')

        settings = load_settings(start_dir=str(tmp_path))

        assert settings.toolchain.compiler_version == "0.66.0"

    def test_environment_overrides_file(self, tmp_path, monkeypatch):
        config_dir = tmp_path / ".solcheck"
        config_dir.mkdir()
        (config_dir / "config.toml").write_text("[validation]\nvalidation_delay = 200\n")
        monkeypatch.setenv("SOLCHECK_VALIDATION__VALIDATION_DELAY", "900")

        settings = load_settings(start_dir=str(tmp_path))

        assert settings.validation.validation_delay == 900


class TestConfigCommands:
    """Tests for config_get / config_set."""

    def test_set_then_get(self, tmp_path):
        path, value = config_set("validation.validation_delay", "750", start_dir=str(tmp_path))

        assert value == 750
        assert path == tmp_path / ".solcheck" / "config.toml"
        assert config_get("validation.validation_delay", start_dir=str(tmp_path)) == 750

    def test_only_non_defaults_are_written(self, tmp_path):
        path, _ = config_set("validation.linter", "solhint", start_dir=str(tmp_path))

        text = path.read_text()
        assert 'linter = "solhint"' in text
        assert "validation_delay" not in text

    def test_bool_parsing(self, tmp_path):
        config_set(
            "validation.enabled_as_you_type_compilation_error_check", "off", start_dir=str(tmp_path)
        )

        config = load_config(start_dir=str(tmp_path))
        assert config["validation"]["enabled_as_you_type_compilation_error_check"] is False

    @pytest.mark.parametrize(
        "key,value",
        [
            ("validation.linter", "eslint"),
            ("validation.validation_delay", "soon"),
            ("validation.enabled_as_you_type_compilation_error_check", "maybe"),
            ("unknown.key", "x"),
        ],
    )
    def test_invalid_values_rejected(self, tmp_path, key, value):
        with pytest.raises(ValueError):
            config_set(key, value, start_dir=str(tmp_path))
