"""Configuration loading and management for solcheck."""

from pathlib import Path
from typing import Any

from .core.exceptions import ConfigValidationError
from .core.settings import CONFIG_DIR_NAME, CONFIG_FILE_NAME, find_config_file, load_settings

VALID_LINTERS = {"solhint", "solium", "none"}

# Config keys that can be set via `solcheck config set`
CONFIGURABLE_KEYS = {
    "validation.linter": {
        "type": str,
        "default": None,
        "description": "Linter to run on every validation (solhint, solium, none)",
    },
    "validation.enabled_as_you_type_compilation_error_check": {
        "type": bool,
        "default": True,
        "description": "Compile documents while typing and report compiler errors",
    },
    "validation.validation_delay": {
        "type": int,
        "default": 1500,
        "description": "Debounce interval in milliseconds after an edit",
    },
    "validation.package_default_dependencies_directory": {
        "type": str,
        "default": "lib",
        "description": "Directory holding dependency packages",
    },
    "validation.package_default_dependencies_contracts_directory": {
        "type": str,
        "default": "src",
        "description": "Contracts directory inside each dependency package",
    },
    "layout.contracts_dir": {
        "type": str,
        "default": "contracts",
        "description": "Project directory holding contract sources",
    },
    "layout.temp_dir": {
        "type": str,
        "default": ".temp",
        "description": "Hidden directory mirroring contracts for staged compiles",
    },
    "layout.build_dir": {
        "type": str,
        "default": "build",
        "description": "Directory receiving promoted bytecode and ABI files",
    },
    "toolchain.home": {
        "type": str,
        "default": None,
        "description": "Where toolchain components are installed (default ~/.solcheck/toolchain)",
    },
    "toolchain.source_url": {
        "type": str,
        "default": "https://binaries.tonlabs.io",
        "description": "Base URL toolchain components are downloaded from",
    },
    "toolchain.compiler_version": {
        "type": str,
        "default": "",
        "description": "Compiler version to install (empty for latest)",
    },
    "toolchain.linker_version": {
        "type": str,
        "default": "",
        "description": "Linker version to install (empty for latest)",
    },
    "toolchain.stdlib_version": {
        "type": str,
        "default": "",
        "description": "Standard library version to install (empty for the compiler's)",
    },
    "logging.level": {
        "type": str,
        "default": "warning",
        "description": "Log level (debug, info, warning, error)",
    },
    "logging.console": {
        "type": bool,
        "default": False,
        "description": "Output debug logs to stderr",
    },
    "logging.file": {
        "type": bool,
        "default": True,
        "description": "Write the server log to a rotating file",
    },
    "logging.file_path": {
        "type": str,
        "default": None,
        "description": "Server log file (default ~/.solcheck/logs/server.log)",
    },
}


def _get_default_config() -> dict:
    """Get default config from Pydantic models."""
    from .core.models.config import SolcheckConfig

    return SolcheckConfig().to_dict()


def _get_nested(d: dict, key: str, default=None):
    """Get a nested key like 'validation.linter'."""
    parts = key.split(".")
    for part in parts:
        if isinstance(d, dict) and part in d:
            d = d[part]
        else:
            return default
    return d


def _set_nested(d: dict, key: str, value):
    """Set a nested key like 'validation.linter'."""
    parts = key.split(".")
    for part in parts[:-1]:
        if part not in d:
            d[part] = {}
        d = d[part]
    d[parts[-1]] = value


def _toml_value(val: Any) -> str:
    """Render a scalar, list or inline table as TOML."""
    if isinstance(val, bool):
        return str(val).lower()
    if isinstance(val, str):
        escaped = val.replace("\\", "\\\\").replace('"', '\\"')
        return f'"{escaped}"'
    if isinstance(val, list):
        return "[" + ", ".join(_toml_value(v) for v in val) + "]"
    if isinstance(val, dict):
        items = ", ".join(f'"{k}" = {_toml_value(v)}' for k, v in val.items())
        return "{ " + items + " }" if items else "{}"
    return str(val)


def load_config(config_path: Path | None = None, start_dir: str | None = None) -> dict:
    """
    Load configuration from file.

    Args:
        config_path: Explicit path to config file
        start_dir: Directory to start searching from (if config_path not given)

    Returns:
        Configuration dict with defaults applied
    """
    settings = load_settings(config_path=config_path, start_dir=start_dir)
    return settings.to_dict()


def get_solcheck_dir(start_dir: str | None = None) -> Path:
    """
    Get the .solcheck directory path, creating it if needed.

    Returns:
        Path to .solcheck directory in start_dir or cwd.
    """
    base = Path(start_dir) if start_dir else Path.cwd()
    solcheck_dir = base / CONFIG_DIR_NAME
    solcheck_dir.mkdir(exist_ok=True)
    return solcheck_dir


def get_config_path_for_write(start_dir: str | None = None) -> Path:
    """
    Get the path where config should be written.

    Prefers existing .solcheck/config.toml, otherwise creates one in start_dir or cwd.
    """
    existing = find_config_file(start_dir)
    if existing and existing.name == CONFIG_FILE_NAME:
        return existing

    return get_solcheck_dir(start_dir) / CONFIG_FILE_NAME


def save_config(config: dict, config_path: Path):
    """
    Save configuration to a .solcheck/config.toml file.

    Only saves non-default values.
    """
    lines = []
    defaults = _get_default_config()

    for section in ("validation", "layout", "toolchain", "logging"):
        section_lines = []
        for key, val in config.get(section, {}).items():
            default_val = defaults.get(section, {}).get(key)
            if val == default_val or val is None:
                continue
            section_lines.append(f"{key} = {_toml_value(val)}")

        if section_lines:
            lines.append(f"[{section}]")
            lines.extend(section_lines)
            lines.append("")

    config_path.write_text("\n".join(lines))


def config_get(key: str, start_dir: str | None = None):
    """Get a config value."""
    config = load_config(start_dir=start_dir)
    return _get_nested(config, key)


def config_set(key: str, value: str, start_dir: str | None = None):
    """Set a config value and save to .solcheck/config.toml."""
    if key not in CONFIGURABLE_KEYS:
        raise ConfigValidationError(
            f"Unknown config key: {key}. Valid keys: {', '.join(CONFIGURABLE_KEYS.keys())}"
        )

    key_info = CONFIGURABLE_KEYS[key]
    typed_value: Any

    # Parse value to correct type
    if key_info["type"] is bool:  # type: ignore[index]
        if value.lower() in ("true", "1", "yes", "on"):
            typed_value = True
        elif value.lower() in ("false", "0", "no", "off"):
            typed_value = False
        else:
            raise ConfigValidationError(f"Invalid boolean value: {value}", key=key, value=value)
    elif key_info["type"] is int:  # type: ignore[index]
        try:
            typed_value = int(value)
        except ValueError:
            raise ConfigValidationError(f"Invalid integer value: {value}", key=key, value=value) from None
        if typed_value < 0:
            raise ConfigValidationError(f"Value must not be negative: {value}", key=key, value=value)
    elif key == "validation.linter":
        if value.lower() not in VALID_LINTERS:
            raise ConfigValidationError(
                f"Invalid linter: {value}. Valid linters: {', '.join(sorted(VALID_LINTERS))}"
            )
        typed_value = value.lower()
    else:
        typed_value = value

    # Load existing config, update, and save
    config = load_config(start_dir=start_dir)
    _set_nested(config, key, typed_value)

    config_path = get_config_path_for_write(start_dir)
    save_config(config, config_path)

    return config_path, typed_value
