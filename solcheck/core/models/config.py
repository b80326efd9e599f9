"""
Configuration models.

Provides Pydantic models for solcheck configuration with validation.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal

from pydantic import AliasChoices, ConfigDict, Field, field_validator

from .base import SolcheckBaseModel

# Type aliases
LinterName = Literal["solhint", "solium"]
LogLevel = Literal["debug", "info", "warning", "error"]

DEFAULT_VALIDATION_DELAY_MS = 1500


class ConfigBaseModel(SolcheckBaseModel):
    """Base model for config sections with relaxed strict mode for TOML loading."""

    model_config = ConfigDict(
        strict=False,  # Allow coercion from TOML types
        validate_assignment=True,
        extra="ignore",  # Ignore unknown fields in config files
        populate_by_name=True,
        use_enum_values=True,
        revalidate_instances="never",
    )


class ValidationConfig(ConfigBaseModel):
    """As-you-type validation section.

    Field aliases accept the editor's camelCase setting names so a
    ``didChangeConfiguration`` payload can be validated directly.
    """

    linter: LinterName | None = None
    enabled_as_you_type_compilation_error_check: bool = Field(
        default=True,
        validation_alias=AliasChoices(
            "enabled_as_you_type_compilation_error_check",
            "enabledAsYouTypeCompilationErrorCheck",
        ),
    )
    solium_rules: dict[str, Any] = Field(
        default_factory=dict,
        validation_alias=AliasChoices("solium_rules", "soliumRules"),
    )
    solhint_rules: dict[str, Any] = Field(
        default_factory=dict,
        validation_alias=AliasChoices("solhint_rules", "solhintRules"),
    )
    validation_delay: Annotated[int, Field(ge=0)] = Field(
        default=DEFAULT_VALIDATION_DELAY_MS,
        validation_alias=AliasChoices("validation_delay", "validationDelay"),
    )
    package_default_dependencies_directory: str = Field(
        default="lib",
        validation_alias=AliasChoices(
            "package_default_dependencies_directory",
            "packageDefaultDependenciesDirectory",
        ),
    )
    package_default_dependencies_contracts_directory: str = Field(
        default="src",
        validation_alias=AliasChoices(
            "package_default_dependencies_contracts_directory",
            "packageDefaultDependenciesContractsDirectory",
        ),
    )

    @field_validator("linter", mode="before")
    @classmethod
    def normalize_linter(cls, v: Any) -> str | None:
        """Accept the legacy boolean form of the linter option."""
        if v is True:
            return "solhint"
        if v is False or v is None:
            return None
        if isinstance(v, str):
            name = v.strip().lower()
            if name in ("", "none", "false"):
                return None
            return name
        return v

    @field_validator("solium_rules", "solhint_rules", mode="before")
    @classmethod
    def rules_or_empty(cls, v: Any) -> dict[str, Any]:
        """Treat a missing rule set as empty."""
        return v if v else {}

    @property
    def delay_seconds(self) -> float:
        """Debounce interval in seconds."""
        return self.validation_delay / 1000.0

    def linter_rules(self) -> dict[str, Any]:
        """Rule set belonging to the selected linter."""
        if self.linter == "solium":
            return self.solium_rules
        return self.solhint_rules


class LayoutConfig(ConfigBaseModel):
    """Project directory layout section."""

    contracts_dir: Annotated[str, Field(min_length=1)] = "contracts"
    temp_dir: Annotated[str, Field(min_length=1)] = ".temp"
    build_dir: Annotated[str, Field(min_length=1)] = "build"
    transient_marker: Annotated[str, Field(min_length=1, max_length=1)] = "~"


class ToolchainConfig(ConfigBaseModel):
    """Toolchain component section.

    Empty versions mean "latest available".
    """

    home: str | None = None  # defaults to ~/.solcheck/toolchain
    source_url: str = "https://binaries.tonlabs.io"
    compiler_version: str = ""
    linker_version: str = ""
    stdlib_version: str = ""

    @field_validator("source_url", mode="before")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Validate and normalize the binaries URL."""
        if not v.startswith(("http://", "https://", "file://")):
            raise ValueError("Toolchain source URL must start with http://, https:// or file://")
        return v.rstrip("/")


class LoggingConfig(ConfigBaseModel):
    """Logging configuration section."""

    level: LogLevel = "warning"
    console: bool = False
    file: bool = True
    file_path: str | None = None  # defaults to ~/.solcheck/logs/server.log


class SolcheckConfig(ConfigBaseModel):
    """Complete solcheck configuration.

    This model represents the full configuration with all sections.
    It can be loaded from TOML files or constructed programmatically.
    """

    validation: ValidationConfig = Field(default_factory=ValidationConfig)
    layout: LayoutConfig = Field(default_factory=LayoutConfig)
    toolchain: ToolchainConfig = Field(default_factory=ToolchainConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    def get(self, key: str, default: Any = None) -> Any:
        """Get config value by dot-notation key.

        Args:
            key: Dot-notation key (e.g., 'validation.linter')
            default: Default value if key not found

        Returns:
            Config value or default
        """
        parts = key.split(".")
        obj: Any = self
        for part in parts:
            if hasattr(obj, part):
                obj = getattr(obj, part)
            elif isinstance(obj, dict) and part in obj:
                obj = obj[part]
            else:
                return default
        return obj

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SolcheckConfig:
        """Create config from dictionary."""
        return cls.model_validate(data)

    def to_dict(self) -> dict[str, Any]:
        """Convert config to a nested dict."""
        return self.model_dump()
