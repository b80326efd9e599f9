"""
The solidity toolchain: compiler, linker and standard library.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from ...core.interfaces.terminal import ITerminal
from ...core.models.config import ToolchainConfig
from .component import DEFAULT_HOME, Component

TOOL_FOLDER_NAME = "solidity"

COMPILER_NAME = "solc"
LINKER_NAME = "tvm_linker"
STDLIB_NAME = "stdlib_sol"

LINKER_VERSION_REGEX = r"[^0-9]*([0-9.]+)"


class StdlibComponent(Component):
    """
    The compiler standard library archive.

    It is versioned together with the compiler: its version list is the
    compiler's and the installed version is whatever was downloaded.
    """

    def __init__(self, compiler: Component, **kwargs) -> None:
        super().__init__(compiler.namespace, STDLIB_NAME, target_name=f"{STDLIB_NAME}.tvm", **kwargs)
        self.compiler = compiler

    def source_name(self, version: str) -> str:
        return f"{self.name}_{version.replace('.', '_')}.tvm.gz"

    async def load_available_versions(self) -> list[str]:
        return await self.compiler.load_available_versions()

    async def resolve_version(self, downloaded_version: str) -> str:
        return downloaded_version


@dataclass
class Toolchain:
    """The three components a compilation needs."""

    compiler: Component
    linker: Component
    stdlib: Component
    versions: dict[str, str]

    def components(self) -> list[Component]:
        return [self.compiler, self.linker, self.stdlib]

    async def ensure_installed(self, terminal: ITerminal) -> None:
        await Component.ensure_installed_all(terminal, self.components(), self.versions)


def toolchain_components(config: ToolchainConfig | None = None) -> Toolchain:
    """Build the toolchain from configuration."""
    config = config or ToolchainConfig()
    home = Path(config.home).expanduser() if config.home else DEFAULT_HOME
    common = {"home": home, "source_url": config.source_url}

    compiler = Component(TOOL_FOLDER_NAME, COMPILER_NAME, is_executable=True, **common)
    linker = Component(
        TOOL_FOLDER_NAME,
        LINKER_NAME,
        is_executable=True,
        version_regex=LINKER_VERSION_REGEX,
        **common,
    )
    stdlib = StdlibComponent(compiler, **common)

    compiler_version = config.compiler_version
    versions = {
        COMPILER_NAME: compiler_version,
        LINKER_NAME: config.linker_version,
        STDLIB_NAME: config.stdlib_version or compiler_version,
    }
    return Toolchain(compiler=compiler, linker=linker, stdlib=stdlib, versions=versions)
