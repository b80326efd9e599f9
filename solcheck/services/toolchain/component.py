"""
Versioned, lazily installed toolchain components.

A component is identified by ``(namespace, name)`` and installed under
``<home>/<namespace>/``. Binaries are downloaded gzip-compressed from the
configured source URL; the version that was installed is kept in a
``.version`` sidecar next to the target.
"""

from __future__ import annotations

import asyncio
import gzip
import json
import os
import re
import stat
import sys
import urllib.error
import urllib.request
from collections.abc import Iterable
from pathlib import Path

from ...core.exceptions import ComponentInstallError, ComponentNotFoundError, ToolchainRunError
from ...core.interfaces.terminal import ITerminal
from ...core.models.toolchain import ComponentInfo
from ..logging import component_logger

DEFAULT_SOURCE_URL = "https://binaries.tonlabs.io"
DEFAULT_HOME = Path.home() / ".solcheck" / "toolchain"
DEFAULT_VERSION_REGEX = r"Version:\s*([0-9.]+)"
DOWNLOAD_TIMEOUT = 60

_PLATFORM_NAMES = {"linux": "linux", "darwin": "darwin", "win32": "win32"}


def _version_key(version: str) -> tuple[int, ...]:
    parts = []
    for part in version.split("."):
        digits = re.match(r"\d+", part)
        parts.append(int(digits.group(0)) if digits else 0)
    return tuple(parts)


def _fetch(url: str) -> bytes:
    with urllib.request.urlopen(url, timeout=DOWNLOAD_TIMEOUT) as response:
        return response.read()


class Component:
    """
    An external executable or data file required by the toolchain.

    Usage:
        solc = Component("solidity", "solc", is_executable=True)
        await solc.ensure_installed(terminal)
        out = await solc.run(terminal, "/project/.temp", ["-o", ".", "~A.sol"])
    """

    logger = component_logger()

    _install_lock: asyncio.Lock | None = None

    def __init__(
        self,
        namespace: str,
        name: str,
        *,
        is_executable: bool = False,
        version_regex: str = DEFAULT_VERSION_REGEX,
        target_name: str | None = None,
        home: str | Path | None = None,
        source_url: str = DEFAULT_SOURCE_URL,
    ) -> None:
        self.namespace = namespace
        self.name = name
        self.is_executable = is_executable
        self.version_regex = re.compile(version_regex)
        self.target_name = target_name
        self.home = Path(home) if home else DEFAULT_HOME
        self.source_url = source_url.rstrip("/")

    def __repr__(self) -> str:
        return f"Component({self.namespace!r}, {self.name!r})"

    @property
    def identity(self) -> tuple[str, str]:
        return self.namespace, self.name

    # -------------------------------------------------------------------------
    # Installation metadata
    # -------------------------------------------------------------------------

    def path(self) -> str:
        """Filesystem path of the installed binary or archive."""
        target = self.target_name or self.name
        if self.is_executable and sys.platform == "win32" and not target.endswith(".exe"):
            target += ".exe"
        return str(self.home / self.namespace / target)

    def version_file(self) -> Path:
        return Path(self.path() + ".version")

    def is_installed(self) -> bool:
        return os.path.exists(self.path())

    def installed_version(self) -> str | None:
        try:
            return self.version_file().read_text().strip() or None
        except OSError:
            return None

    def info(self) -> ComponentInfo:
        return ComponentInfo(
            namespace=self.namespace,
            name=self.name,
            is_executable=self.is_executable,
            path=self.path(),
            installed=self.is_installed(),
            version=self.installed_version(),
        )

    def source_name(self, version: str) -> str:
        """Name of the downloadable archive for ``version``."""
        platform = _PLATFORM_NAMES.get(sys.platform, sys.platform)
        return f"{self.name}_{version.replace('.', '_')}_{platform}.gz"

    # -------------------------------------------------------------------------
    # Version resolution
    # -------------------------------------------------------------------------

    async def load_available_versions(self) -> list[str]:
        """Versions published for this component, newest first."""
        url = f"{self.source_url}/{self.name}.json"
        try:
            raw = await asyncio.to_thread(_fetch, url)
            data = json.loads(raw)
        except (urllib.error.URLError, OSError, ValueError) as e:
            raise ComponentInstallError(
                f"Failed to load available versions of {self.name}",
                component=self.name,
                url=url,
                cause=e,
            ) from e

        versions = data.get(self.name, []) if isinstance(data, dict) else data
        if not isinstance(versions, list):
            raise ComponentInstallError(
                f"Malformed version index for {self.name}", component=self.name, url=url
            )
        return sorted((str(v) for v in versions), key=_version_key, reverse=True)

    async def resolve_version(self, downloaded_version: str) -> str:
        """
        Version of the installed binary as reported by ``--version``.

        Falls back to ``downloaded_version`` when the output has no
        recognizable version string.
        """
        terminal = _DiscardTerminal()
        try:
            output = await self.run(terminal, str(self.home), ["--version"])
        except ToolchainRunError as e:
            output = e.output
        match = self.version_regex.search(output)
        return match.group(1) if match else downloaded_version

    # -------------------------------------------------------------------------
    # Installation
    # -------------------------------------------------------------------------

    async def ensure_installed(self, terminal: ITerminal, version: str = "") -> bool:
        """
        Install the component unless it is already present.

        Args:
            terminal: Sink for progress messages
            version: Required version; empty accepts any installed version

        Returns:
            True if a download happened
        """
        if self.is_installed() and (not version or self.installed_version() == version):
            return False

        if not version:
            versions = await self.load_available_versions()
            if not versions:
                raise ComponentInstallError(
                    f"No versions of {self.name} are available", component=self.name
                )
            version = versions[0]

        await self.install(terminal, version)
        return True

    async def install(self, terminal: ITerminal, version: str) -> None:
        """Download, unpack and record ``version`` of the component."""
        url = f"{self.source_url}/{self.source_name(version)}"
        terminal.log(f"Downloading {self.name} {version} from {url}")
        self.logger.info("Installing %s", version, component=self.name, url=url)

        try:
            compressed = await asyncio.to_thread(_fetch, url)
            data = gzip.decompress(compressed)
        except (urllib.error.URLError, OSError, EOFError) as e:
            raise ComponentInstallError(
                f"Failed to download {self.name} {version}",
                component=self.name,
                url=url,
                cause=e,
            ) from e

        target = Path(self.path())
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(data)
            if self.is_executable:
                mode = target.stat().st_mode
                target.chmod(mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        except OSError as e:
            raise ComponentInstallError(
                f"Failed to write {self.name} to {target}",
                component=self.name,
                cause=e,
            ) from e

        resolved = await self.resolve_version(version)
        self.version_file().write_text(resolved)
        terminal.log(f"{self.name} {resolved} installed")

    @classmethod
    async def ensure_installed_all(
        cls,
        terminal: ITerminal,
        components: Iterable[Component],
        versions: dict[str, str] | None = None,
    ) -> None:
        """
        Install every component that is missing.

        Installs are serialized so two validation passes never download the
        same binary concurrently.
        """
        versions = versions or {}
        if Component._install_lock is None:
            Component._install_lock = asyncio.Lock()
        async with Component._install_lock:
            for component in components:
                await component.ensure_installed(terminal, versions.get(component.name, ""))

    # -------------------------------------------------------------------------
    # Invocation
    # -------------------------------------------------------------------------

    async def run(self, terminal: ITerminal, working_dir: str, args: list[str]) -> str:
        """
        Run the component binary.

        All stdout and stderr is written through ``terminal``.

        Returns:
            Decoded stdout

        Raises:
            ComponentNotFoundError: If the binary is not installed
            ToolchainRunError: If the process exits non-zero
        """
        binary = self.path()
        if not self.is_installed():
            raise ComponentNotFoundError(
                f"{self.name} is not installed", component=self.name, path=binary
            )

        self.logger.debug("Running %s %s in %s", binary, args, working_dir)
        try:
            proc = await asyncio.create_subprocess_exec(
                binary,
                *args,
                cwd=working_dir,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
            raw_out, raw_err = await proc.communicate()
        except OSError as e:
            raise ToolchainRunError(
                f"Failed to start {self.name}", command=" ".join([binary, *args]), cause=e
            ) from e

        stdout = raw_out.decode("utf-8", errors="replace")
        stderr = raw_err.decode("utf-8", errors="replace")
        if stdout:
            terminal.write(stdout)
        if stderr:
            terminal.write_error(stderr)

        self.logger.debug("Exited with code %s", proc.returncode, component=self.name)
        if proc.returncode != 0:
            raise ToolchainRunError(
                f"{self.name} exited with code {proc.returncode}",
                exit_code=proc.returncode,
                command=" ".join([binary, *args]),
                output=stdout + stderr,
            )
        return stdout


class _DiscardTerminal:
    def log(self, *args) -> None:
        pass

    def write(self, text: str) -> None:
        pass

    def write_error(self, text: str) -> None:
        pass
