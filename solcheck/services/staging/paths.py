"""
Path mapping between the contracts tree and its staged and build mirrors.

Staged sources live under the temp directory at the same relative depth as
their originals, with the leaf name prefixed by the transient marker. Both
slash conventions are handled because editor paths may come from Windows.
"""

from __future__ import annotations

import os
import re

from ...core.models.config import LayoutConfig

_EXTENSION_RE = re.compile(r"\.[^/\\.]+$")

BYTECODE_SUFFIX = ".tvc"
ABI_SUFFIX = ".abi.json"
BASE64_SUFFIX = ".base64"
CODE_SUFFIX = ".code"


def replace_extension(file_name: str, suffix: str) -> str:
    """Replace the last extension of ``file_name`` with ``suffix``."""
    if _EXTENSION_RE.search(file_name):
        return _EXTENSION_RE.sub(lambda _m: suffix, file_name)
    return file_name + suffix


def split_path(file_path: str) -> tuple[str, str]:
    """Split on the last forward or back slash, whichever comes later."""
    index = max(file_path.rfind("/"), file_path.rfind("\\"))
    if index < 0:
        return "", file_path
    return file_path[:index], file_path[index + 1 :]


def swap_segment(directory: str, source: str, target: str) -> str:
    """Replace the ``source`` directory segment with ``target``.

    Only the first interior occurrence and a trailing occurrence are swapped,
    for each slash convention.
    """
    src = re.escape(source)
    for sep in ("/", "\\"):
        s = re.escape(sep)
        directory = re.sub(f"{s}{src}{s}", lambda _m, sep=sep: f"{sep}{target}{sep}", directory, count=1)
        directory = re.sub(f"{s}{src}$", lambda _m, sep=sep: f"{sep}{target}", directory, count=1)
    return directory


class PathMapper:
    """Maps source locations to their temp and build counterparts."""

    def __init__(
        self,
        contracts_dir: str = "contracts",
        temp_dir: str = ".temp",
        build_dir: str = "build",
        marker: str = "~",
    ) -> None:
        self.contracts_dir = contracts_dir
        self.temp_dir = temp_dir
        self.build_dir = build_dir
        self.marker = marker

    @classmethod
    def from_layout(cls, layout: LayoutConfig) -> PathMapper:
        return cls(
            contracts_dir=layout.contracts_dir,
            temp_dir=layout.temp_dir,
            build_dir=layout.build_dir,
            marker=layout.transient_marker,
        )

    def to_staging_dir(self, directory: str) -> str:
        return swap_segment(directory, self.contracts_dir, self.temp_dir)

    def to_build_dir(self, directory: str) -> str:
        return swap_segment(directory, self.contracts_dir, self.build_dir)

    def from_staging_dir(self, directory: str) -> str:
        return swap_segment(directory, self.temp_dir, self.contracts_dir)

    def is_transient(self, file_name: str) -> bool:
        return file_name.startswith(self.marker)

    def strip_marker(self, file_name: str) -> str:
        if self.is_transient(file_name):
            return file_name[len(self.marker) :]
        return file_name

    def staged_path(self, file_path: str) -> str:
        """Where the transient copy of ``file_path`` is written."""
        directory, name = split_path(file_path)
        return os.path.join(self.to_staging_dir(directory), self.marker + name)

    def build_path(self, file_path: str, suffix: str) -> str:
        """Where the promoted artifact with ``suffix`` for ``file_path`` lands."""
        directory, name = split_path(file_path)
        return os.path.join(self.to_build_dir(directory), replace_extension(name, suffix))
