"""
Parsing of compiler error output into diagnostics.

The compiler prints one block per problem::

    Error: Undeclared identifier.
      --> ~Token.sol:10:5:
       |
    10 |     foo();
       |     ^^^^

Blocks are separated by a blank line. Line endings depend on the platform
the toolchain runs on, so the parser is selected once per driver.
"""

from __future__ import annotations

import ntpath
import posixpath
import sys
from dataclasses import dataclass
from typing import Callable

from pydantic import ValidationError

from ...core.models.diagnostic import Diagnostic
from ..logging import component_logger
from ..staging.paths import PathMapper, split_path

MIN_BLOCK_LINES = 5
LOCATION_MARKER = "-->"
CARET = "^"


@dataclass(frozen=True)
class LayoutConvention:
    """Line and block separators of compiler output."""

    line_separator: str
    block_separator: str


POSIX_CONVENTION = LayoutConvention(line_separator="\n", block_separator="\n\n")
WINDOWS_CONVENTION = LayoutConvention(line_separator="\r\n", block_separator="\r\n\r\n")


class MalformedBlockError(ValueError):
    """A block does not follow the diagnostic grammar."""


class DiagnosticParser:
    """
    Turns raw compiler output into ``Diagnostic`` records.

    Subclasses only choose the layout convention and how paths are joined
    and resolved.
    Malformed blocks are skipped; a batch never fails as a whole.
    """

    convention: LayoutConvention = POSIX_CONVENTION
    join: Callable[..., str] = staticmethod(posixpath.join)
    absolute: Callable[[str], str] = staticmethod(posixpath.abspath)

    logger = component_logger()

    def __init__(self, mapper: PathMapper | None = None) -> None:
        self.mapper = mapper or PathMapper()

    def parse(self, output: str | list[str]) -> list[Diagnostic]:
        """
        Parse compiler output.

        Each captured block is split and parsed on its own, so progress
        lines logged between tool runs never merge with a diagnostic, and a
        block from one write never swallows the first block of the next.

        Args:
            output: Whole output, or the ordered blocks written to a terminal

        Returns:
            One diagnostic per well-formed block, in output order
        """
        chunks = [output] if isinstance(output, str) else output

        diagnostics = []
        for chunk in chunks:
            for block in chunk.split(self.convention.block_separator):
                lines = block.lstrip("\r\n").split(self.convention.line_separator)
                if len(lines) < MIN_BLOCK_LINES:
                    continue
                try:
                    diagnostics.append(self.parse_block(lines))
                except MalformedBlockError as e:
                    self.logger.debug("Skipping malformed diagnostic block: %s", e)
        return diagnostics

    def parse_block(self, lines: list[str]) -> Diagnostic:
        """
        Parse one block already split into lines.

        The severity is the header up to its first ``:``; the message is
        everything after it, so messages quoting code keep their own colons.
        A directory other than ``.`` is resolved, giving an absolute path.
        """
        severity, sep, message = lines[0].partition(":")
        if not sep or not severity.strip():
            raise MalformedBlockError(f"no severity in {lines[0]!r}")

        file_ref, line, column = self.parse_location(lines[1])
        directory, name = split_path(file_ref)
        name = self.mapper.strip_marker(name.strip())
        directory = self.mapper.from_staging_dir(directory.strip())

        if directory in ("", "."):
            path = name
        else:
            path = self.absolute(self.join(directory, name))

        try:
            return Diagnostic(
                severity=severity.strip(),
                message=message.strip(),
                file=name,
                path=path,
                line=line,
                column=column,
                length=lines[4].count(CARET),
            )
        except ValidationError as e:
            raise MalformedBlockError(f"invalid diagnostic in {lines[1]!r}: {e}") from e

    def parse_location(self, text: str) -> tuple[str, int, int]:
        """Split ``--> file:line:column[:]`` into its parts."""
        location = text.strip()
        if location.startswith(LOCATION_MARKER):
            location = location[len(LOCATION_MARKER) :].strip()
        if location.endswith(":"):
            location = location[:-1]

        parts = location.rsplit(":", 2)
        if len(parts) != 3:
            raise MalformedBlockError(f"no line and column in {text!r}")
        file_ref, line, column = parts
        try:
            position = int(line), int(column)
        except ValueError as e:
            raise MalformedBlockError(f"non-numeric position in {text!r}") from e
        if min(position) < 0:
            raise MalformedBlockError(f"negative position in {text!r}")
        return file_ref.strip(), position[0], position[1]


class PosixDiagnosticParser(DiagnosticParser):
    convention = POSIX_CONVENTION
    join = staticmethod(posixpath.join)
    absolute = staticmethod(posixpath.abspath)


class WindowsDiagnosticParser(DiagnosticParser):
    convention = WINDOWS_CONVENTION
    join = staticmethod(ntpath.join)
    absolute = staticmethod(ntpath.abspath)


def select_parser(platform: str | None = None, mapper: PathMapper | None = None) -> DiagnosticParser:
    """Pick the parser matching the host platform."""
    platform = platform or sys.platform
    if platform == "win32":
        return WindowsDiagnosticParser(mapper)
    return PosixDiagnosticParser(mapper)
