"""
Import statement rewriting for staged sources.

A staged file must import the staged copies of its same-project
dependencies, so the module name in each import gains the transient marker.
Imports that go through a dependency package directory are left alone.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

_IMPORT_RE = re.compile(
    r"""
    (?P<head>
        import\s+
        (?:[^'";]*?\s+from\s+)?          # optional `{A} from` / `* as A from`
        (?P<quote>['"])
        (?P<dir>(?:[^'"]*[/\\])?)        # everything up to the last slash
    )
    (?P<name>[^/\\.'"]*)                 # module name
    (?P<tail>\.[^'"]*(?P=quote))         # extension(s) and closing quote
    """,
    re.VERBOSE,
)

DEFAULT_DEPENDENCY_MARKERS = ("node_modules",)


def is_dependency_path(import_dir: str, dependency_markers: Iterable[str]) -> bool:
    """True if any directory segment of the import path is a dependency marker."""
    segments = set(re.split(r"[/\\]", import_dir))
    return any(marker in segments for marker in dependency_markers)


def rewrite_imports(
    content: str,
    marker: str = "~",
    dependency_markers: Iterable[str] = DEFAULT_DEPENDENCY_MARKERS,
) -> str:
    """Prefix ``marker`` to the module name of every same-project import.

    Statements whose path contains a dependency marker segment are returned
    byte-identical, as is everything in a statement except the module name.
    """
    markers = tuple(dependency_markers)

    def _replace(match: re.Match) -> str:
        if is_dependency_path(match.group("dir"), markers):
            return match.group(0)
        name = match.group("name")
        if not name or name.startswith(marker):
            return match.group(0)
        return f"{match.group('head')}{marker}{name}{match.group('tail')}"

    return _IMPORT_RE.sub(_replace, content)
