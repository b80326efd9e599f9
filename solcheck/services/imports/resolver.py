"""
Import graph resolution.

Collects a document and every source it transitively imports so the whole
set can be staged and compiled together. Relative imports are resolved
against the importing file; package imports are looked up in the project's
dependency directory and then in ``node_modules``.
"""

from __future__ import annotations

import os
import re
from pathlib import Path

from ...core.models.source import CompileJob, ContractSource
from ..logging import component_logger

_IMPORT_PATH_RE = re.compile(r"""import\s+(?:[^'";]*?\s+from\s+)?['"]([^'"]+)['"]""")

NODE_MODULES = "node_modules"


def find_imports(content: str) -> list[str]:
    """Import paths in declaration order."""
    return _IMPORT_PATH_RE.findall(content)


class ImportResolver:
    """
    Builds a ``CompileJob`` from a document's import graph.

    Imports that cannot be located or read are skipped; the compiler will
    report them against the importing file.
    """

    logger = component_logger()

    def resolve(
        self,
        file_path: str,
        text: str,
        root_path: str,
        dependencies_dir: str = "lib",
        dependencies_contracts_dir: str = "src",
    ) -> CompileJob:
        file_path = os.path.normpath(file_path)
        sources: dict[str, ContractSource] = {}
        pending = [(file_path, text)]

        while pending:
            current, content = pending.pop(0)
            if current in sources:
                continue
            sources[current] = ContractSource(file_path=current, content=content)

            for import_path in find_imports(content):
                located = self.locate(
                    import_path, current, root_path, dependencies_dir, dependencies_contracts_dir
                )
                if located is None:
                    self.logger.debug("Unresolved import %r in %s", import_path, current)
                    continue
                if located in sources:
                    continue
                try:
                    imported = Path(located).read_text(encoding="utf-8")
                except OSError as e:
                    self.logger.debug("Skipping unreadable import %s: %s", located, e)
                    continue
                pending.append((located, imported))

        self.logger.debug("Resolved %d source(s)", len(sources), file=file_path)
        return CompileJob(sources=sources)

    def locate(
        self,
        import_path: str,
        importer: str,
        root_path: str,
        dependencies_dir: str,
        dependencies_contracts_dir: str,
    ) -> str | None:
        """Find the file an import refers to, or None."""
        if import_path.startswith("."):
            candidate = os.path.normpath(os.path.join(os.path.dirname(importer), import_path))
            return candidate if os.path.isfile(candidate) else None

        package, _sep, rest = import_path.replace("\\", "/").partition("/")
        candidates = []
        if rest:
            candidates.append(
                os.path.join(root_path, dependencies_dir, package, dependencies_contracts_dir, rest)
            )
        candidates.append(os.path.join(root_path, dependencies_dir, import_path))
        candidates.append(os.path.join(root_path, NODE_MODULES, import_path))
        candidates.append(os.path.join(root_path, import_path))

        for candidate in candidates:
            candidate = os.path.normpath(candidate)
            if os.path.isfile(candidate):
                return candidate
        return None
