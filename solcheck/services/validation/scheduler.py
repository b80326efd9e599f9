"""
Validation scheduler.

Reacts to editor document events and decides when a validation pass runs.
A pass lints the document, compiles it together with its imports and
publishes one combined diagnostic set.

Scheduling rules:
    - edits are debounced per document; further edits extend the wait
    - at most one pass per document is in flight; an edit during a pass
      queues exactly one follow-up pass
    - compiles are serialized across all documents and sweeps
    - one configuration sweep at a time
"""

from __future__ import annotations

import asyncio
from collections.abc import Coroutine
from typing import Any

from ...core.container import get_container
from ...core.exceptions import SolcheckPluginError
from ...core.interfaces.linter import ILinter
from ...core.interfaces.publisher import IDiagnosticPublisher
from ...core.models.config import ValidationConfig
from ...core.models.diagnostic import EditorDiagnostic
from ...core.models.source import SourceDocument
from ...core.models.validation import ValidationPhase, ValidationState
from ..compilation import CompilationDriver
from ..logging import component_logger
from .documents import DocumentStore


class ValidationScheduler:
    """
    Coordinates linting and compilation for open documents.

    Usage:
        scheduler = ValidationScheduler(driver, publisher, settings, root_path=root)
        await scheduler.on_open(document)
        await scheduler.on_change(edited)
        await scheduler.wait_idle()
    """

    logger = component_logger()

    def __init__(
        self,
        driver: CompilationDriver,
        publisher: IDiagnosticPublisher,
        settings=None,
        linter: ILinter | None = None,
        root_path: str | None = None,
    ) -> None:
        self.driver = driver
        self.publisher = publisher
        self.root_path = root_path
        self.documents = DocumentStore()
        self.states: dict[str, ValidationState] = {}
        self.validation = ValidationConfig()
        self.linter: ILinter | None = None

        self._compile_lock = asyncio.Lock()
        self._sweeping = False
        self._tasks: set[asyncio.Task] = set()

        self.apply_settings(settings, linter=linter)

    # -------------------------------------------------------------------------
    # Configuration
    # -------------------------------------------------------------------------

    def apply_settings(self, settings=None, linter: ILinter | None = None) -> None:
        """
        Re-read validation tunables and rebuild the linter.

        Args:
            settings: ``SolcheckSettings`` or a bare ``ValidationConfig``
            linter: Explicit linter, bypassing the plugin registry
        """
        if settings is not None:
            self.validation = getattr(settings, "validation", settings)

        if linter is None and self.validation.linter:
            try:
                linter = get_container().get_linter(self.validation.linter, self.root_path)
            except SolcheckPluginError as e:
                self.logger.warning("Linter %s unavailable: %s", self.validation.linter, e)

        self.linter = linter
        if self.linter is not None:
            self.linter.set_ide_rules(self.validation.linter_rules())

    async def on_configuration_change(self, settings) -> None:
        self.apply_settings(settings)
        if self.validation.enabled_as_you_type_compilation_error_check:
            await self.validate_all()

    # -------------------------------------------------------------------------
    # Document events
    # -------------------------------------------------------------------------

    async def on_open(self, document: SourceDocument) -> None:
        self.documents.put(document)
        state = self._state(document.uri)
        if state.busy or self._sweeping:
            return
        await self.validate(document)

    async def on_change(self, document: SourceDocument) -> None:
        """Record an edit and (re)arm the debounce for its document."""
        self.documents.put(document)
        state = self._state(document.uri)
        state.last_requested_at = self._now()

        if state.phase == ValidationPhase.RUNNING:
            state.rerun_requested = True
        elif state.phase == ValidationPhase.IDLE:
            self._schedule(document.uri, state)

    async def on_save(self, document: SourceDocument) -> None:
        self.documents.put(document)
        await asyncio.to_thread(self.driver.staging.promote, document.path)

    async def on_close(self, document: SourceDocument) -> None:
        """Clear the document's diagnostics and promote its artifacts."""
        self.documents.remove(document.uri)
        self.states.pop(document.uri, None)
        self.publisher.publish(document.uri, [])
        await asyncio.to_thread(self.driver.staging.promote, document.path)

    # -------------------------------------------------------------------------
    # Passes
    # -------------------------------------------------------------------------

    async def validate(self, document: SourceDocument) -> None:
        """
        Run one validation pass and publish its diagnostics.

        The document's phase always returns to idle. An edit that arrived
        while the pass ran schedules one follow-up pass.
        """
        state = self._state(document.uri)
        if state.phase == ValidationPhase.RUNNING:
            state.rerun_requested = True
            return

        state.phase = ValidationPhase.RUNNING
        state.rerun_requested = False
        try:
            diagnostics = await self._run_pass(document)
            if document.uri in self.documents:
                self.publisher.publish(document.uri, diagnostics)
                self.logger.debug("Published %d diagnostic(s)", len(diagnostics), uri=document.uri)
        except Exception as e:
            self.logger.error("Validation pass failed: %s", e, uri=document.uri, exc_info=True)
        finally:
            rerun = state.rerun_requested
            state.phase = ValidationPhase.IDLE
            state.rerun_requested = False
            state.passes += 1

        if rerun and self.states.get(document.uri) is state:
            self._schedule(document.uri, state)

    async def validate_all(self) -> None:
        """Validate every open document once; ignored while a sweep runs."""
        if self._sweeping:
            self.logger.debug("Validation sweep already running")
            return

        self._sweeping = True
        try:
            for document in self.documents.all():
                state = self.states.get(document.uri)
                if state is not None and state.busy:
                    continue
                await self.validate(document)
        finally:
            self._sweeping = False

    async def wait_idle(self) -> None:
        """Wait for every scheduled pass, including follow-ups, to finish."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks))

    async def _run_pass(self, document: SourceDocument) -> list[EditorDiagnostic]:
        diagnostics: list[EditorDiagnostic] = []

        if self.linter is not None:
            try:
                diagnostics.extend(
                    await asyncio.to_thread(self.linter.validate, document.path, document.text)
                )
            except Exception as e:
                self.logger.warning("Linting failed: %s", e, uri=document.uri, linter=self.linter.name)

        if self.validation.enabled_as_you_type_compilation_error_check:
            try:
                async with self._compile_lock:
                    errors = await self.driver.compile_document(
                        document,
                        self.root_path,
                        self.validation.package_default_dependencies_directory,
                        self.validation.package_default_dependencies_contracts_directory,
                    )
            except Exception as e:
                self.logger.warning("Compilation failed: %s", e, uri=document.uri)
            else:
                # Diagnostics located in imported files are not shown here.
                diagnostics.extend(
                    error.diagnostic for error in errors if error.file_name == document.basename
                )

        return diagnostics

    async def _debounced(self, uri: str) -> None:
        while True:
            state = self.states.get(uri)
            if state is None:
                return
            remaining = state.last_requested_at + self.validation.delay_seconds - self._now()
            if remaining <= 0:
                break
            await asyncio.sleep(remaining)

        document = self.documents.get(uri)
        if document is None:
            return
        # Let validate() take the document from scheduled to running.
        state.phase = ValidationPhase.IDLE
        await self.validate(document)

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _state(self, uri: str) -> ValidationState:
        if uri not in self.states:
            self.states[uri] = ValidationState()
        return self.states[uri]

    def _schedule(self, uri: str, state: ValidationState) -> None:
        state.phase = ValidationPhase.SCHEDULED
        self._spawn(self._debounced(uri))

    def _spawn(self, coro: Coroutine[Any, Any, None]) -> asyncio.Task:
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    @staticmethod
    def _now() -> float:
        return asyncio.get_running_loop().time()
