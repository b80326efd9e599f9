"""
Unit tests for ValidationScheduler.

The compilation driver and linter are mocks; passes are driven directly or
through document events with a zero debounce delay.
"""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from solcheck.core.container import get_container
from solcheck.core.models.config import ValidationConfig
from solcheck.core.models.diagnostic import CompilerError, EditorDiagnostic
from solcheck.core.models.source import SourceDocument
from solcheck.core.models.validation import ValidationPhase
from solcheck.services.validation import CollectingPublisher, ValidationScheduler

URI = "file:///p/contracts/A.sol"


def make_document(text="contract A {}", uri=URI, path="/p/contracts/A.sol"):
    return SourceDocument(uri=uri, path=path, text=text)


def compiler_error(file_name, message, line=0):
    return CompilerError(
        file_name=file_name,
        diagnostic=EditorDiagnostic.at(line, 0, 1, message),
    )


@pytest.fixture
def driver():
    driver = MagicMock()
    driver.compile_document = AsyncMock(return_value=[])
    return driver


@pytest.fixture
def publisher():
    return CollectingPublisher()


@pytest.fixture
def scheduler(driver, publisher):
    s = ValidationScheduler(driver, publisher, ValidationConfig(validation_delay=0))
    s.logger = MagicMock()
    return s


class TestValidate:
    """Tests for a single validation pass."""

    @pytest.mark.asyncio
    async def test_publishes_compiler_diagnostics_for_document(self, scheduler, driver, publisher):
        driver.compile_document.return_value = [
            compiler_error("A.sol", "Undeclared identifier."),
            compiler_error("B.sol", "Error in import"),
        ]
        document = make_document()
        scheduler.documents.put(document)

        await scheduler.validate(document)

        assert [d.message for d in publisher.diagnostics[URI]] == ["Undeclared identifier."]
        driver.compile_document.assert_awaited_once_with(document, None, "lib", "src")

    @pytest.mark.asyncio
    async def test_linter_diagnostics_come_first(self, driver, publisher):
        linter = MagicMock()
        linter.validate.return_value = [EditorDiagnostic.at(0, 0, 0, "lint", source="solhint")]
        driver.compile_document.return_value = [compiler_error("A.sol", "compile")]
        scheduler = ValidationScheduler(driver, publisher, ValidationConfig(), linter=linter)
        document = make_document()
        scheduler.documents.put(document)

        await scheduler.validate(document)

        assert [d.message for d in publisher.diagnostics[URI]] == ["lint", "compile"]
        linter.validate.assert_called_once_with(document.path, document.text)

    @pytest.mark.asyncio
    async def test_compilation_disabled(self, driver, publisher):
        scheduler = ValidationScheduler(
            driver,
            publisher,
            ValidationConfig(enabled_as_you_type_compilation_error_check=False),
        )
        document = make_document()
        scheduler.documents.put(document)

        await scheduler.validate(document)

        driver.compile_document.assert_not_awaited()
        assert publisher.diagnostics[URI] == []

    @pytest.mark.asyncio
    async def test_linter_failure_still_publishes_compiler_output(self, driver, publisher):
        linter = MagicMock()
        linter.validate.side_effect = RuntimeError("solhint missing")
        driver.compile_document.return_value = [compiler_error("A.sol", "compile")]
        scheduler = ValidationScheduler(driver, publisher, ValidationConfig(), linter=linter)
        scheduler.logger = MagicMock()
        document = make_document()
        scheduler.documents.put(document)

        await scheduler.validate(document)

        assert [d.message for d in publisher.diagnostics[URI]] == ["compile"]
        scheduler.logger.warning.assert_called_once()

    @pytest.mark.asyncio
    async def test_state_cleared_when_compile_raises(self, scheduler, driver, publisher):
        driver.compile_document.side_effect = RuntimeError("toolchain exploded")
        document = make_document()
        scheduler.documents.put(document)

        await scheduler.validate(document)

        state = scheduler.states[URI]
        assert state.phase == ValidationPhase.IDLE
        assert state.rerun_requested is False
        assert publisher.diagnostics[URI] == []

    @pytest.mark.asyncio
    async def test_state_cleared_when_publish_raises(self, driver):
        publisher = MagicMock()
        publisher.publish.side_effect = RuntimeError("transport closed")
        scheduler = ValidationScheduler(driver, publisher, ValidationConfig())
        scheduler.logger = MagicMock()
        document = make_document()
        scheduler.documents.put(document)

        await scheduler.validate(document)

        assert scheduler.states[URI].phase == ValidationPhase.IDLE
        scheduler.logger.error.assert_called_once()


class TestScheduling:
    """Tests for debounce and single-flight behaviour."""

    @pytest.mark.asyncio
    async def test_no_second_pass_while_running(self, scheduler, driver):
        started = asyncio.Event()
        release = asyncio.Event()

        async def slow_compile(*args):
            started.set()
            await release.wait()
            return []

        driver.compile_document.side_effect = slow_compile
        document = make_document()
        await scheduler.on_change(document)
        await started.wait()

        await scheduler.on_change(make_document("contract A { uint x; }"))
        await scheduler.on_change(make_document("contract A { uint y; }"))

        assert driver.compile_document.await_count == 1
        assert scheduler.states[URI].rerun_requested is True

        release.set()
        await scheduler.wait_idle()

        assert driver.compile_document.await_count == 2
        last_document = driver.compile_document.await_args.args[0]
        assert last_document.text == "contract A { uint y; }"
        assert scheduler.states[URI].phase == ValidationPhase.IDLE

    @pytest.mark.asyncio
    async def test_edits_during_debounce_coalesce(self, driver, publisher):
        scheduler = ValidationScheduler(driver, publisher, ValidationConfig(validation_delay=50))

        await scheduler.on_change(make_document("v1"))
        await scheduler.on_change(make_document("v2"))
        await scheduler.on_change(make_document("v3"))
        assert scheduler.states[URI].phase == ValidationPhase.SCHEDULED

        await scheduler.wait_idle()

        driver.compile_document.assert_awaited_once()
        assert driver.compile_document.await_args.args[0].text == "v3"

    @pytest.mark.asyncio
    async def test_open_skips_busy_document(self, scheduler, driver):
        document = make_document()
        scheduler._state(URI).phase = ValidationPhase.SCHEDULED

        await scheduler.on_open(document)

        driver.compile_document.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_open_validates_immediately(self, scheduler, driver, publisher):
        await scheduler.on_open(make_document())

        driver.compile_document.assert_awaited_once()
        assert URI in publisher.diagnostics


class TestDocumentLifecycle:
    """Tests for save and close events."""

    @pytest.mark.asyncio
    async def test_close_publishes_empty_set_and_promotes(self, scheduler, driver, publisher):
        document = make_document()
        await scheduler.on_open(document)

        await scheduler.on_close(document)

        assert publisher.diagnostics[URI] == []
        assert URI not in scheduler.states
        assert URI not in scheduler.documents
        driver.staging.promote.assert_called_once_with(document.path)

    @pytest.mark.asyncio
    async def test_save_promotes(self, scheduler, driver):
        document = make_document()

        await scheduler.on_save(document)

        driver.staging.promote.assert_called_once_with(document.path)


class TestConfiguration:
    """Tests for configuration changes and sweeps."""

    @pytest.mark.asyncio
    async def test_configuration_change_revalidates_all(self, scheduler, driver):
        first = make_document()
        second = make_document(uri="file:///p/contracts/B.sol", path="/p/contracts/B.sol")
        scheduler.documents.put(first)
        scheduler.documents.put(second)

        await scheduler.on_configuration_change(ValidationConfig(validation_delay=10))

        assert driver.compile_document.await_count == 2
        assert scheduler.validation.validation_delay == 10

    @pytest.mark.asyncio
    async def test_configuration_change_without_as_you_type(self, scheduler, driver):
        scheduler.documents.put(make_document())

        await scheduler.on_configuration_change(
            ValidationConfig(enabled_as_you_type_compilation_error_check=False)
        )

        driver.compile_document.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_sweep_request_ignored_while_sweeping(self, scheduler, driver):
        scheduler.documents.put(make_document())
        scheduler._sweeping = True

        await scheduler.validate_all()

        driver.compile_document.assert_not_awaited()

    def test_linter_built_from_registry_with_rules(self, driver, publisher):
        linter_cls = MagicMock()
        get_container().register_linter("solhint", linter_cls)

        scheduler = ValidationScheduler(
            driver,
            publisher,
            ValidationConfig(linter=True, solhint_rules={"quotes": ["error", "double"]}),
            root_path="/p",
        )

        linter_cls.assert_called_once_with("/p")
        scheduler.linter.set_ide_rules.assert_called_once_with({"quotes": ["error", "double"]})

    def test_unknown_linter_is_logged(self, driver, publisher):
        scheduler = ValidationScheduler(driver, publisher, ValidationConfig(linter="solium"))

        assert scheduler.linter is None
