"""Export orchestrator: fetch -> build -> assemble -> deliver, one run at a time."""

from collections.abc import Callable
from datetime import datetime, timezone

from loguru import logger

from src.core.exceptions import ExportInProgressError
from src.modules.exports.fetcher import RecordFetcher
from src.modules.exports.schemas import ExportFailure, ExportResult, ExportState
from src.modules.exports.sheets import build_all_sheets
from src.modules.exports.storage import ExportStorage
from src.modules.exports.workbook import assemble_workbook

_TRANSITIONS: dict[ExportState, frozenset[ExportState]] = {
    ExportState.IDLE: frozenset({ExportState.FETCHING}),
    ExportState.FETCHING: frozenset({ExportState.BUILDING, ExportState.FAILED}),
    ExportState.BUILDING: frozenset({ExportState.DELIVERING, ExportState.FAILED}),
    ExportState.DELIVERING: frozenset({ExportState.IDLE, ExportState.FAILED}),
    ExportState.FAILED: frozenset({ExportState.IDLE}),
}

SUCCESS_MESSAGE = "Export completed successfully"
FAILURE_MESSAGES: dict[ExportFailure, str] = {
    ExportFailure.FETCH: "Failed to export data",
    ExportFailure.DELIVERY: "Failed to export data. Please try again.",
}


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ExportOrchestrator:
    """
    Owns the export state machine.

    Idle -> Fetching -> Building -> Delivering -> Idle on success, any stage
    -> Failed -> Idle on error. A trigger while not Idle is rejected with
    ExportInProgressError; there is no queue. Failure causes are logged, the
    caller only gets a generic message and the failed stage.
    """

    def __init__(
        self,
        fetcher: RecordFetcher,
        storage: ExportStorage,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.fetcher = fetcher
        self.storage = storage
        self._clock = clock
        self._state = ExportState.IDLE

    @property
    def state(self) -> ExportState:
        return self._state

    @property
    def is_running(self) -> bool:
        return self._state != ExportState.IDLE

    def _transition(self, new_state: ExportState) -> None:
        if new_state not in _TRANSITIONS[self._state]:
            raise RuntimeError(f"Invalid export transition {self._state} -> {new_state}")
        logger.debug("Export state {} -> {}", self._state, new_state)
        self._state = new_state

    async def trigger_export(self) -> ExportResult:
        # Guard and first transition happen before any await.
        if self._state != ExportState.IDLE:
            raise ExportInProgressError(self._state.value)
        self._transition(ExportState.FETCHING)
        try:
            return await self._run()
        except BaseException:
            # Interrupted (e.g. task cancelled); release the guard.
            self._state = ExportState.IDLE
            raise

    async def _run(self) -> ExportResult:
        logger.info("Generating export file...")
        now = self._clock()
        try:
            data = await self.fetcher.fetch_all()

            self._transition(ExportState.BUILDING)
            sheets = build_all_sheets(data, now=now)

            self._transition(ExportState.DELIVERING)
            artifact = assemble_workbook(sheets, generated_on=now.date())
            await self.storage.save(artifact)
        except Exception as e:
            failure = (
                ExportFailure.FETCH if self._state == ExportState.FETCHING else ExportFailure.DELIVERY
            )
            logger.opt(exception=e).error("Export failed while {}: {!r}", self._state, e)
            self._transition(ExportState.FAILED)
            self._transition(ExportState.IDLE)
            return ExportResult(ok=False, failure=failure, message=FAILURE_MESSAGES[failure])

        self._transition(ExportState.IDLE)
        logger.info("Export completed successfully: {}", artifact.filename)
        return ExportResult(ok=True, filename=artifact.filename, message=SUCCESS_MESSAGE)
