"""Wiring for the export orchestrator (one instance per application)."""

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from src.modules.exports.fetcher import RecordFetcher, SqlAlchemyRecordStore
from src.modules.exports.service import ExportOrchestrator
from src.modules.exports.storage import ExportStorage


def create_export_orchestrator(
    session_factory: async_sessionmaker[AsyncSession],
    storage: ExportStorage | None = None,
) -> ExportOrchestrator:
    fetcher = RecordFetcher(SqlAlchemyRecordStore(session_factory))
    return ExportOrchestrator(fetcher=fetcher, storage=storage or ExportStorage())


def get_export_orchestrator(request: Request) -> ExportOrchestrator:
    """The app-wide orchestrator; its state is the single in-flight guard."""
    return request.app.state.export_orchestrator


def get_export_storage(request: Request) -> ExportStorage:
    return request.app.state.export_orchestrator.storage
