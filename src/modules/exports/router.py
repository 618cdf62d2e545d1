"""API for the clinic data export (multi-sheet XLSX workbook)."""

import io

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse

from src.core.exceptions import ExportDeliveryError, ExportFetchError, NotFoundError
from src.modules.exports.dependencies import get_export_orchestrator, get_export_storage
from src.modules.exports.schemas import (
    XLSX_CONTENT_TYPE,
    ExportFailure,
    ExportResponse,
    ExportStatusResponse,
)
from src.modules.exports.service import ExportOrchestrator
from src.modules.exports.storage import ExportStorage
from src.shared.schemas.base import ApiResponse

router = APIRouter(prefix="/exports", tags=["Exports"])


@router.post("", response_model=ApiResponse[ExportResponse])
async def trigger_export(
    orchestrator: ExportOrchestrator = Depends(get_export_orchestrator),
):
    """
    Generate the full data export and store it for download.

    409 while another export is running; 502 when the data could not be read;
    500 when the workbook could not be produced or stored.
    """
    result = await orchestrator.trigger_export()
    if not result.ok:
        if result.failure == ExportFailure.FETCH:
            raise ExportFetchError()
        raise ExportDeliveryError()
    return ApiResponse(
        message=result.message,
        data=ExportResponse(
            filename=result.filename,
            download_url=f"/api/v1{router.prefix}/{result.filename}",
        ),
    )


@router.get("/status", response_model=ApiResponse[ExportStatusResponse])
async def get_export_status(
    orchestrator: ExportOrchestrator = Depends(get_export_orchestrator),
):
    """Current export state, for disabling the export button while one runs."""
    return ApiResponse(
        data=ExportStatusResponse(state=orchestrator.state, is_running=orchestrator.is_running)
    )


@router.get("/{filename}")
async def download_export(
    filename: str,
    storage: ExportStorage = Depends(get_export_storage),
):
    """Download a previously generated export workbook."""
    try:
        content = await storage.load(filename)
    except FileNotFoundError:
        raise NotFoundError("Export file")
    return StreamingResponse(
        io.BytesIO(content),
        media_type=XLSX_CONTENT_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
