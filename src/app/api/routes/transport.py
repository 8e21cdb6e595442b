"""Transport optimization endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, File, Form, HTTPException, Request, Response, UploadFile, status

from ...schemas.transport import SessionStateModel
from ...services.transport.errors import ExportError
from ...services.transport.session import Phase, TransportSession

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/transport", tags=["transport"])


def _get_session(request: Request) -> TransportSession:
    return request.app.state.transport_session


@router.post("/optimize", response_model=SessionStateModel, status_code=status.HTTP_200_OK)
async def optimize(
    request: Request,
    stock_file: UploadFile | None = File(default=None, description="Stock dataset (.csv)"),
    cost_rate: str | None = Form(default=None, description="Cost rate (per km per unit)"),
    min_quantity: str | None = Form(default=None, description="Minimum quantity threshold"),
) -> SessionStateModel:
    session = _get_session(request)
    dataset = await stock_file.read() if stock_file is not None else None
    filename = stock_file.filename if stock_file is not None else None
    try:
        state = await session.submit_optimization(dataset, cost_rate, min_quantity, filename=filename)
    except Exception as exc:
        logger.exception(f"Error optimizing transport: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to optimize transport: {str(exc)}",
        ) from exc

    if state.phase is Phase.FAILURE:
        code = status.HTTP_400_BAD_REQUEST if state.error_kind == "validation" else status.HTTP_502_BAD_GATEWAY
        raise HTTPException(status_code=code, detail=state.message)
    return session.snapshot()


@router.get("/state", response_model=SessionStateModel, status_code=status.HTTP_200_OK)
def get_state(request: Request) -> SessionStateModel:
    return _get_session(request).snapshot()


@router.get("/export", status_code=status.HTTP_200_OK)
def export(request: Request) -> Response:
    try:
        artifact = _get_session(request).request_export()
    except ExportError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=exc.message) from exc

    return Response(
        content=artifact.content,
        media_type=artifact.media_type,
        headers={"Content-Disposition": f'attachment; filename="{artifact.filename}"'},
    )
