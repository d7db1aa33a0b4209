"""Diagnostic and operator endpoints."""

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse

from chathotel.dependencies import ServiceContainer, get_container
from chathotel.logging_config import get_logger
from chathotel.schemas.diagnostics import (
    GuestDetailResponse,
    ManualMessageRequest,
    ManualMessageResponse,
    StatusResponse,
)
from chathotel.services.health_service import get_guest_detail, get_system_status

logger = get_logger("admin")

router = APIRouter(tags=["admin"])


@router.get("/status", response_model=StatusResponse)
async def status(container: ServiceContainer = Depends(get_container)):
    return get_system_status(container.settings, container.sessions, container.started_at)


@router.get("/guests/{phone}", response_model=GuestDetailResponse)
async def guest_detail(phone: str, container: ServiceContainer = Depends(get_container)):
    detail = get_guest_detail(phone, container.sessions, container.history, container.context)
    if detail is None:
        raise HTTPException(status_code=404, detail=f"No session for {phone}")
    return detail


@router.post("/test-message", response_model=ManualMessageResponse)
async def send_test_message(request: ManualMessageRequest, container: ServiceContainer = Depends(get_container)):
    """Send a message straight through the transport. Sessions and history are untouched."""
    logger.info("Manual test message", extra={"context": {"to": request.to}})
    result = await container.whatsapp.deliver(request.to, request.message)

    response = ManualMessageResponse(
        success=result.ok,
        message_id=result.value,
        to=request.to,
        error=result.error,
    )
    if not result.ok:
        return JSONResponse(status_code=502, content=response.model_dump())
    return response
