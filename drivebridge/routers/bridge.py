from fastapi import APIRouter, Body

from drivebridge.bridge import DriveBridge, PluginCall
from drivebridge.models.common import BridgeError, BridgeResponse
from drivebridge.services import drive as drive_service

router = APIRouter(prefix="/api/bridge", tags=["bridge"])


@router.post("/{method}")
def call_method(method: str, params: dict | None = Body(default=None)) -> BridgeResponse:
    """Run one shell method call. Rejections are part of the contract and come back as HTTP 200."""
    call = PluginCall(method, params)
    DriveBridge(drive_service.get_client()).handle(method, call)
    if call.status == "rejected":
        return BridgeResponse(
            method=method,
            status="rejected",
            error=BridgeError(message=call.error_message or "", code=call.error_code),
        )
    return BridgeResponse(method=method, status="resolved", data=call.data)
