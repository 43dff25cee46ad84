from typing import Any

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    error_code: str
    message: str
    upstream_status: int | None = None


class StatusResponse(BaseModel):
    initialized: bool


class BridgeError(BaseModel):
    message: str
    code: str | None = None


class BridgeResponse(BaseModel):
    method: str
    status: str
    data: Any = None
    error: BridgeError | None = None
