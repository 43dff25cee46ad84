import logging

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.routing import Mount

from drivebridge.config import get_settings
from drivebridge.exceptions import (
    AuthenticationError,
    IntegrationError,
    MissingParameterError,
    TransportError,
)
from drivebridge.mcp_server import mcp
from drivebridge.models.common import ErrorResponse, StatusResponse
from drivebridge.routers.bridge import router as bridge_router
from drivebridge.routers.drive import router as drive_router
from drivebridge.services import drive as drive_service


# --- Localhost-only middleware ---

class LocalhostOnlyMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        client_host = request.client.host if request.client else None
        if client_host not in ("127.0.0.1", "::1", "localhost"):
            return JSONResponse(
                status_code=403,
                content={"error_code": "forbidden", "message": "Localhost access only"},
            )
        return await call_next(request)


# --- FastAPI app ---

api = FastAPI(title="Drivebridge", version="0.1.0")
api.include_router(drive_router)
api.include_router(bridge_router)


@api.get("/api/status")
def api_status() -> StatusResponse:
    return StatusResponse(initialized=drive_service.get_client().initialized)


# --- Exception handlers ---

def _error(status_code: int, error: ErrorResponse) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=error.model_dump(exclude_none=True))


@api.exception_handler(AuthenticationError)
async def auth_error_handler(request: Request, exc: AuthenticationError):
    return _error(401, ErrorResponse(error_code=exc.code or "auth_error", message=str(exc)))


@api.exception_handler(MissingParameterError)
async def missing_parameter_handler(request: Request, exc: MissingParameterError):
    return _error(400, ErrorResponse(error_code="missing_parameter", message=str(exc)))


@api.exception_handler(IntegrationError)
async def integration_error_handler(request: Request, exc: IntegrationError):
    return _error(
        502,
        ErrorResponse(error_code="integration_error", message=str(exc), upstream_status=exc.status_code),
    )


@api.exception_handler(TransportError)
async def transport_error_handler(request: Request, exc: TransportError):
    return _error(503, ErrorResponse(error_code="transport_error", message=str(exc)))


# --- Starlette root app ---

mcp_app = mcp.http_app(path="/", stateless_http=True)

app = Starlette(
    middleware=[Middleware(LocalhostOnlyMiddleware)],
    routes=[
        Mount("/mcp", app=mcp_app),
        Mount("/", app=api),
    ],
    lifespan=mcp_app.lifespan,
)


def run():
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(
        "drivebridge.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
