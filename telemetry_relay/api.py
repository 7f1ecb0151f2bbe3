"""HTTP boundary for the relay: one method-routed endpoint plus health routes.

``POST`` ingests a record from the producer, ``GET`` serves the current
snapshot to polling consumers, ``OPTIONS`` answers CORS preflight, and every
other verb is rejected with 405. Every response carries permissive CORS
headers, and no error escapes a request.
"""

import json
from contextlib import asynccontextmanager
from typing import Any, Dict

from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse

from . import __version__
from .clock import format_timestamp
from .errors import InternalError, MethodNotAllowed, RelayError, ValidationError
from .health import register_health_routes
from .logging_setup import get_logger
from .metrics import ingest_rejected_total, internal_errors_total
from .service import RelayService


log = get_logger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
}

# Routed to the handler; any other verb on the relay path is answered by the middleware
RELAY_METHODS = ["GET", "POST", "OPTIONS", "PUT", "PATCH", "DELETE", "HEAD"]


async def read_ingest_body(request: Request) -> Dict[str, Any]:
    """Decode and validate an ingest body into ``RelayService.ingest`` kwargs."""
    raw = await request.body()
    try:
        body = json.loads(raw) if raw else None
    except ValueError:
        raise ValidationError("Invalid JSON body")

    if not isinstance(body, dict):
        raise ValidationError()

    record_type = body.get("record_type")
    payload = body.get("payload")
    if not isinstance(record_type, str) or not record_type or payload is None:
        raise ValidationError()

    return {
        "record_type": record_type,
        "payload": payload,
        "sim_timestamp": body.get("sim_timestamp"),
        "real_timestamp": body.get("real_timestamp"),
    }


def error_response(error: RelayError) -> JSONResponse:
    return JSONResponse(content={"error": error.message}, status_code=error.status_code)


def create_app(service: RelayService) -> FastAPI:
    """Build the ASGI app around an explicitly constructed service."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        service.running = True
        log.info("api_ready", path=service.settings.api_path)
        yield
        service.running = False

    app = FastAPI(
        title="Telemetry Relay",
        description="Latest-value relay for simulation telemetry records",
        version=__version__,
        lifespan=lifespan,
    )

    @app.middleware("http")
    async def add_cors_headers(request: Request, call_next):
        method = request.method.upper()
        if request.url.path == service.settings.api_path and method not in RELAY_METHODS:
            # Verbs the router never dispatches still count and get the relay 405
            service.record_request(method)
            log.warning("method_not_allowed", method=method)
            response = error_response(MethodNotAllowed())
        else:
            response = await call_next(request)
        for name, value in CORS_HEADERS.items():
            response.headers[name] = value
        return response

    @app.api_route(service.settings.api_path, methods=RELAY_METHODS)
    async def relay(request: Request) -> Response:
        method = request.method.upper()
        try:
            service.record_request(method)

            if method == "OPTIONS":
                return Response(status_code=200)

            if method == "POST":
                fields = await read_ingest_body(request)
                record = service.ingest(**fields)
                return JSONResponse(
                    content={
                        "success": True,
                        "message": f"{record.record_type} data received",
                        "timestamp": format_timestamp(service.clock()),
                    }
                )

            if method == "GET":
                return JSONResponse(content={"success": True, **service.snapshot_view()})

            raise MethodNotAllowed()

        except ValidationError as e:
            ingest_rejected_total.inc()
            log.warning("ingest_rejected", reason=e.message)
            return error_response(e)
        except MethodNotAllowed as e:
            log.warning("method_not_allowed", method=method)
            return error_response(e)
        except Exception as e:
            internal_errors_total.inc()
            log.error("request_failed", method=method, error=str(e))
            return error_response(InternalError())

    register_health_routes(app, service)
    return app
