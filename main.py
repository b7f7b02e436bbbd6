import sys
from typing import Any, Optional

import structlog
import uvicorn
from fastapi import Body, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from bfhl import envelope
from bfhl.ai_gateway import AIGateway
from bfhl.config import Settings
from bfhl.dispatcher import INTERNAL_ERROR_MESSAGE, Dispatcher
from bfhl.logging_config import configure_logging
from bfhl.middleware import MaxBodySizeMiddleware

logger = structlog.get_logger(__name__)


def allow_unbounded_int_output() -> None:
    # LCM and Fibonacci results can run past the default 4300-digit
    # int-to-str limit of Python 3.11+, which json.dumps would refuse.
    if hasattr(sys, "set_int_max_str_digits"):
        sys.set_int_max_str_digits(0)


def create_app(settings: Settings, gateway: Optional[AIGateway] = None) -> FastAPI:
    app = FastAPI(title="BFHL API")
    dispatcher = Dispatcher(settings, gateway or AIGateway(settings))
    email = settings.official_email

    allow_unbounded_int_output()

    app.add_middleware(
        MaxBodySizeMiddleware,
        max_body_size=settings.max_body_bytes,
        official_email=email,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    def error_response(status_code: int, message: str) -> JSONResponse:
        return JSONResponse(
            status_code=status_code,
            content=envelope.failure(email, message).to_dict(),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        # The /bfhl body is untyped, so a validation error means the JSON itself was bad.
        return error_response(400, "Invalid JSON")

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error", path=request.url.path)
        return error_response(500, INTERNAL_ERROR_MESSAGE)

    @app.get("/health")
    def health():
        return envelope.health(email).to_dict()

    @app.post("/bfhl")
    def bfhl(payload: Any = Body(None)):
        # Sync handler: FastAPI runs it in the threadpool, so a slow AI
        # provider call does not block other requests.
        status_code, result = dispatcher.handle(payload)
        return JSONResponse(status_code=status_code, content=result.to_dict())

    return app


settings = Settings()
configure_logging(settings.log_level)
app = create_app(settings)


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=settings.port)
