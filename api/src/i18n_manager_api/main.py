import logging
import os
import time
import traceback

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from i18n_manager_api.errors import I18nError, IntegrityViolation
from i18n_manager_api.logging_config import configure_logging
from i18n_manager_api.routers.keys import router as keys_router
from i18n_manager_api.routers.languages import router as languages_router
from i18n_manager_api.routers.messages import router as messages_router
from i18n_manager_api.routers.translate import router as translate_router
from i18n_manager_api.routers.validation import router as validation_router

configure_logging(
    service_name=os.getenv("LOG_SERVICE_NAME", "api"),
)

logger = logging.getLogger(__name__)

app = FastAPI(title="i18n Message Manager API")


class ErrorLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):  # type: ignore[override]
        start = time.perf_counter()
        try:
            response = await call_next(request)
            if 500 <= response.status_code < 600:
                duration_ms = int((time.perf_counter() - start) * 1000)
                logger.error(
                    "HTTP 5xx response",
                    extra={
                        "method": request.method,
                        "path": request.url.path,
                        "status_code": response.status_code,
                        "client": request.client.host if request.client else None,
                        "duration_ms": duration_ms,
                    },
                )
            return response
        except Exception as exc:  # noqa: BLE001 - log every unhandled exception, then re-raise
            duration_ms = int((time.perf_counter() - start) * 1000)
            logger.error(
                "Unhandled exception during request",
                extra={
                    "method": request.method,
                    "path": request.url.path,
                    "client": request.client.host if request.client else None,
                    "duration_ms": duration_ms,
                    "exception_type": type(exc).__name__,
                    "exception_message": str(exc),
                    "traceback": traceback.format_exc(),
                },
            )
            raise


app.add_middleware(ErrorLoggingMiddleware)


@app.exception_handler(I18nError)
async def handle_i18n_error(request: Request, exc: I18nError) -> JSONResponse:
    log = logger.error if isinstance(exc, IntegrityViolation) else logger.warning
    log(
        "Request rejected",
        extra={
            "method": request.method,
            "path": request.url.path,
            "status_code": exc.status_code,
            "error_code": exc.code,
            "error": exc.message,
        },
    )
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message, "code": exc.code})


@app.get("/health")
def healthcheck() -> dict:
    return {"status": "ok"}


app.include_router(messages_router)
app.include_router(languages_router)
app.include_router(keys_router)
app.include_router(validation_router)
app.include_router(translate_router)
