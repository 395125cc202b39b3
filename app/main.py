import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.api.routes import health_router
from app.api.v1 import v1_router
from app.api.v1.envelope import error
from app.core.config import settings
from app.core.logging_config import setup_logging
from app.domain.errors import BillingError, FormatError

setup_logging()
logger = logging.getLogger("main")

app = FastAPI(title="GST Billing", debug=settings.DEBUG)


@app.on_event("startup")
async def startup():
    if settings.CREATE_TABLES_ON_STARTUP:
        from app.core.db import engine
        from app.infrastructure.db.base import Base

        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)


@app.exception_handler(BillingError)
async def billing_error_handler(request: Request, exc: BillingError):
    """Bad caller data: surfaced as an input-rejection message."""
    # FormatError only arises from stored invoice numbers
    code = status.HTTP_409_CONFLICT if isinstance(exc, FormatError) else status.HTTP_422_UNPROCESSABLE_ENTITY
    logger.warning("%s on %s %s: %s", type(exc).__name__, request.method, request.url.path, exc.message)
    return JSONResponse(
        status_code=code,
        content=error(exc.message, errors=[{"type": type(exc).__name__}]),
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Schema-level rejections (missing or mistyped fields) in the error envelope."""
    errors = [
        {"type": err["type"], "loc": [str(part) for part in err["loc"]], "msg": err["msg"]}
        for err in exc.errors()
    ]
    logger.warning("RequestValidationError on %s %s: %d errors", request.method, request.url.path, len(errors))
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=error("Request validation failed", errors=errors),
    )


app.include_router(health_router)
app.include_router(v1_router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host="0.0.0.0", port=8000)
