import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from payslip_api.api.routes import health
from payslip_api.core.config import settings
from payslip_api.core.logging import configure_logging, get_logger
from payslip_api.core.monitoring import configure_error_monitoring, report_exception
from payslip_api.core.observability import configure_observability
from payslip_api.db.schema import ensure_schema
from payslip_api.db.session import engine
from payslip_api.domains.payslips.errors import PayslipError
from payslip_api.domains.payslips.router import router as payslip_router

configure_logging(settings.log_level)
configure_observability()
configure_error_monitoring()
logger = get_logger(__name__)

app = FastAPI(title=settings.app_name)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[str(origin) for origin in settings.cors_origins] or ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(payslip_router)


async def internal_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "request_failed",
        path=request.url.path,
        method=request.method,
        error=type(exc).__name__,
        exc_info=exc,
    )
    report_exception(exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


app.add_exception_handler(SQLAlchemyError, internal_error_handler)
app.add_exception_handler(PayslipError, internal_error_handler)


@app.on_event("startup")
def startup_event() -> None:
    try:
        ensure_schema(engine, reset=settings.reset_schema_on_startup)
    except SQLAlchemyError:
        logger.exception("schema_initialization_failed")
        raise
    logger.info("startup_complete", env=settings.env)


@app.get("/")
def root() -> dict[str, str]:
    return {"message": "Payslip API running", "environment": settings.env}


def run() -> None:
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())
