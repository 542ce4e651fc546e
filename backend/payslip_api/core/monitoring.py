import sentry_sdk

from payslip_api.core.config import settings


def configure_error_monitoring() -> bool:
    if not settings.sentry_dsn:
        return False
    sentry_sdk.init(
        dsn=settings.sentry_dsn,
        environment=settings.env,
        traces_sample_rate=0.2,
        send_default_pii=False,
    )
    return True


def report_exception(exc: BaseException) -> None:
    if settings.sentry_dsn:
        sentry_sdk.capture_exception(exc)
