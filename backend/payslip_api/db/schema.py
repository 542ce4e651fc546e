from sqlalchemy import inspect
from sqlalchemy.engine import Engine

from payslip_api.core.logging import get_logger
from payslip_api.db.session import Base

logger = get_logger(__name__)


def ensure_schema(bind: Engine, reset: bool = False) -> list[str]:
    """Create the payslip tables and their constraints if they are missing.

    With ``reset`` the existing tables are dropped first. Errors reaching the
    store propagate to the caller, which must treat them as fatal.
    """
    # Registers the mapped tables on Base.metadata.
    import payslip_api.models  # noqa: F401

    if reset:
        logger.warning("schema_reset", tables=sorted(Base.metadata.tables))
        Base.metadata.drop_all(bind=bind)

    Base.metadata.create_all(bind=bind)
    tables = sorted(inspect(bind).get_table_names())
    logger.info("schema_ready", tables=tables)
    return tables
