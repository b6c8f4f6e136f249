"""Transaction boundary shared by the services."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from sqlalchemy.exc import DisconnectionError, IntegrityError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from src.timekeeper.core.exceptions import (
    InvariantViolationError,
    StoreUnavailableError,
    TimekeeperError,
)
from src.timekeeper.core.logging import (
    bind_operation_context,
    clear_operation_context,
    get_logger,
)

logger = get_logger(__name__)


@asynccontextmanager
async def unit_of_work(
    session: AsyncSession,
    operation: str,
    **context: str | int | None,
) -> AsyncGenerator[None, None]:
    """Run the enclosed statements as one transaction.

    Commits on success. On any error the session is rolled back and the
    error is re-raised, with store errors translated to domain errors:
    constraint violations become InvariantViolationError and lock
    timeouts or lost connections become StoreUnavailableError.
    """
    bind_operation_context(operation, **context)
    try:
        yield
        await session.commit()
    except TimekeeperError:
        await session.rollback()
        raise
    except IntegrityError as e:
        await session.rollback()
        logger.warning("Store rejected change", error=str(e.orig))
        raise InvariantViolationError(
            f"{operation} would violate a uniqueness invariant: {e.orig}"
        ) from e
    except (OperationalError, DisconnectionError) as e:
        await session.rollback()
        logger.warning("Store unavailable", error=str(e))
        raise StoreUnavailableError(f"{operation} failed, store unavailable: {e}") from e
    except Exception as e:
        await session.rollback()
        logger.error("Operation failed", error=str(e))
        raise
    finally:
        clear_operation_context()
