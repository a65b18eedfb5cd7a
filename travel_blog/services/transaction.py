import logging
from typing import Awaitable, Callable, TypeVar

from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError

from travel_blog.database import Database
from travel_blog.exceptions import TransientStoreFailure

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Stale version on update, duplicate insert of a new ledger, lock/serialization failures
RETRYABLE_ERRORS = (StaleDataError, IntegrityError, OperationalError)


async def run_transaction(
    db: Database,
    work: Callable[[AsyncSession], Awaitable[T]],
    max_attempts: int = 5,
    name: str = "transaction",
) -> T:
    """
    Run `work` as one unit of work in a fresh session, committing on return.

    Reads happen inside `work`; versioned rows make a concurrent writer's
    commit fail, in which case the whole unit is replayed against fresh
    state. Domain errors raised by `work` roll back and propagate unchanged.
    """
    last_error = None

    for attempt in range(1, max_attempts + 1):
        async with db.session() as session:
            try:
                async with session.begin():
                    result = await work(session)
                return result
            except RETRYABLE_ERRORS as e:
                last_error = e
                logger.warning(
                    f"{name} conflicted on attempt {attempt}/{max_attempts}: {type(e).__name__}"
                )

    logger.error(f"{name} failed after {max_attempts} attempts: {last_error}")
    raise TransientStoreFailure() from last_error
