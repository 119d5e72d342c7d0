"""Edge Toggle — atomic delete-or-insert on a unique-pair table.

Invariants:
    - Caller has already locked the target row in this transaction (SELECT ... FOR UPDATE),
      so concurrent toggles on the same target are serialized on PostgreSQL
    - Exactly one transition per call: delete hit -> ABSENT, otherwise insert -> PRESENT
    - A unique-key violation on insert means a concurrent toggle inserted first:
      the transaction is rolled back and the edge is reported PRESENT
    - If the insert failed and the edge is still absent (e.g. FK violation on a
      vanished user), ConflictError is raised — never a raw IntegrityError

Design Decisions:
    - Delete first: its rowcount tells us the prior state in the same statement,
      no separate SELECT that could go stale
    - Whole-transaction rollback on IntegrityError instead of a SAVEPOINT: nothing
      else was written (the delete matched zero rows), so nothing is lost
"""

import logging
from typing import Any

from sqlalchemy import delete, exists, insert, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from socialgraph.core.domain_types import EdgeState
from socialgraph.core.errors import ConflictError
from socialgraph.core.toggles import toggled

logger = logging.getLogger(__name__)


async def toggle_pair(
    db: AsyncSession, model: type, pair: dict[str, Any],
) -> EdgeState:
    """Flip presence of the row identified by `pair` in `model`'s table."""
    match = [getattr(model, column) == value for column, value in pair.items()]

    result = await db.execute(
        delete(model).where(*match).execution_options(synchronize_session=False),
    )
    if result.rowcount:
        await db.commit()
        return toggled(EdgeState.PRESENT)

    try:
        await db.execute(insert(model).values(**pair))
        await db.commit()
    except IntegrityError:
        await db.rollback()
        return await _resolve_lost_race(db, model, match, pair)
    return toggled(EdgeState.ABSENT)


async def _resolve_lost_race(
    db: AsyncSession, model: type, match: list, pair: dict[str, Any],
) -> EdgeState:
    present = await db.scalar(select(exists().where(*match)))
    if present:
        logger.info(
            f"Concurrent toggle on {model.__tablename__} already inserted {pair}",
        )
        return EdgeState.PRESENT
    logger.warning(f"Toggle on {model.__tablename__} could not insert {pair}")
    raise ConflictError("The relationship changed concurrently, try again")
