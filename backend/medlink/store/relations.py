"""
Batch attachment of related records by foreign key.

Rows are fetched first, then the related records for all distinct foreign
keys are loaded in one IN query and attached in memory.
"""
import logging
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Type, TypeVar

from pydantic import BaseModel
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from medlink.store.guard import Outcome, classify, readiness

logger = logging.getLogger(__name__)

S = TypeVar("S", bound=BaseModel)
M = TypeVar("M", bound=BaseModel)


async def fetch_by_ids(
    db: AsyncSession,
    model,
    schema: Type[S],
    ids: Iterable[Optional[str]],
) -> Dict[str, S]:
    """
    Load records of ``model`` whose id is in ``ids``, keyed by id.

    Empty ids are skipped and duplicates collapse into a single lookup.
    """
    wanted = {i for i in ids if i}
    if not wanted:
        return {}
    result = await db.execute(select(model).where(model.id.in_(wanted)))
    return {row.id: schema.model_validate(row) for row in result.scalars().all()}


def attach(
    records: Sequence[BaseModel],
    into: Type[M],
    *,
    key: str,
    field: str,
    related: Dict[str, BaseModel],
    placeholder: Optional[Callable[[str], BaseModel]] = None,
) -> List[M]:
    """
    Build ``into`` records carrying ``related[record.<key>]`` under ``field``.

    When the related record is missing, ``placeholder(foreign_key)`` is used,
    or None if no placeholder is given.
    """
    shaped = []
    for record in records:
        ref = getattr(record, key)
        value = related.get(ref) if ref else None
        if value is None and placeholder is not None:
            value = placeholder(ref)
        shaped.append(into.model_validate({**record.model_dump(), field: value}))
    return shaped


async def attach_related(
    db: AsyncSession,
    records: Sequence[BaseModel],
    into: Type[M],
    *,
    key: str,
    field: str,
    model,
    schema: Type[BaseModel],
    placeholder: Optional[Callable[[str], BaseModel]] = None,
) -> List[M]:
    """
    Fetch and attach related records in one step.

    A failed related fetch does not fail the primary read: every record gets
    the placeholder instead. A transient failure also marks the store
    readiness stale.
    """
    if not records:
        return []
    try:
        related = await fetch_by_ids(db, model, schema, (getattr(r, key) for r in records))
    except SQLAlchemyError as exc:
        logger.warning(f"Could not load {model.__tablename__} for '{field}', using placeholders: {exc}")
        if classify(exc) is Outcome.TRANSIENT_ERROR:
            readiness.mark_stale()
        related = {}
    return attach(records, into, key=key, field=field, related=related, placeholder=placeholder)
