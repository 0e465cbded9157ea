"""
Store guard: the single failure policy for every remote store operation.

Each data-access function hands the guard a coroutine that performs its
reads/writes. The guard checks a cached reachability verdict, runs the
operation under a deadline, commits or rolls back, and turns every failure
into a StoreResult whose value is always of the operation's return type.
Callers get the shaped value from ``result.value`` and can tell "no data"
from "could not fetch data" through ``result.outcome``.
"""
import asyncio
import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, Generic, Optional, TypeVar

from sqlalchemy import column, func, select, table
from sqlalchemy.exc import DisconnectionError, InterfaceError, OperationalError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from sqlalchemy.ext.asyncio import AsyncSession

from medlink.core.config import settings

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Connection-level failures worth retrying later; everything else is permanent
TRANSIENT_ERRORS = (
    OperationalError,
    InterfaceError,
    DisconnectionError,
    PoolTimeoutError,
    asyncio.TimeoutError,
    ConnectionError,
    OSError,
)

_UNSET = object()


class RecordNotFound(Exception):
    """Raised by an operation when the record it works on does not exist."""


class Outcome(str, Enum):
    SUCCESS = "success"
    NOT_FOUND = "not_found"
    UNAVAILABLE = "unavailable"
    TRANSIENT_ERROR = "transient_error"
    PERMANENT_ERROR = "permanent_error"


@dataclass
class StoreResult(Generic[T]):
    """
    Outcome of a guarded operation.

    ``value`` is the real result on success, the operation's fallback when the
    record is missing, and the type-appropriate default otherwise.
    """
    outcome: Outcome
    value: T
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.outcome is Outcome.SUCCESS

    @property
    def degraded(self) -> bool:
        """True when the value is a default because the store could not answer."""
        return self.outcome in (Outcome.UNAVAILABLE, Outcome.TRANSIENT_ERROR, Outcome.PERMANENT_ERROR)


def classify(exc: BaseException) -> Outcome:
    if isinstance(exc, RecordNotFound):
        return Outcome.NOT_FOUND
    if isinstance(exc, TRANSIENT_ERRORS):
        return Outcome.TRANSIENT_ERROR
    return Outcome.PERMANENT_ERROR


def _resolve(default: Any) -> Any:
    # Factories keep mutable defaults (lists, placeholder records) per call
    return default() if callable(default) else default


async def _rollback_quietly(db: AsyncSession) -> None:
    try:
        await db.rollback()
    except Exception as exc:
        logger.warning(f"Rollback failed: {exc}")


class StoreReadiness:
    """
    Cached answer to "is the store initialised and reachable?".

    The verdict is computed on first use (or explicitly at start-up), cleared
    when an operation hits a transient error, and re-checked while unreachable
    at most every ``reprobe_seconds``.
    """

    def __init__(
        self,
        probe_table: Optional[str] = None,
        reprobe_seconds: Optional[float] = None,
        timeout: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.probe_table = probe_table or settings.STORE_PROBE_TABLE
        self.reprobe_seconds = settings.STORE_REPROBE_SECONDS if reprobe_seconds is None else reprobe_seconds
        self.timeout = timeout or settings.STORE_TIMEOUT_SECONDS
        self._clock = clock
        self._reachable: Optional[bool] = None
        self._checked_at = 0.0

    @property
    def reachable(self) -> Optional[bool]:
        """Last verdict, or None when the store has not been probed yet."""
        return self._reachable

    def reset(self) -> None:
        self._reachable = None
        self._checked_at = 0.0

    def mark_stale(self) -> None:
        self._reachable = None

    def _is_fresh(self) -> bool:
        if self._reachable is None:
            return False
        if self._reachable:
            return True
        return (self._clock() - self._checked_at) < self.reprobe_seconds

    async def probe(self, db: AsyncSession) -> bool:
        """
        Count up to one row of the well-known table. Any error means unreachable;
        zero rows still means reachable.
        """
        sample = select(column("id")).select_from(table(self.probe_table)).limit(1).subquery()
        stmt = select(func.count()).select_from(sample)
        try:
            await asyncio.wait_for(db.execute(stmt), timeout=self.timeout)
            reachable = True
        except Exception as exc:
            logger.warning(f"Store probe on '{self.probe_table}' failed: {exc}")
            await _rollback_quietly(db)
            reachable = False
        else:
            # End the probe's read transaction
            await _rollback_quietly(db)

        if reachable != self._reachable:
            logger.info(f"Store reachability changed: {self._reachable} -> {reachable}")
        self._reachable = reachable
        self._checked_at = self._clock()
        return reachable

    async def ensure(self, db: AsyncSession) -> bool:
        if self._is_fresh():
            return bool(self._reachable)
        return await self.probe(db)


class StoreGuard:
    """
    Runs data-access operations with the shared failure policy.
    """

    def __init__(self, readiness: StoreReadiness, timeout: Optional[float] = None):
        self.readiness = readiness
        self.timeout = timeout or settings.STORE_TIMEOUT_SECONDS

    async def run(
        self,
        db: AsyncSession,
        label: str,
        operation: Callable[[AsyncSession], Awaitable[T]],
        *,
        default: Any,
        on_missing: Any = _UNSET,
        write: bool = False,
    ) -> StoreResult[T]:
        """
        Run one guarded operation.

        Args:
            db: Database session
            label: Operation name used in log lines
            operation: Coroutine function doing the remote calls and shaping
            default: Value (or zero-argument factory) returned when the store is
                unavailable or the operation fails
            on_missing: Value (or factory) returned when the operation raises
                RecordNotFound; defaults to ``default``
            write: Commit on success; reads end their transaction with a rollback

        Returns:
            StoreResult: Never raises for store failures
        """
        logger.debug(f"[{label}] start")

        if not await self.readiness.ensure(db):
            logger.info(f"[{label}] store unavailable, returning default")
            return StoreResult(Outcome.UNAVAILABLE, _resolve(default))

        async def execute() -> T:
            value = await operation(db)
            if write:
                await db.commit()
            else:
                await db.rollback()
            return value

        try:
            value = await asyncio.wait_for(execute(), timeout=self.timeout)
        except RecordNotFound as exc:
            await _rollback_quietly(db)
            logger.info(f"[{label}] not found: {exc}")
            fallback = default if on_missing is _UNSET else on_missing
            return StoreResult(Outcome.NOT_FOUND, _resolve(fallback), exc)
        except Exception as exc:
            await _rollback_quietly(db)
            outcome = classify(exc)
            if outcome is Outcome.TRANSIENT_ERROR:
                self.readiness.mark_stale()
                logger.warning(f"[{label}] transient store error, returning default: {exc!r}")
            else:
                logger.exception(f"[{label}] store operation failed, returning default")
            return StoreResult(outcome, _resolve(default), exc)

        logger.debug(f"[{label}] done")
        return StoreResult(Outcome.SUCCESS, value)


readiness = StoreReadiness()
guard = StoreGuard(readiness)
