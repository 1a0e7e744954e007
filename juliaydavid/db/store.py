# juliaydavid/db/store.py
"""
Resource store adapter.

Every query goes through SQLAlchemy statements, so values always travel
as bound parameters. Driver failures come out as ``StoreError`` carrying
the driver's message; whether clients see that text is decided by the
error handlers, not here.
"""
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, Iterable

from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from juliaydavid.core.errors import StoreError
from juliaydavid.db.session import create_sessionmaker


def _driver_message(exc: SQLAlchemyError) -> str:
    orig = getattr(exc, "orig", None)
    return str(orig if orig is not None else exc)


class Store:
    def __init__(self, engine: AsyncEngine):
        self.engine = engine
        self._sessionmaker = create_sessionmaker(engine)

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """One session per request; its connection goes back on every exit path."""
        async with self._sessionmaker() as session:
            yield session

    async def execute(self, db: AsyncSession, statement, params: Dict[str, Any] = None):
        try:
            return await db.execute(statement, params)
        except SQLAlchemyError as exc:
            raise StoreError(detail=_driver_message(exc)) from exc

    @asynccontextmanager
    async def transaction(self, db: AsyncSession) -> AsyncIterator[AsyncSession]:
        """Commit when the block finishes, roll back if anything in it fails."""
        try:
            yield db
            await db.commit()
        except SQLAlchemyError as exc:
            await db.rollback()
            raise StoreError(detail=_driver_message(exc)) from exc
        except BaseException:
            await db.rollback()
            raise

    def upsert(self, model, values: Dict[str, Any], key_columns: Iterable[str], update_values: Dict[str, Any]):
        """INSERT ... ON CONFLICT (key) DO UPDATE for the engine's dialect."""
        dialect = self.engine.dialect.name
        if dialect == "postgresql":
            insert = postgresql.insert
        elif dialect == "sqlite":
            insert = sqlite.insert
        else:
            raise StoreError(detail=f"upsert not supported on {dialect}")

        return insert(model).values(**values).on_conflict_do_update(
            index_elements=list(key_columns),
            set_=update_values,
        )

    async def dispose(self) -> None:
        await self.engine.dispose()
