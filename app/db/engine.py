"""Async SQLAlchemy engine and session factory.

The ``Database`` object is constructed by the process entry point (the app
factory or the CLI) and handed to request handlers through ``app.state``.
"""

from __future__ import annotations

from pathlib import Path
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

_SQLITE_PREFIX = "sqlite+aiosqlite:///"


class Database:
    """Owns one async engine and the session factory bound to it."""

    def __init__(self, url: str, **engine_kwargs):
        self.url = url
        self._ensure_sqlite_dir(url)
        self.engine: AsyncEngine = create_async_engine(url, echo=False, **engine_kwargs)
        self.session_factory = async_sessionmaker(self.engine, class_=AsyncSession, expire_on_commit=False)

    @staticmethod
    def _ensure_sqlite_dir(url: str) -> None:
        if not url.startswith(_SQLITE_PREFIX):
            return
        db_path = url[len(_SQLITE_PREFIX):]
        if db_path and db_path != ":memory:":
            Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    async def create_all(self) -> None:
        from app.models import Base

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def session(self):
        """Yield one session; used as the per-request dependency body."""
        async with self.session_factory() as session:
            yield session

    async def dispose(self) -> None:
        await self.engine.dispose()
