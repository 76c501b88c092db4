from __future__ import annotations

import sys
from collections.abc import AsyncIterator
from pathlib import Path

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import create_async_engine

# Ensure the repo root is importable (so `import db` / `import services.*` work in tests).
REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT))

from db.schema import metadata  # noqa: E402
from db.store import CatalogStore  # noqa: E402


@pytest.fixture()
def sqlite_url(tmp_path: Path) -> str:
    return f"sqlite+aiosqlite:///{tmp_path / 'catalog.db'}"


@pytest_asyncio.fixture()
async def store(sqlite_url: str) -> AsyncIterator[CatalogStore]:
    # Concurrent creates each take their own connection; give SQLite's writer lock room to wait.
    engine = create_async_engine(sqlite_url, connect_args={"timeout": 30})
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)
    s = CatalogStore(engine)
    yield s
    await s.close()
