from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine  # noqa: TC002

from catalogsync.adapters.sqlalchemy import shutdown, startup

os.environ.setdefault("DATABASE_URI", "sqlite+pysqlite:///:memory:")

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path


@pytest.fixture
def sqlite_engine(tmp_path: Path) -> Iterator[Engine]:
    # A file database, so connections opened by worker threads share the data.
    engine = create_engine(
        f"sqlite+pysqlite:///{tmp_path / 'catalog.db'}",
        connect_args={"check_same_thread": False},
    )
    startup(engine=engine, force=True)
    try:
        yield engine
    finally:
        shutdown()
