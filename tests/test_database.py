"""
Tests for the engine/session factories and the transaction helper
"""

import pytest
from sqlalchemy import func, select
from sqlalchemy.pool import NullPool

from closet_worthy.core.database import build_engine, transaction
from closet_worthy.models import Brand


def test_build_engine_uses_null_pool():
    engine = build_engine("sqlite+aiosqlite://")

    assert isinstance(engine.pool, NullPool)


async def test_transaction_commits_on_clean_exit(session_maker):
    async with transaction(session_maker) as session:
        session.add(Brand(name="Khaite"))

    async with session_maker() as session:
        count = await session.scalar(select(func.count()).select_from(Brand))
    assert count == 1


async def test_transaction_rolls_back_and_reraises(session_maker):
    with pytest.raises(RuntimeError):
        async with transaction(session_maker) as session:
            session.add(Brand(name="Khaite"))
            await session.flush()
            raise RuntimeError("boom")

    async with session_maker() as session:
        count = await session.scalar(select(func.count()).select_from(Brand))
    assert count == 0
