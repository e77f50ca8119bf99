"""DB 엔진 / 세션 경계 단위 테스트 (실제 DB 연결 없음)"""

from contextlib import asynccontextmanager
from unittest.mock import AsyncMock

import pytest

from app.core import database
from app.core.config import Settings
from app.core.database import create_engine, create_session_maker, get_db, session_scope


def _session_maker(session: AsyncMock):
    """session을 그대로 돌려주는 세션 팩토리"""

    @asynccontextmanager
    async def _open():
        yield session

    return _open


def test_create_engine_uses_given_settings():
    engine = create_engine(
        Settings(database_url="postgresql+asyncpg://u:p@db.internal:5433/meetups", debug=False)
    )

    assert engine.url.host == "db.internal"
    assert engine.url.port == 5433
    assert engine.url.database == "meetups"
    assert engine.echo is False


def test_session_maker_keeps_attributes_after_commit(test_settings: Settings):
    maker = create_session_maker(create_engine(test_settings))

    assert maker.kw["expire_on_commit"] is False


async def test_session_scope_commits_on_success():
    session = AsyncMock()

    async with session_scope(_session_maker(session)) as opened:
        assert opened is session

    session.commit.assert_awaited_once()
    session.rollback.assert_not_awaited()


async def test_session_scope_rolls_back_and_reraises():
    session = AsyncMock()

    with pytest.raises(RuntimeError, match="boom"):
        async with session_scope(_session_maker(session)):
            raise RuntimeError("boom")

    session.rollback.assert_awaited_once()
    session.commit.assert_not_awaited()


async def test_get_db_uses_module_session_maker(monkeypatch):
    """get_db는 모듈 기본 팩토리로 세션을 열고 종료 시 commit"""
    session = AsyncMock()
    monkeypatch.setattr(database, "async_session_maker", _session_maker(session))

    gen = get_db()
    assert await gen.__anext__() is session
    with pytest.raises(StopAsyncIteration):
        await gen.__anext__()

    session.commit.assert_awaited_once()
