"""Meetup SQL Repository 테스트

DB 없이 AsyncSession을 mock하여 실행되는 SQL 문 형태를 검증합니다.
"""

from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest
from sqlalchemy.dialects import postgresql

from app.repositories.meetup import InvitationRepository, LocationRepository, MeetingRepository


def _compile(stmt) -> str:
    return str(stmt.compile(dialect=postgresql.dialect()))


@pytest.fixture
def mock_session():
    session = AsyncMock()
    result = MagicMock()
    result.scalar_one.return_value = MagicMock()
    result.scalar_one_or_none.return_value = None
    result.rowcount = 1
    session.execute = AsyncMock(return_value=result)
    return session


def _executed_sql(session) -> str:
    stmt = session.execute.await_args.args[0]
    return _compile(stmt)


async def test_invitation_upsert_uses_on_conflict(mock_session):
    """(meeting_id, email) 충돌 시 token/role/status만 교체"""
    repo = InvitationRepository(mock_session)

    await repo.create_or_replace(uuid4(), "B@Y.com", "invitee")

    sql = _executed_sql(mock_session)
    assert sql.startswith("INSERT INTO invitations")
    assert "ON CONFLICT (meeting_id, email) DO UPDATE SET" in sql

    update_clause = sql.split("DO UPDATE SET", 1)[1].split("RETURNING", 1)[0]
    assert "token = excluded.token" in update_clause
    assert "status = excluded.status" in update_clause
    assert "responded_at" not in update_clause

    stmt = mock_session.execute.await_args.args[0]
    params = stmt.compile(dialect=postgresql.dialect()).params
    assert params["email"] == "b@y.com"
    assert mock_session.execute.await_args.kwargs["execution_options"] == {"populate_existing": True}


async def test_location_upsert_uses_on_conflict(mock_session):
    repo = LocationRepository(mock_session)

    await repo.upsert(uuid4(), "b@y.com", 37.5, 127.0)

    sql = _executed_sql(mock_session)
    assert sql.startswith("INSERT INTO meeting_locations")
    assert "ON CONFLICT (meeting_id, email) DO UPDATE SET" in sql
    assert "lat = excluded.lat" in sql


async def test_location_upsert_rejects_invalid_coordinates(mock_session):
    repo = LocationRepository(mock_session)

    with pytest.raises(ValueError, match="INVALID_COORDINATES"):
        await repo.upsert(uuid4(), "b@y.com", 100.0, 0.0)
    mock_session.execute.assert_not_called()


async def test_finalize_is_conditional_update(mock_session):
    """status='collecting'인 행만 갱신"""
    repo = MeetingRepository(mock_session)

    result = await repo.finalize(uuid4(), {"name": "Cafe X"})

    assert result is None
    stmt = mock_session.execute.await_args.args[0]
    compiled = stmt.compile(dialect=postgresql.dialect())
    sql = str(compiled)
    assert sql.startswith("UPDATE meetings SET")
    where_clause = sql.split("WHERE", 1)[1]
    assert "meetings.status =" in where_clause
    assert "RETURNING" in sql
    assert "collecting" in compiled.params.values()


async def test_validate_raises_invalid_token(mock_session):
    repo = InvitationRepository(mock_session)

    with pytest.raises(ValueError, match="INVALID_TOKEN"):
        await repo.validate(uuid4(), "b@y.com", "token")


async def test_validate_raises_expired(mock_session):
    invitation = MagicMock(status="expired")
    mock_session.execute.return_value.scalar_one_or_none.return_value = invitation
    repo = InvitationRepository(mock_session)

    with pytest.raises(ValueError, match="INVITATION_EXPIRED"):
        await repo.validate(uuid4(), "b@y.com", "token")


async def test_list_invitations_orders_owner_first(mock_session):
    mock_session.execute.return_value.scalars.return_value.all.return_value = []
    repo = InvitationRepository(mock_session)

    assert await repo.list_by_meeting(uuid4()) == []

    sql = _executed_sql(mock_session)
    order_by = sql.split("ORDER BY", 1)[1]
    assert "CASE WHEN" in order_by
    assert "invitations.email ASC" in order_by


async def test_delete_returns_rowcount(mock_session):
    repo = MeetingRepository(mock_session)

    assert await repo.delete(uuid4()) is True

    mock_session.execute.return_value.rowcount = 0
    assert await repo.delete(uuid4()) is False
