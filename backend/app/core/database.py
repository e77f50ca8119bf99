"""DB 엔진 / 세션

엔진과 세션 팩토리는 설정으로부터 만들고, 세션은 session_scope 안에서
정상 종료 시 commit, 예외 시 rollback 된다.
"""

import logging
from collections.abc import AsyncGenerator, AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from app.core.config import Settings, get_settings

logger = logging.getLogger(__name__)


def create_engine(settings: Settings | None = None) -> AsyncEngine:
    """설정의 database_url로 비동기 엔진 생성 (연결은 첫 사용 시점)"""
    settings = settings or get_settings()
    return create_async_engine(
        settings.database_url,
        echo=settings.debug,
        pool_pre_ping=True,
    )


def create_session_maker(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # 커밋 후에도 응답 직렬화에 ORM 속성을 쓰므로 만료시키지 않음
    return async_sessionmaker(bind, class_=AsyncSession, expire_on_commit=False)


engine = create_engine()
async_session_maker = create_session_maker(engine)


class Base(DeclarativeBase):
    """모든 모델의 기본 클래스"""

    pass


@asynccontextmanager
async def session_scope(
    session_maker: async_sessionmaker[AsyncSession] | None = None,
) -> AsyncIterator[AsyncSession]:
    """commit/rollback 경계를 가진 세션

    Args:
        session_maker: 세션 팩토리 (None이면 모듈 기본 팩토리)
    """
    async with (session_maker or async_session_maker)() as session:
        try:
            yield session
            await session.commit()
        except Exception as e:
            logger.warning("[DB] Rolling back session: %s", type(e).__name__)
            await session.rollback()
            raise


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """DB 세션 의존성"""
    async with session_scope() as session:
        yield session
