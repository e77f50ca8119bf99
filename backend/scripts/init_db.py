#!/usr/bin/env python3
"""로컬 개발용 테이블 생성 스크립트

ORM 메타데이터로 meetings / invitations / meeting_locations 테이블을 직접 생성.
운영 환경에서는 alembic upgrade head를 사용한다.

사용법:
    python scripts/init_db.py
    python scripts/init_db.py --drop  # 기존 테이블 삭제 후 재생성
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

# 프로젝트 루트를 path에 추가
sys.path.insert(0, str(Path(__file__).parent.parent))

from app.core.database import Base, engine
import app.models  # noqa: F401

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


async def init_db(drop: bool = False):
    async with engine.begin() as conn:
        if drop:
            logger.info("기존 테이블 삭제...")
            await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    await engine.dispose()
    logger.info(f"테이블 생성 완료: {', '.join(sorted(Base.metadata.tables))}")


def main():
    parser = argparse.ArgumentParser(description="MiddleGround DB 초기화")
    parser.add_argument("--drop", action="store_true", help="기존 테이블 삭제 후 재생성")
    args = parser.parse_args()

    asyncio.run(init_db(drop=args.drop))


if __name__ == "__main__":
    main()
