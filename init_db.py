"""데이터베이스 초기화 (재시도 포함)

서버 시작 전에 한 번 실행된다. 매 시도마다 처음부터 다시:
1. DB 서버에 임시 접속하여 데이터베이스 생성
2. 대상 DB에 커넥션 풀 생성
3. api_keys 테이블 생성
"""
import asyncio
import logging
from typing import Awaitable, Callable

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import NullPool

from config import Settings
from database import Base, build_url, create_engine
from exceptions import StorageInitError
import models  # noqa: F401  (테이블 메타데이터 등록)

logger = logging.getLogger(__name__)


def _quote_identifier(name: str) -> str:
    return "`" + name.replace("`", "``") + "`"


async def create_database(settings: Settings) -> None:
    """데이터베이스가 없으면 생성"""
    # 데이터베이스를 선택하지 않고 서버에만 연결
    admin_engine = create_async_engine(
        build_url(settings),
        poolclass=NullPool,
        connect_args={"connect_timeout": settings.DB_CONNECT_TIMEOUT},
    )
    try:
        async with admin_engine.begin() as conn:
            await conn.execute(text(
                f"CREATE DATABASE IF NOT EXISTS {_quote_identifier(settings.DB_NAME)} "
                "CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
            ))
    finally:
        await admin_engine.dispose()


async def apply_schema(engine: AsyncEngine) -> None:
    """스키마 적용 (이미 있는 테이블은 건너뜀)"""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def initialize_once(settings: Settings) -> AsyncEngine:
    """초기화 1회 시도"""
    await create_database(settings)

    engine = create_engine(settings)
    try:
        await apply_schema(engine)
    except BaseException:
        await engine.dispose()
        raise
    return engine


async def init_storage(
    settings: Settings,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> AsyncEngine:
    """DB 초기화 (고정 간격 재시도)

    Returns:
        AsyncEngine: 초기화된 커넥션 풀

    Raises:
        StorageInitError: DB_RETRY_ATTEMPTS 회 모두 실패한 경우
    """
    attempt = 0

    while True:
        attempt += 1
        logger.info(
            f"DB init attempt {attempt} -> {settings.DB_HOST}:{settings.DB_PORT} (db={settings.DB_NAME})"
        )
        try:
            engine = await initialize_once(settings)
        except Exception as e:
            logger.error(f"DB init attempt {attempt} failed: {e}")
            if attempt >= settings.DB_RETRY_ATTEMPTS:
                raise StorageInitError(attempt, e) from e
            await sleep(settings.DB_RETRY_DELAY / 1000)
            continue

        logger.info("DB initialized successfully")
        return engine
