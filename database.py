"""MySQL 데이터베이스 연결 모듈"""
from typing import AsyncIterator, Optional

from fastapi import Request
from sqlalchemy.engine import URL
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.orm import declarative_base

from config import Settings

# Base 클래스
Base = declarative_base()


def build_url(settings: Settings, database: Optional[str] = None) -> URL:
    """접속 URL 생성 (database=None 이면 서버에만 접속)"""
    return URL.create(
        settings.DB_DRIVER,
        username=settings.DB_USER,
        password=settings.DB_PASS or None,
        host=settings.DB_HOST,
        port=settings.DB_PORT,
        database=database,
    )


def pool_options(settings: Settings) -> dict:
    """커넥션 풀 설정"""
    return {
        "pool_size": settings.DB_POOL_SIZE,  # 동시 연결 수 상한
        "max_overflow": 0,
        "pool_timeout": None,                # 빈 연결이 생길 때까지 무제한 대기
        "pool_pre_ping": True,               # 끊어진 연결 자동 재연결
    }


def create_engine(settings: Settings) -> AsyncEngine:
    """대상 DB에 대한 비동기 엔진 생성"""
    return create_async_engine(
        build_url(settings, settings.DB_NAME),
        echo=False,
        **pool_options(settings),
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker:
    """세션 팩토리"""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def get_db(request: Request) -> AsyncIterator[AsyncSession]:
    """FastAPI 의존성 주입용 DB 세션

    세션 팩토리는 앱 시작 시 app.state 에 등록된다.
    """
    session_factory = request.app.state.session_factory
    async with session_factory() as session:
        try:
            yield session
        finally:
            await session.close()
