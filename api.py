"""API Key 발급 서버"""
import sys
import logging
from pathlib import Path
from typing import Optional
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse, PlainTextResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy.ext.asyncio import AsyncEngine
from starlette.exceptions import HTTPException as StarletteHTTPException

from config import Settings, settings
from database import create_session_factory
from exceptions import ServiceError, StorageInitError
from init_db import init_storage
from routers import keys_router

logger = logging.getLogger(__name__)

BASE_DIR = Path(__file__).resolve().parent


def install_engine(app: FastAPI, engine: AsyncEngine) -> None:
    """커넥션 풀을 앱에 등록 (요청 핸들러는 app.state 를 통해 사용)"""
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # 시작 시: DB 초기화가 끝나야 서버가 요청을 받는다
    if getattr(app.state, "engine", None) is None:
        app_settings: Settings = app.state.settings
        try:
            engine = await init_storage(app_settings)
        except StorageInitError as e:
            logger.error(f"Failed to initialize DB: {e}")
            raise
        install_engine(app, engine)
        logger.info(f"Server listening on http://localhost:{app_settings.PORT}")

    yield

    # 종료 시
    await app.state.engine.dispose()
    logger.info("Connections closed")


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    """ServiceError -> {"success": false, "error": ...}"""
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": exc.message},
    )


async def not_found_handler(request: Request, exc: StarletteHTTPException):
    """매칭되지 않는 경로/메서드는 모두 404 'Not found'"""
    if exc.status_code in (404, 405):
        return PlainTextResponse("Not found", status_code=404)
    return await http_exception_handler(request, exc)


def create_app(app_settings: Settings = settings, engine: Optional[AsyncEngine] = None) -> FastAPI:
    """FastAPI 앱 생성

    engine 을 넘기면 시작 시 DB 초기화를 건너뛴다 (테스트용).
    """
    app = FastAPI(
        title="API Key Service",
        description="API Key 발급 및 조회",
        lifespan=lifespan,
        # 매칭되지 않는 경로는 404 를 유지하기 위해 문서 페이지 비활성화
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.settings = app_settings
    app.state.engine = None
    if engine is not None:
        install_engine(app, engine)

    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(StarletteHTTPException, not_found_handler)

    # API 라우터 등록
    app.include_router(keys_router, prefix="/api/apikey", tags=["keys"])

    # 정적 파일 서빙 (라우터 다음에 마운트)
    static_dir = BASE_DIR / app_settings.STATIC_DIR
    if static_dir.is_dir():
        app.mount("/", StaticFiles(directory=static_dir, html=True), name="static")

    return app


app = create_app()


def main():
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    server = uvicorn.Server(uvicorn.Config(
        app,
        host=settings.HOST,
        port=settings.PORT,
        lifespan="on",
    ))
    started = False
    try:
        server.run()
        started = server.started
    except SystemExit as e:
        # uvicorn 버전에 따라 시작 실패 시 직접 sys.exit(3) 을 호출함
        if not e.code:
            raise

    # DB 초기화 실패로 시작하지 못한 경우
    if not started:
        sys.exit(1)


if __name__ == "__main__":
    main()
