"""API 라우터 패키지"""
from routers.keys import router as keys_router

__all__ = [
    "keys_router",
]
