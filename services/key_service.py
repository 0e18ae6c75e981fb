"""API Key 발급/조회 서비스"""
import secrets
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from models.api_key import ApiKey


def generate_api_key() -> str:
    """새 API Key 생성 (24바이트 난수, 48자 hex string)"""
    return secrets.token_hex(24)


class ApiKeyService:
    """API Key 저장소 접근

    DB 오류(SQLAlchemyError)는 그대로 호출자에게 전달된다.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, username: str, name: str = "") -> ApiKey:
        """API Key 발급 후 저장된 행을 다시 읽어 반환"""
        api_key = ApiKey(
            username=username,
            name=name or "",
            key=generate_api_key(),
            created_at=datetime.utcnow(),
        )
        self.db.add(api_key)
        await self.db.commit()

        # 할당된 id로 저장된 행 재조회
        await self.db.refresh(api_key)
        return api_key

    async def list_all(self) -> list[ApiKey]:
        """전체 API Key 목록 (최신순)"""
        result = await self.db.execute(
            select(ApiKey).order_by(ApiKey.id.desc())
        )
        return list(result.scalars().all())
