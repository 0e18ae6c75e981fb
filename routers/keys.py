"""API Key 관리 라우터"""
import json
import logging
from typing import Any, List, Optional
from datetime import datetime

from pydantic import BaseModel, Field, field_validator
from pydantic import ValidationError as PydanticValidationError
from fastapi import APIRouter, Depends, Request
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from database import get_db
from exceptions import StorageQueryError, ValidationError
from services.key_service import ApiKeyService

logger = logging.getLogger(__name__)

router = APIRouter()

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


def _as_text(value: Any) -> Optional[str]:
    """falsy 값은 None, 그 외 스칼라 값은 문자열로 변환"""
    if isinstance(value, (list, dict)):
        raise ValueError("must be a string")
    if not value:
        return None
    if isinstance(value, str):
        return value
    return str(value)


class ApiKeyCreate(BaseModel):
    """API Key 생성 요청"""
    username: Optional[str] = None
    name: Optional[str] = ""

    @field_validator("username", mode="before")
    @classmethod
    def coerce_username(cls, v):
        return _as_text(v)

    @field_validator("name", mode="before")
    @classmethod
    def coerce_name(cls, v):
        return _as_text(v) or ""


class ApiKeyResponse(BaseModel):
    """API Key 응답"""
    id: int
    username: str
    name: Optional[str] = ""
    key: str
    created_at: datetime = Field(alias="createdAt")

    class Config:
        from_attributes = True
        populate_by_name = True


class ApiKeyCreated(BaseModel):
    success: bool = True
    data: ApiKeyResponse


class ApiKeyList(BaseModel):
    success: bool = True
    data: List[ApiKeyResponse]


async def read_create_request(request: Request) -> ApiKeyCreate:
    """요청 본문(JSON 또는 form) 파싱 및 필수값 검증"""
    content_type = request.headers.get("content-type", "").split(";")[0].strip().lower()

    body: Any = {}
    if content_type in FORM_CONTENT_TYPES:
        form = await request.form()
        body = dict(form)
    elif content_type.endswith("json"):
        raw = await request.body()
        if raw.strip():
            try:
                body = json.loads(raw)
            except ValueError:
                raise ValidationError("invalid JSON body")

    # 객체가 아닌 JSON (배열, 문자열 등)은 빈 본문으로 취급
    if not isinstance(body, dict):
        body = {}

    try:
        payload = ApiKeyCreate.model_validate(body)
    except PydanticValidationError:
        # 배열, 객체 등 문자열로 볼 수 없는 값
        raise ValidationError("invalid request body")

    if not payload.username:
        raise ValidationError("username is required")
    return payload


@router.post("", status_code=201, response_model=ApiKeyCreated)
async def create_api_key(
    payload: ApiKeyCreate = Depends(read_create_request),
    db: AsyncSession = Depends(get_db)
):
    """새 API Key 발급"""
    service = ApiKeyService(db)
    try:
        api_key = await service.create(payload.username, payload.name)
    except SQLAlchemyError:
        logger.exception("DB insert error")
        raise StorageQueryError()

    return ApiKeyCreated(data=ApiKeyResponse.model_validate(api_key))


@router.get("", response_model=ApiKeyList)
async def list_api_keys(db: AsyncSession = Depends(get_db)):
    """API Key 목록 조회 (전체 키 포함, 최신순)"""
    service = ApiKeyService(db)
    try:
        keys = await service.list_all()
    except SQLAlchemyError:
        logger.exception("DB select error")
        raise StorageQueryError()

    return ApiKeyList(data=[ApiKeyResponse.model_validate(key) for key in keys])
