"""SQLAlchemy 모델"""
from models.api_key import ApiKey

__all__ = [
    "ApiKey",
]
