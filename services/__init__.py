"""서비스 패키지"""
from services.key_service import ApiKeyService, generate_api_key

__all__ = ["ApiKeyService", "generate_api_key"]
