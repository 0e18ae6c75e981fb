"""환경 설정 모듈"""
import os
from dotenv import load_dotenv

# .env 파일 로드
load_dotenv()


class Settings:
    """애플리케이션 설정"""

    # HTTP 서버
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "3000"))

    # MySQL
    DB_DRIVER: str = os.getenv("DB_DRIVER", "mysql+aiomysql")
    DB_HOST: str = os.getenv("DB_HOST", "localhost")
    DB_USER: str = os.getenv("DB_USER", "root")
    DB_PASS: str = os.getenv("DB_PASS", "")
    DB_NAME: str = os.getenv("DB_NAME", "api")
    DB_PORT: int = int(os.getenv("DB_PORT", "3307"))

    # 커넥션 풀
    DB_POOL_SIZE: int = int(os.getenv("DB_POOL_SIZE", "10"))
    DB_CONNECT_TIMEOUT: int = int(os.getenv("DB_CONNECT_TIMEOUT", "5"))  # 초

    # 초기화 재시도
    DB_RETRY_ATTEMPTS: int = int(os.getenv("DB_RETRY_ATTEMPTS", "10"))
    DB_RETRY_DELAY: int = int(os.getenv("DB_RETRY_DELAY", "1000"))  # ms

    # 정적 파일 디렉토리
    STATIC_DIR: str = os.getenv("STATIC_DIR", "public")

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")


settings = Settings()
