"""API Key 모델"""
from sqlalchemy import Column, Integer, String, DateTime
from database import Base


class ApiKey(Base):
    __tablename__ = "api_keys"
    __table_args__ = {"mysql_engine": "InnoDB", "mysql_charset": "utf8mb4"}

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(191), nullable=False)
    name = Column(String(191), default="", server_default="")
    key = Column("key", String(255), nullable=False)  # 48자 hex, UNIQUE 제약 없음
    created_at = Column("createdAt", DateTime, nullable=False)  # 서버에서 설정

    def __repr__(self):
        return f"<ApiKey {self.id} {self.username}>"
