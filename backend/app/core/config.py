# 환경변수 로딩 (.env)
from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    MONGO_URI: str = "mongodb://localhost:27017"  # 필요 시 prod/staging로 분리
    MONGO_DB: str = "recipes"

    # 프론트 개발 서버 기본값
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]
    LOG_LEVEL: str = "INFO"

    # 검색 페이지 크기
    SEARCH_DEFAULT_LIMIT: int = 10
    SEARCH_MAX_LIMIT: int = 100

    # 스타트업 DB 재시도 (횟수, 간격 초)
    DB_CONNECT_RETRIES: int = 20
    DB_CONNECT_RETRY_DELAY: float = 1.0

    class Config:
        env_file = ".env"


settings = Settings()
