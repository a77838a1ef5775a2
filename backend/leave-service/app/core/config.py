from typing import List, Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # MongoDB
    MONGODB_URI: str = "mongodb://mongodb:27017"
    MONGODB_DB_NAME: str = "lms"
    LEAVES_COLLECTION: str = "leaves"
    AUTOMATION_LOGS_COLLECTION: str = "automation_logs"
    # replica set 환경에서만 true (standalone mongod는 트랜잭션 미지원)
    MONGODB_USE_TRANSACTIONS: bool = False

    # 인증이 없으므로 createdBy가 비어 있으면 이 값으로 기록
    DEFAULT_CREATOR_ID: str = "system"

    # UiPath 데스크톱 자동화
    AUTOMATION_DIR: Optional[str] = None
    AUTOMATION_ENTRYPOINT: str = "Main.xaml"

    CORS_ORIGINS: List[str] = ["*"]
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"


settings = Settings()
