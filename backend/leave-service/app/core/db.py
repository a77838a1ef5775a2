import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from motor.motor_asyncio import (
    AsyncIOMotorClient,
    AsyncIOMotorClientSession,
    AsyncIOMotorCollection,
    AsyncIOMotorDatabase,
)
from pymongo import ASCENDING, DESCENDING

from app.core.config import settings

logger = logging.getLogger(__name__)

_client: AsyncIOMotorClient | None = None


def get_client() -> AsyncIOMotorClient:
    """
    싱글톤 패턴으로 MongoDB 클라이언트 생성.
    """
    global _client
    if _client is None:
        _client = AsyncIOMotorClient(settings.MONGODB_URI)
    return _client


def close_client() -> None:
    global _client
    if _client is not None:
        _client.close()
        _client = None


def get_database() -> AsyncIOMotorDatabase:
    return get_client()[settings.MONGODB_DB_NAME]


def get_leaves_collection() -> AsyncIOMotorCollection:
    return get_database()[settings.LEAVES_COLLECTION]


def get_automation_logs_collection() -> AsyncIOMotorCollection:
    return get_database()[settings.AUTOMATION_LOGS_COLLECTION]


async def ensure_indexes(
    leaves: AsyncIOMotorCollection,
    logs: AsyncIOMotorCollection,
) -> None:
    """
    restore가 createdAt 범위 삭제를 하므로 두 컬렉션 모두 createdAt 인덱스 필요.
    leaves는 (employeeId, startDate, endDate) 중복을 unique 인덱스로도 막는다.
    """
    await leaves.create_index([("createdAt", DESCENDING)], name="createdAt_desc")
    await leaves.create_index(
        [("employeeId", ASCENDING), ("startDate", ASCENDING), ("endDate", ASCENDING)],
        name="employee_period_unique",
        unique=True,
    )
    await logs.create_index([("createdAt", DESCENDING)], name="createdAt_desc")
    logger.info(
        "MongoDB indexes ensured on %s and %s", leaves.name, logs.name
    )


@asynccontextmanager
async def mongo_transaction() -> AsyncIterator[AsyncIOMotorClientSession]:
    """
    multi-document 트랜잭션 세션. 블록이 예외로 끝나면 abort, 정상 종료 시 commit.
    """
    client = get_client()
    async with await client.start_session() as session:
        async with session.start_transaction():
            yield session
