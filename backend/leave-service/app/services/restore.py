"""
Point-in-time partial restore.

선택한 automation log의 createdAt(T)을 기준으로, T 이후(strictly greater)에
생성된 leave 레코드와 automation log를 모두 삭제한다. T와 같은 시각의 레코드
(기준 log 자신 포함)는 남는다.

트랜잭션이 없으면 두 번의 bulk delete는 원자적이지 않다. leaves 삭제 후
logs 삭제가 실패하면 leave만 지워진 상태로 남으며, 이 경우 StoreFailure
(partial=True)로 보고하고 ERROR 로그를 남긴다.
"""
import asyncio
import logging
from contextlib import AbstractAsyncContextManager
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Optional

from app.core.errors import InvalidIdentifier, LogNotFound, StoreFailure
from app.stores.base import AutomationLogStore, LeaveRecordStore

logger = logging.getLogger(__name__)

TransactionFactory = Callable[[], AbstractAsyncContextManager[Any]]

# "restore-in-progress" advisory lock (프로세스 단위)
_restore_lock = asyncio.Lock()


@dataclass
class RestoreResult:
    restore_point: datetime
    deleted_leave_count: int
    deleted_log_count: int


class RestoreCoordinator:

    def __init__(
        self,
        leave_store: LeaveRecordStore,
        log_store: AutomationLogStore,
        lock: Optional[asyncio.Lock] = None,
        transaction_factory: Optional[TransactionFactory] = None,
    ) -> None:
        self.leave_store = leave_store
        self.log_store = log_store
        self.lock = lock or _restore_lock
        self.transaction_factory = transaction_factory

    async def restore_to_log(self, log_id: str) -> RestoreResult:
        if not isinstance(log_id, str) or not log_id.strip():
            raise InvalidIdentifier(log_id)

        async with self.lock:
            # anchor 조회와 삭제는 같은 lock 구간 안에서
            anchor = await self.log_store.get(log_id)
            if anchor is None:
                raise LogNotFound()

            restore_point = anchor.createdAt
            logger.info(
                "Restoring to log %s (restore point %s)", log_id, restore_point.isoformat()
            )

            if self.transaction_factory is None:
                result = await self._delete_after(restore_point, session=None)
            else:
                result = await self._delete_after_in_transaction(restore_point)

        logger.info(
            "Restore to log %s finished: %d leave records, %d logs deleted",
            log_id,
            result.deleted_leave_count,
            result.deleted_log_count,
        )
        return result

    async def _delete_after(self, restore_point: datetime, session: Any) -> RestoreResult:
        try:
            deleted_leave_count = await self.leave_store.delete_created_after(
                restore_point, session=session
            )
        except Exception as exc:
            logger.error("Restore failed deleting leave records after %s: %s", restore_point, exc)
            raise StoreFailure("leaves", exc) from exc

        try:
            deleted_log_count = await self.log_store.delete_created_after(
                restore_point, session=session
            )
        except Exception as exc:
            partial = session is None
            if partial:
                logger.error(
                    "Partial restore: %d leave records deleted after %s "
                    "but deleting automation logs failed: %s",
                    deleted_leave_count,
                    restore_point,
                    exc,
                )
            raise StoreFailure(
                "logs",
                exc,
                deleted_leave_count=deleted_leave_count,
                partial=partial,
            ) from exc

        return RestoreResult(
            restore_point=restore_point,
            deleted_leave_count=deleted_leave_count,
            deleted_log_count=deleted_log_count,
        )

    async def _delete_after_in_transaction(self, restore_point: datetime) -> RestoreResult:
        try:
            async with self.transaction_factory() as session:
                return await self._delete_after(restore_point, session=session)
        except StoreFailure as exc:
            # 트랜잭션이 abort 되었으므로 실제로 삭제된 것은 없다
            logger.error(
                "Restore transaction rolled back at step %s: %s", exc.step, exc.cause
            )
            raise StoreFailure(exc.step, exc.cause) from exc.cause
        except Exception as exc:
            # 세션 시작 또는 commit 실패 (standalone mongod 등)
            logger.error("Restore transaction failed: %s", exc)
            raise StoreFailure("transaction", exc) from exc
