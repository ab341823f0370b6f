import json
import uuid
from typing import Any, List, Optional
from sqlmodel import Session, select

from src.api.common.utils.datetime import get_current_datetime
from src.api.iuran.constants import IuranSyncAction, IuranSyncStatus
from src.api.iuran.models.iuran_sync_execution import IuranSyncExecution
from src.api.iuran.schemas.iuran_sync_execution import IuranSyncExecutionFilter


class IuranSyncExecutionService:
    """Service class for the sync panel run history"""

    def __init__(self, db: Session):
        self.db = db

    def start_execution(
        self,
        action: IuranSyncAction,
        month: Optional[str] = None,
        year: Optional[int] = None
    ) -> IuranSyncExecution:
        """Create a running execution record for a panel action"""
        execution = IuranSyncExecution(
            process_id=str(uuid.uuid4()),
            action=action,
            status=IuranSyncStatus.RUNNING,
            month=month,
            year=year
        )
        self.db.add(execution)
        self.db.commit()
        self.db.refresh(execution)
        return execution

    def complete_execution(self, execution: IuranSyncExecution, result: Any) -> IuranSyncExecution:
        execution.status = IuranSyncStatus.COMPLETED
        execution.result = json.dumps(result, default=str)
        return self._save(execution)

    def fail_execution(
        self,
        execution: IuranSyncExecution,
        result: Any,
        error_message: str
    ) -> IuranSyncExecution:
        """
        Mark an execution as failed.

        Args:
            execution: The running execution
            result: The result shown in the panel (the fixed message)
            error_message: The original error, kept for diagnostics only
        """
        execution.status = IuranSyncStatus.FAILED
        execution.result = json.dumps(result, default=str)
        execution.error_message = error_message
        return self._save(execution)

    def get_execution(self, process_id: str) -> Optional[IuranSyncExecution]:
        return self.db.exec(
            select(IuranSyncExecution).where(
                IuranSyncExecution.process_id == process_id)
        ).first()

    def get_executions(self, filters: IuranSyncExecutionFilter) -> List[IuranSyncExecution]:
        """Get executions, newest first, with filtering and pagination"""
        query = select(IuranSyncExecution)
        if filters.action is not None:
            query = query.where(IuranSyncExecution.action == filters.action)
        if filters.status is not None:
            query = query.where(IuranSyncExecution.status == filters.status)
        query = query.order_by(
            IuranSyncExecution.created_at.desc(), IuranSyncExecution.id.desc()
        ).offset(filters.offset).limit(filters.limit)
        return list(self.db.exec(query).all())

    def _save(self, execution: IuranSyncExecution) -> IuranSyncExecution:
        execution.updated_at = get_current_datetime()
        self.db.add(execution)
        self.db.commit()
        self.db.refresh(execution)
        return execution
