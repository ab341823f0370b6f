from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field

from src.api.iuran.constants import IuranSyncAction, IuranSyncStatus


class IuranSyncExecutionRead(BaseModel):
    """Schema for reading a sync panel run"""
    id: int
    process_id: str
    action: IuranSyncAction
    status: IuranSyncStatus
    month: Optional[str] = None
    year: Optional[int] = None
    result: Optional[str] = None
    error_message: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class IuranSyncExecutionFilter(BaseModel):
    """Schema for filtering sync panel runs"""
    action: Optional[IuranSyncAction] = Field(default=None, description="Filter by action")
    status: Optional[IuranSyncStatus] = Field(default=None, description="Filter by status")
    limit: int = Field(default=50, description="Maximum number of results")
    offset: int = Field(default=0, description="Number of results to skip")
