from typing import Optional
from sqlmodel import Field, Column, Text
from src.api.common.models.base import BaseModel, TimestampMixin
from src.api.iuran.constants import IuranSyncAction, IuranSyncStatus


class IuranSyncExecution(BaseModel, TimestampMixin, table=True):
    """
    History of the actions triggered from the iuran sync panel.

    The original exception text is kept in error_message; the panel itself
    only ever shows the fixed localized message.
    """
    id: Optional[int] = Field(default=None, primary_key=True)
    process_id: str = Field(unique=True, index=True)
    action: IuranSyncAction = Field(index=True)
    status: IuranSyncStatus = Field(default=IuranSyncStatus.RUNNING, index=True)
    month: Optional[str] = Field(default=None)
    year: Optional[int] = Field(default=None)
    result: Optional[str] = Field(default=None, sa_column=Column(Text))  # JSON string of the stored result
    error_message: Optional[str] = Field(default=None, sa_column=Column(Text))
