from typing import List, Optional
from pydantic import BaseModel, Field


class SelectedPeriod(BaseModel):
    """Month/year currently chosen in the manual generation selectors"""
    month: str = Field(..., description="Indonesian month name")
    year: int = Field(..., description="Four digit year")


class PeriodSelectionRequest(BaseModel):
    """Schema for changing the selected month and/or year"""
    month: Optional[str] = Field(default=None, description="Indonesian month name")
    year: Optional[int] = Field(default=None, description="One of the candidate years")


class ActionButtonView(BaseModel):
    label: str
    disabled: bool
    spinning: bool = False


class QuickSyncView(BaseModel):
    heading: str
    button: ActionButtonView
    caption: str


class ManualGenerationView(BaseModel):
    heading: str
    month_options: List[str]
    year_options: List[int]
    selected: SelectedPeriod
    generate_month_button: ActionButtonView
    generate_year_button: ActionButtonView


class SyncResultView(BaseModel):
    variant: str = Field(..., description="'error' or 'success'")
    title: str
    message: str
    processed_months: Optional[int] = None
    processed_label: Optional[str] = None


class InfoView(BaseModel):
    heading: str
    notes: List[str]


class SyncPanelView(BaseModel):
    """Everything a front-end needs to draw the sync panel"""
    title: str
    subtitle: str
    is_loading: bool
    quick_sync: QuickSyncView
    manual_generation: ManualGenerationView
    result: Optional[SyncResultView] = None
    info: InfoView


class PanelOptionsResponse(BaseModel):
    months: List[str]
    years: List[int]
