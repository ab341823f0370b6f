from typing import Callable, List, Optional
from fastapi import APIRouter, Depends, Header, HTTPException, Query, status
from sqlmodel import Session

from src.api.common.utils.database import get_db
from src.api.integrations.supabase.client import SupabaseIuranClient
from src.api.integrations.supabase.config import SupabaseConfig
from src.api.iuran.constants import CANDIDATE_YEARS, MONTH_NAMES, IuranSyncAction, IuranSyncStatus
from src.api.iuran.schemas.iuran_sync_execution import IuranSyncExecutionFilter, IuranSyncExecutionRead
from src.api.iuran.schemas.sync_panel import PanelOptionsResponse, PeriodSelectionRequest, SyncPanelView
from src.api.iuran.services.iuran_service import IuranService
from src.api.iuran.services.iuran_sync_execution_service import IuranSyncExecutionService
from src.api.iuran.services.sync_panel import SyncPanel, panel_registry

router = APIRouter(prefix="/iuran-sync", tags=["iuran-sync"])


def create_iuran_service() -> IuranService:
    return SupabaseIuranClient(SupabaseConfig())


def get_iuran_service_factory() -> Callable[[], IuranService]:
    """Dependency returning how to build the backend of a new panel"""
    return create_iuran_service


def get_sync_panel(
    x_panel_session: str = Header(default="default"),
    factory: Callable[[], IuranService] = Depends(get_iuran_service_factory)
) -> SyncPanel:
    try:
        return panel_registry.get_or_create(x_panel_session, factory)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=f"Iuran backend is not configured: {e}")


def get_execution_service(db: Session = Depends(get_db)) -> IuranSyncExecutionService:
    """Dependency to get the sync panel run history service"""
    return IuranSyncExecutionService(db)


def _ensure_idle(panel: SyncPanel) -> None:
    # Action controls are disabled while a call is in flight
    if panel.is_loading:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="A synchronization is already in progress")


@router.get("/options", response_model=PanelOptionsResponse)
async def get_panel_options():
    """Months and years offered by the manual generation selectors."""
    return PanelOptionsResponse(months=list(MONTH_NAMES), years=list(CANDIDATE_YEARS))


@router.get("/panel", response_model=SyncPanelView)
async def get_panel(panel: SyncPanel = Depends(get_sync_panel)):
    """Current state of the sync panel."""
    return panel.render()


@router.put("/panel/period", response_model=SyncPanelView)
async def select_period(
    request: PeriodSelectionRequest,
    panel: SyncPanel = Depends(get_sync_panel)
):
    """Change the selected month and/or year."""
    try:
        panel.select_period(month=request.month, year=request.year)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return panel.render()


@router.post("/panel/sync-current-month", response_model=SyncPanelView)
async def sync_current_month(
    panel: SyncPanel = Depends(get_sync_panel),
    recorder: IuranSyncExecutionService = Depends(get_execution_service)
):
    """
    Generate the dues of the current month.

    Backend failures are reported inside the panel result, never as an
    HTTP error.
    """
    _ensure_idle(panel)
    await panel.sync_current_month(recorder=recorder)
    return panel.render()


@router.post("/panel/generate-month", response_model=SyncPanelView)
async def generate_month(
    panel: SyncPanel = Depends(get_sync_panel),
    recorder: IuranSyncExecutionService = Depends(get_execution_service)
):
    """Generate the dues of the selected month and year."""
    _ensure_idle(panel)
    await panel.generate_specific_month(recorder=recorder)
    return panel.render()


@router.post("/panel/generate-year", response_model=SyncPanelView)
async def generate_year(
    panel: SyncPanel = Depends(get_sync_panel),
    recorder: IuranSyncExecutionService = Depends(get_execution_service)
):
    """Generate the dues of every month of the selected year."""
    _ensure_idle(panel)
    await panel.generate_full_year(recorder=recorder)
    return panel.render()


@router.get("/executions", response_model=List[IuranSyncExecutionRead])
async def get_executions(
    action: Optional[IuranSyncAction] = Query(None, description="Filter by action"),
    execution_status: Optional[IuranSyncStatus] = Query(
        None, alias="status", description="Filter by status"),
    limit: int = Query(50, ge=1, le=500, description="Maximum number of results"),
    offset: int = Query(0, ge=0, description="Number of results to skip"),
    service: IuranSyncExecutionService = Depends(get_execution_service)
):
    """Run history of the sync panel, newest first."""
    filters = IuranSyncExecutionFilter(
        action=action,
        status=execution_status,
        limit=limit,
        offset=offset
    )
    return service.get_executions(filters)


@router.get("/executions/{process_id}", response_model=IuranSyncExecutionRead)
async def get_execution(
    process_id: str,
    service: IuranSyncExecutionService = Depends(get_execution_service)
):
    execution = service.get_execution(process_id)
    if not execution:
        raise HTTPException(status_code=404, detail="Execution not found")
    return execution
