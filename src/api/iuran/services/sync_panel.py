import os
import asyncio
import logging
from collections import OrderedDict
from datetime import date
from typing import Any, Awaitable, Callable, Dict, Optional

from src.api.common.utils.datetime import (
    format_month_year,
    get_current_date,
    get_month_name,
)
from src.api.iuran.constants import (
    ACTION_ERROR_MESSAGES,
    CANDIDATE_YEARS,
    MONTH_NAMES,
    IuranSyncAction,
    PanelMessages,
)
from src.api.iuran.models.iuran_sync_execution import IuranSyncExecution
from src.api.iuran.schemas.sync_panel import (
    ActionButtonView,
    InfoView,
    ManualGenerationView,
    QuickSyncView,
    SelectedPeriod,
    SyncPanelView,
    SyncResultView,
)
from src.api.iuran.services.iuran_service import IuranService
from src.api.iuran.services.iuran_sync_execution_service import IuranSyncExecutionService

logger = logging.getLogger(__name__)


class SyncPanel:
    """
    State and actions of the iuran synchronization panel.

    The panel holds the selected month/year, a loading flag and the result of
    the last action. Every action clears the previous result, awaits exactly
    one backend call and stores either the backend payload or a fixed
    localized error message.
    """

    def __init__(
        self,
        iuran_service: IuranService,
        recorder: Optional[IuranSyncExecutionService] = None,
        today: Callable[[], date] = get_current_date
    ):
        self.iuran_service = iuran_service
        self.recorder = recorder
        self.today = today

        current = today()
        self.selected_period = SelectedPeriod(
            month=get_month_name(current), year=current.year)
        self.is_loading = False
        self.sync_result: Optional[Any] = None

    def select_period(self, month: Optional[str] = None, year: Optional[int] = None) -> SelectedPeriod:
        """
        Change month and/or year together.

        Both values are validated before either is applied, so a rejected
        request leaves the selection untouched.
        """
        self._validate_month(month)
        self._validate_year(year)
        if month is not None:
            self.selected_period.month = month
        if year is not None:
            self.selected_period.year = year
        return self.selected_period

    def select_month(self, month: str) -> SelectedPeriod:
        return self.select_period(month=month)

    def select_year(self, year: int) -> SelectedPeriod:
        return self.select_period(year=year)

    @staticmethod
    def _validate_month(month: Optional[str]) -> None:
        if month is not None and month not in MONTH_NAMES:
            raise ValueError(f"Unknown month name: {month}")

    @staticmethod
    def _validate_year(year: Optional[int]) -> None:
        if year is not None and year not in CANDIDATE_YEARS:
            raise ValueError(
                f"Year {year} is not one of the candidate years {CANDIDATE_YEARS}")

    async def sync_current_month(
        self, recorder: Optional[IuranSyncExecutionService] = None
    ) -> Any:
        """Generate the dues of the current month for every active resident."""
        current = self.today()
        return await self._run_action(
            IuranSyncAction.SYNC_CURRENT_MONTH,
            lambda: self.iuran_service.sync_iuran_data(),
            month=get_month_name(current),
            year=current.year,
            recorder=recorder
        )

    async def generate_specific_month(
        self, recorder: Optional[IuranSyncExecutionService] = None
    ) -> Any:
        """Generate the dues of the selected month and year."""
        month = self.selected_period.month
        year = self.selected_period.year
        return await self._run_action(
            IuranSyncAction.GENERATE_MONTH,
            lambda: self.iuran_service.generate_monthly_iuran(month, year),
            month=month,
            year=year,
            recorder=recorder
        )

    async def generate_full_year(
        self, recorder: Optional[IuranSyncExecutionService] = None
    ) -> Any:
        """Generate the dues of every month of the selected year."""
        year = self.selected_period.year

        async def generate():
            results = await self.iuran_service.generate_iuran_for_year(year)
            return {
                "data": results,
                "message": PanelMessages.GENERATE_YEAR_DONE.format(year=year),
            }

        return await self._run_action(
            IuranSyncAction.GENERATE_YEAR,
            generate,
            year=year,
            recorder=recorder
        )

    async def _run_action(
        self,
        action: IuranSyncAction,
        backend_call: Callable[[], Awaitable[Any]],
        month: Optional[str] = None,
        year: Optional[int] = None,
        recorder: Optional[IuranSyncExecutionService] = None
    ) -> Any:
        recorder = recorder or self.recorder
        self.is_loading = True
        self.sync_result = None
        execution = self._record_start(recorder, action, month, year)
        settled = False

        try:
            logger.info(f"Starting iuran panel action {action.value} (month={month}, year={year})")
            self.sync_result = await backend_call()
            logger.info(f"Iuran panel action {action.value} completed")
            settled = True
            self._record_completion(recorder, execution, self.sync_result)
        except Exception as e:
            logger.error(f"Iuran panel action {action.value} failed: {e!r}")
            self.sync_result = {"error": ACTION_ERROR_MESSAGES[action]}
            settled = True
            self._record_failure(recorder, execution, self.sync_result, e)
        finally:
            self.is_loading = False
            if not settled:
                # Cancelled while awaiting the backend
                logger.error(f"Iuran panel action {action.value} was cancelled")
                self._record_failure(
                    recorder, execution, self.sync_result,
                    asyncio.CancelledError(f"{action.value} cancelled before the backend call settled"))

        return self.sync_result

    def _record_start(
        self,
        recorder: Optional[IuranSyncExecutionService],
        action: IuranSyncAction,
        month: Optional[str],
        year: Optional[int]
    ) -> Optional[IuranSyncExecution]:
        if recorder is None:
            return None
        try:
            return recorder.start_execution(action, month=month, year=year)
        except Exception as e:
            logger.error(f"Failed to record iuran panel action {action.value}: {e}")
            return None

    def _record_completion(
        self,
        recorder: Optional[IuranSyncExecutionService],
        execution: Optional[IuranSyncExecution],
        result: Any
    ) -> None:
        if recorder is None or execution is None:
            return
        try:
            recorder.complete_execution(execution, result)
        except Exception as e:
            logger.error(f"Failed to record completion of {execution.process_id}: {e}")

    def _record_failure(
        self,
        recorder: Optional[IuranSyncExecutionService],
        execution: Optional[IuranSyncExecution],
        result: Any,
        error: BaseException
    ) -> None:
        if recorder is None or execution is None:
            return
        try:
            recorder.fail_execution(execution, result, error_message=str(error) or repr(error))
        except Exception as e:
            logger.error(f"Failed to record failure of {execution.process_id}: {e}")

    def render(self) -> SyncPanelView:
        """Build the view model of the panel from its current state."""
        loading = self.is_loading
        return SyncPanelView(
            title=PanelMessages.TITLE,
            subtitle=PanelMessages.SUBTITLE,
            is_loading=loading,
            quick_sync=QuickSyncView(
                heading=PanelMessages.QUICK_SYNC_HEADING,
                button=ActionButtonView(
                    label=(PanelMessages.QUICK_SYNC_LOADING_LABEL if loading
                           else PanelMessages.QUICK_SYNC_LABEL),
                    disabled=loading,
                    spinning=loading
                ),
                caption=PanelMessages.QUICK_SYNC_CAPTION.format(
                    month_year=format_month_year(self.today()))
            ),
            manual_generation=ManualGenerationView(
                heading=PanelMessages.MANUAL_HEADING,
                month_options=list(MONTH_NAMES),
                year_options=list(CANDIDATE_YEARS),
                selected=self.selected_period.model_copy(),
                generate_month_button=ActionButtonView(
                    label=PanelMessages.GENERATE_MONTH_LABEL, disabled=loading),
                generate_year_button=ActionButtonView(
                    label=PanelMessages.GENERATE_YEAR_LABEL, disabled=loading)
            ),
            result=render_sync_result(self.sync_result),
            info=InfoView(
                heading=PanelMessages.INFO_HEADING,
                notes=list(PanelMessages.INFO_NOTES)
            )
        )


def render_sync_result(sync_result: Any) -> Optional[SyncResultView]:
    """
    Turn a stored result into the result box of the panel.

    An empty result (None, False, 0 or "") renders nothing. A result carrying
    an error renders the error box; anything else is a success, showing its
    message (or a generic one) and, when its data is a list, how many months
    were processed.
    """
    if sync_result is None:
        return None
    if not isinstance(sync_result, (dict, list, tuple)) and not sync_result:
        return None

    fields: Dict[str, Any] = sync_result if isinstance(sync_result, dict) else {}
    error = fields.get("error")
    if error:
        return SyncResultView(
            variant="error",
            title=PanelMessages.ERROR_TITLE,
            message=str(error)
        )

    data = fields.get("data")
    processed = len(data) if isinstance(data, (list, tuple)) else None
    return SyncResultView(
        variant="success",
        title=PanelMessages.SUCCESS_TITLE,
        message=str(fields.get("message") or PanelMessages.DEFAULT_SUCCESS),
        processed_months=processed,
        processed_label=(PanelMessages.PROCESSED_LABEL.format(count=processed)
                         if processed is not None else None)
    )


class SyncPanelRegistry:
    """
    Keeps one panel per dashboard session.

    At most max_panels panels are held; when a new session would exceed the
    limit, the least recently used idle panel is evicted.
    """

    def __init__(self, max_panels: Optional[int] = None):
        if max_panels is None:
            max_panels = int(os.getenv("IURAN_MAX_PANELS", "256"))
        if max_panels < 1:
            raise ValueError("max_panels must be a positive integer")
        self.max_panels = max_panels
        self._panels: "OrderedDict[str, SyncPanel]" = OrderedDict()

    def __len__(self) -> int:
        return len(self._panels)

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._panels

    def get_or_create(
        self,
        session_id: str,
        factory: Callable[[], IuranService]
    ) -> SyncPanel:
        panel = self._panels.get(session_id)
        if panel is not None:
            self._panels.move_to_end(session_id)
            return panel

        panel = SyncPanel(factory())
        self._evict_idle()
        logger.info(f"Creating iuran sync panel for session {session_id}")
        self._panels[session_id] = panel
        return panel

    def _evict_idle(self) -> None:
        # Panels with a call in flight are never evicted
        while len(self._panels) >= self.max_panels:
            idle = next(
                (key for key, panel in self._panels.items() if not panel.is_loading), None)
            if idle is None:
                logger.warning(
                    f"All {len(self._panels)} iuran sync panels are busy, none evicted")
                return
            logger.info(f"Evicting idle iuran sync panel for session {idle}")
            del self._panels[idle]

    def clear(self) -> None:
        self._panels.clear()


panel_registry = SyncPanelRegistry()
