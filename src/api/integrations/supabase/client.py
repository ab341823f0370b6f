import logging
import httpx
from typing import Any, Dict, List, Optional

from src.api.common.constants.months import MONTH_NAMES
from src.api.integrations.supabase.config import SupabaseConfig

logger = logging.getLogger(__name__)


class IuranBackendError(Exception):
    """Raised when the hosted iuran backend rejects or cannot serve a call"""

    def __init__(self, operation: str, detail: str, status_code: Optional[int] = None):
        self.operation = operation
        self.detail = detail
        self.status_code = status_code
        super().__init__(f"{operation} failed: {detail}")


class SupabaseIuranClient:
    """
    Iuran backend client talking to Supabase PostgREST RPC functions.

    Implements the three operations the sync panel needs: syncing the
    current month, generating one month and generating a whole year.
    """

    def __init__(self, config: SupabaseConfig, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.config = config
        self.headers = {
            "apikey": config.api_key,
            "Authorization": f"Bearer {config.api_key}",
            "Content-Type": "application/json",
        }
        self._transport = transport

    async def _call_rpc(self, function: str, payload: Dict[str, Any]) -> Any:
        url = f"{self.config.rpc_url}/{function}"
        try:
            async with httpx.AsyncClient(timeout=self.config.timeout, transport=self._transport) as client:
                response = await client.post(url, headers=self.headers, json=payload)
                response.raise_for_status()
                if not response.content:
                    return None
                return response.json()
        except httpx.HTTPStatusError as e:
            logger.error(
                f"HTTP error occurred in SupabaseIuranClient {function}: {e}")
            raise IuranBackendError(
                function, e.response.text or str(e), status_code=e.response.status_code)
        except httpx.HTTPError as e:
            logger.error(f"Error occurred in SupabaseIuranClient {function}: {e}")
            raise IuranBackendError(function, str(e))

    async def sync_iuran_data(self) -> Any:
        """
        Generate the dues of the current month for every active resident.

        Existing records are left untouched by the backend function.
        """
        return await self._call_rpc(self.config.sync_function, {})

    async def generate_monthly_iuran(self, month_name: str, year: int) -> Any:
        """
        Generate the dues of one month.

        Args:
            month_name: Indonesian month name, e.g. "Maret"
            year: Four digit year

        Returns:
            The backend payload, passed through unchanged
        """
        if month_name not in MONTH_NAMES:
            raise ValueError(f"Unknown month name: {month_name}")
        return await self._call_rpc(
            self.config.generate_monthly_function,
            {"p_bulan": month_name, "p_tahun": year}
        )

    async def generate_iuran_for_year(self, year: int) -> List[Any]:
        """Generate every month of a year in calendar order, one result per month."""
        results = []
        for month_name in MONTH_NAMES:
            logger.info(f"Generating iuran for {month_name} {year}")
            results.append(await self.generate_monthly_iuran(month_name, year))
        return results
