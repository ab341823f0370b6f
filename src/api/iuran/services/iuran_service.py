from typing import Any, Protocol, Sequence


class IuranService(Protocol):
    """Backend operations the sync panel depends on.

    The panel never talks to storage directly; any object providing these
    three coroutines can back it (the Supabase client in production, a test
    double in tests).
    """

    async def sync_iuran_data(self) -> Any:
        ...

    async def generate_monthly_iuran(self, month_name: str, year: int) -> Any:
        ...

    async def generate_iuran_for_year(self, year: int) -> Sequence[Any]:
        ...
