import os
from pydantic import BaseModel, Field


class SupabaseConfig(BaseModel):
    url: str = Field(default_factory=lambda: os.getenv("SUPABASE_URL", ""))
    api_key: str = Field(default_factory=lambda: os.getenv("SUPABASE_ANON_KEY", ""))
    sync_function: str = Field(
        default_factory=lambda: os.getenv("IURAN_RPC_SYNC", "sync_iuran_data"))
    generate_monthly_function: str = Field(
        default_factory=lambda: os.getenv("IURAN_RPC_GENERATE_MONTHLY", "generate_monthly_iuran"))
    timeout: float = Field(
        default_factory=lambda: float(os.getenv("IURAN_HTTP_TIMEOUT", "30")))

    def __init__(self, **data):
        super().__init__(**data)
        if not self.url:
            raise ValueError("SUPABASE_URL environment variable is required")
        if not self.api_key:
            raise ValueError("SUPABASE_ANON_KEY environment variable is required")

    @property
    def rpc_url(self) -> str:
        return f"{self.url.rstrip('/')}/rest/v1/rpc"
