import json
import httpx
import pytest
from unittest.mock import patch

from src.api.integrations.supabase.client import IuranBackendError, SupabaseIuranClient
from src.api.integrations.supabase.config import SupabaseConfig


def make_client(handler):
    config = SupabaseConfig(url="https://project.supabase.co/", api_key="anon-key")
    return SupabaseIuranClient(config, transport=httpx.MockTransport(handler))


class TestSupabaseConfig:
    """Test Supabase configuration"""

    def test_reads_environment(self):
        with patch.dict("os.environ", {"SUPABASE_URL": "https://x.supabase.co",
                                       "SUPABASE_ANON_KEY": "k",
                                       "IURAN_HTTP_TIMEOUT": "5"}):
            config = SupabaseConfig()

        assert config.url == "https://x.supabase.co"
        assert config.api_key == "k"
        assert config.timeout == 5.0
        assert config.rpc_url == "https://x.supabase.co/rest/v1/rpc"

    def test_missing_url_raises(self):
        with patch.dict("os.environ", {"SUPABASE_URL": "", "SUPABASE_ANON_KEY": "k"}):
            with pytest.raises(ValueError, match="SUPABASE_URL"):
                SupabaseConfig()

    def test_missing_key_raises(self):
        with patch.dict("os.environ", {"SUPABASE_URL": "https://x.supabase.co", "SUPABASE_ANON_KEY": ""}):
            with pytest.raises(ValueError, match="SUPABASE_ANON_KEY"):
                SupabaseConfig()


class TestSupabaseIuranClient:
    """Test the iuran backend client"""

    @pytest.mark.asyncio
    async def test_sync_iuran_data(self):
        requests = []

        def handler(request):
            requests.append(request)
            return httpx.Response(200, json={"success": True, "created": 12})

        result = await make_client(handler).sync_iuran_data()

        assert result == {"success": True, "created": 12}
        request = requests[0]
        assert request.method == "POST"
        assert str(request.url) == "https://project.supabase.co/rest/v1/rpc/sync_iuran_data"
        assert request.headers["apikey"] == "anon-key"
        assert request.headers["authorization"] == "Bearer anon-key"
        assert json.loads(request.content) == {}

    @pytest.mark.asyncio
    async def test_generate_monthly_iuran_sends_month_and_year(self):
        bodies = []

        def handler(request):
            bodies.append(json.loads(request.content))
            return httpx.Response(200, json={"message": "ok"})

        result = await make_client(handler).generate_monthly_iuran("Maret", 2025)

        assert result == {"message": "ok"}
        assert bodies == [{"p_bulan": "Maret", "p_tahun": 2025}]

    @pytest.mark.asyncio
    async def test_generate_monthly_iuran_rejects_unknown_month(self):
        client = make_client(lambda request: httpx.Response(200, json={}))

        with pytest.raises(ValueError):
            await client.generate_monthly_iuran("March", 2025)

    @pytest.mark.asyncio
    async def test_empty_response_body(self):
        result = await make_client(lambda request: httpx.Response(204)).sync_iuran_data()

        assert result is None

    @pytest.mark.asyncio
    async def test_generate_iuran_for_year_runs_every_month_in_order(self):
        months = []

        def handler(request):
            body = json.loads(request.content)
            months.append(body["p_bulan"])
            return httpx.Response(200, json={"month": body["p_bulan"], "year": body["p_tahun"]})

        results = await make_client(handler).generate_iuran_for_year(2026)

        assert len(results) == 12
        assert months[0] == "Januari"
        assert months[-1] == "Desember"
        assert results[2] == {"month": "Maret", "year": 2026}

    @pytest.mark.asyncio
    async def test_http_error_raises_backend_error(self):
        client = make_client(lambda request: httpx.Response(500, text="function failed"))

        with pytest.raises(IuranBackendError) as exc_info:
            await client.sync_iuran_data()

        assert exc_info.value.status_code == 500
        assert exc_info.value.operation == "sync_iuran_data"
        assert "function failed" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_transport_error_raises_backend_error(self):
        def handler(request):
            raise httpx.ConnectError("unreachable", request=request)

        with pytest.raises(IuranBackendError) as exc_info:
            await make_client(handler).generate_monthly_iuran("Mei", 2024)

        assert exc_info.value.status_code is None

    @pytest.mark.asyncio
    async def test_year_generation_stops_at_first_failure(self):
        calls = []

        def handler(request):
            calls.append(json.loads(request.content)["p_bulan"])
            if len(calls) == 3:
                return httpx.Response(400, json={"message": "bad"})
            return httpx.Response(200, json={})

        with pytest.raises(IuranBackendError):
            await make_client(handler).generate_iuran_for_year(2024)

        assert calls == ["Januari", "Februari", "Maret"]
