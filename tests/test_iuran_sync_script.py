import importlib.util
import logging
import os
import pytest
from unittest.mock import AsyncMock, Mock, patch

SCRIPT_PATH = os.path.join(
    os.path.dirname(os.path.dirname(os.path.abspath(__file__))),
    "src", "api", "scripts", "iuran-sync.py")


@pytest.fixture(scope="module")
def script():
    """Load the iuran-sync command line script as a module"""
    spec = importlib.util.spec_from_file_location("iuran_sync_script", SCRIPT_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture
def patched_backend(script, mock_iuran_service):
    """Replace the Supabase client used by the script with the mock backend"""
    with patch.object(script, "SupabaseConfig") as mock_config, \
            patch.object(script, "SupabaseIuranClient", return_value=mock_iuran_service) as mock_client:
        yield mock_config, mock_client


class TestParseArgs:
    """Test command line parsing"""

    def test_month_and_year(self, script):
        args = script.parse_args(["month", "--month", "Maret", "--year", "2025"])

        assert args.action == "month"
        assert args.month == "Maret"
        assert args.year == 2025

    def test_year_outside_candidates_is_rejected(self, script):
        with pytest.raises(SystemExit):
            script.parse_args(["year", "--year", "2030"])

    def test_unknown_action_is_rejected(self, script):
        with pytest.raises(SystemExit):
            script.parse_args(["delete"])


class TestMain:
    """Test running panel actions from the command line"""

    @pytest.mark.asyncio
    async def test_month_action_uses_arguments(self, script, patched_backend, mock_iuran_service):
        mock_config, mock_client = patched_backend

        code = await script.main("month", month="Maret", year=2025)

        assert code == 0
        mock_client.assert_called_once_with(mock_config.return_value)
        mock_iuran_service.generate_monthly_iuran.assert_awaited_once_with("Maret", 2025)

    @pytest.mark.asyncio
    async def test_sync_action(self, script, patched_backend, mock_iuran_service):
        code = await script.main("sync")

        assert code == 0
        mock_iuran_service.sync_iuran_data.assert_awaited_once_with()

    @pytest.mark.asyncio
    async def test_year_action_logs_processed_months(self, script, patched_backend, mock_iuran_service, caplog):
        caplog.set_level(logging.INFO)

        code = await script.main("year", year=2026)

        assert code == 0
        mock_iuran_service.generate_iuran_for_year.assert_awaited_once_with(2026)
        assert "Generate iuran untuk tahun 2026 selesai" in caplog.text
        assert "Data yang diproses: 12 bulan" in caplog.text

    @pytest.mark.asyncio
    async def test_error_result_exits_with_one(self, script, patched_backend, mock_iuran_service, caplog):
        mock_iuran_service.sync_iuran_data = AsyncMock(side_effect=RuntimeError("rpc down"))

        code = await script.main("sync")

        assert code == 1
        assert "Gagal melakukan sinkronisasi" in caplog.text

    @pytest.mark.asyncio
    async def test_no_result_exits_with_zero(self, script, patched_backend, mock_iuran_service):
        mock_iuran_service.sync_iuran_data = AsyncMock(return_value=None)

        code = await script.main("sync")

        assert code == 0

    @pytest.mark.asyncio
    async def test_unconfigured_backend_raises(self, script):
        with patch.object(script, "SupabaseConfig", Mock(side_effect=ValueError("SUPABASE_URL"))):
            with pytest.raises(ValueError):
                await script.main("sync")
