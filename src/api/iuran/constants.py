from enum import Enum

from src.api.common.constants.months import MONTH_NAMES

# Years offered by the manual generation selector
CANDIDATE_YEARS = [2024, 2025, 2026]


class IuranSyncAction(str, Enum):
    SYNC_CURRENT_MONTH = "sync_current_month"
    GENERATE_MONTH = "generate_month"
    GENERATE_YEAR = "generate_year"


class IuranSyncStatus(str, Enum):
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


class PanelMessages:
    """User facing (id-ID) strings of the sync panel."""

    SYNC_FAILED = "Gagal melakukan sinkronisasi"
    GENERATE_MONTH_FAILED = "Gagal generate iuran"
    GENERATE_YEAR_FAILED = "Gagal generate iuran tahunan"
    GENERATE_YEAR_DONE = "Generate iuran untuk tahun {year} selesai"
    DEFAULT_SUCCESS = "Sinkronisasi berhasil dilakukan"

    TITLE = "Panel Sinkronisasi Iuran"
    SUBTITLE = "Kelola dan sinkronisasi data iuran warga"
    QUICK_SYNC_HEADING = "Sinkronisasi Cepat"
    QUICK_SYNC_LABEL = "Sinkronisasi Bulan Ini"
    QUICK_SYNC_LOADING_LABEL = "Sedang Sinkronisasi..."
    QUICK_SYNC_CAPTION = "Generate iuran untuk bulan {month_year}"
    MANUAL_HEADING = "Generate Manual"
    GENERATE_MONTH_LABEL = "Generate Bulan"
    GENERATE_YEAR_LABEL = "Generate Tahun"
    ERROR_TITLE = "Error"
    SUCCESS_TITLE = "Berhasil"
    PROCESSED_LABEL = "Data yang diproses: {count} bulan"
    INFO_HEADING = "Informasi Penting"
    INFO_NOTES = [
        "Sinkronisasi akan membuat iuran untuk semua warga aktif",
        "Data yang sudah ada tidak akan ditimpa",
        "Tarif iuran diambil dari pengaturan sistem",
        "Summary akan diperbarui otomatis setelah sinkronisasi",
    ]


ACTION_ERROR_MESSAGES = {
    IuranSyncAction.SYNC_CURRENT_MONTH: PanelMessages.SYNC_FAILED,
    IuranSyncAction.GENERATE_MONTH: PanelMessages.GENERATE_MONTH_FAILED,
    IuranSyncAction.GENERATE_YEAR: PanelMessages.GENERATE_YEAR_FAILED,
}

__all__ = [
    "MONTH_NAMES",
    "CANDIDATE_YEARS",
    "IuranSyncAction",
    "IuranSyncStatus",
    "PanelMessages",
    "ACTION_ERROR_MESSAGES",
]
