"""Iuran models package."""
from src.api.iuran.models.iuran_sync_execution import IuranSyncExecution

__all__ = ["IuranSyncExecution"]
