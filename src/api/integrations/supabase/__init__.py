from .client import SupabaseIuranClient, IuranBackendError
from .config import SupabaseConfig

__all__ = [
    'SupabaseIuranClient',
    'SupabaseConfig',
    'IuranBackendError'
]
