from fastapi import APIRouter
from src.api.iuran.endpoints.sync_panel import router as iuran_sync_router

api_router = APIRouter()

# Include all domain routers
api_router.include_router(iuran_sync_router)
