from fastapi import APIRouter

from . import holidays, system

api_router = APIRouter()

api_router.include_router(system.router, prefix="/system", tags=["system"])
api_router.include_router(holidays.router, prefix="/holidays", tags=["holidays"])
