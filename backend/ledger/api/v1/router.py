from fastapi import APIRouter

from ledger.api.v1.bankroll import router as bankroll_router
from ledger.api.v1.profile import router as profile_router
from ledger.api.v1.system import router as system_router
from ledger.api.v1.tickets import router as tickets_router

api_router = APIRouter()
api_router.include_router(system_router)
api_router.include_router(profile_router)
api_router.include_router(tickets_router)
api_router.include_router(bankroll_router)
