from fastapi import APIRouter
from splitbook.api.v1.endpoints import groups, participants, expenses, settlements, balances, messages, notifications

api_router = APIRouter()

api_router.include_router(groups.router, prefix="/groups", tags=["groups"])
api_router.include_router(participants.router, prefix="/groups", tags=["participants"])
api_router.include_router(expenses.router, prefix="/groups", tags=["expenses"])
api_router.include_router(settlements.router, prefix="/groups", tags=["settlements"])
api_router.include_router(balances.router, prefix="/groups", tags=["balances"])
api_router.include_router(messages.router, prefix="/groups", tags=["chat"])
api_router.include_router(notifications.router, prefix="/notifications", tags=["notifications"])
