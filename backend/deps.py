# backend/deps.py
from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from backend.services.user_service import UserService
from backend.services.user_store import UserStore
from backend.utils.database import get_db


async def get_user_service(request: Request, db: AsyncSession = Depends(get_db)) -> UserService:
    """One service per request, bound to that request's session."""
    return UserService(UserStore(db), bcrypt_rounds=request.app.state.bcrypt_rounds)
