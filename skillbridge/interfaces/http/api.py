from fastapi import APIRouter

from .routers import auth, chat, credits, feedback, meetings, users


def create_api_router(prefix: str = "") -> APIRouter:
    router = APIRouter(prefix=prefix)
    router.include_router(auth.router, prefix="/auth", tags=["auth"])
    router.include_router(users.router, prefix="/users", tags=["users"])
    router.include_router(credits.router, prefix="/credits", tags=["credits"])
    router.include_router(meetings.router, prefix="/meetings", tags=["meetings"])
    router.include_router(feedback.router, prefix="/feedback", tags=["feedback"])
    router.include_router(chat.router, prefix="/chat", tags=["chat"])
    return router


__all__ = [
    "create_api_router",
]
