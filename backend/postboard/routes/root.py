"""
PostBoard Backend — Root Route
================================

What:  GET / returns a static greeting pointing clients at /api/posts.
"""

from fastapi import APIRouter

from postboard.schemas.post import RootResponse

router = APIRouter(tags=["Root"])

GREETING = "Simple CRUD API running! Use /api/posts"


@router.get("/", response_model=RootResponse, summary="Service greeting")
async def root() -> RootResponse:
    return RootResponse(message=GREETING)
