"""Topic API routes."""

from typing import Literal

from pydantic import BaseModel
from fastapi import APIRouter, HTTPException

from ...app import IApplication


class PublishRequest(BaseModel):
    """Request model for publishing onto a topic."""

    type: Literal["double", "text"] = "text"
    value: str


class PublishResponse(BaseModel):
    """Response model for publish."""

    ok: bool


class TopicsResponse(BaseModel):
    """Response model for topic listing."""

    topics: list[str]


def create_topics_router(app: IApplication) -> APIRouter:
    """Create topics router."""
    router = APIRouter(prefix="/api/topics", tags=["topics"])

    # Plain def: publish may block on a full mailbox, so it runs in the threadpool
    @router.post("/{name}/publish", response_model=PublishResponse)
    def publish(name: str, request: PublishRequest) -> dict:
        """Publish a UI input on a topic."""
        try:
            app.publish(name, request.value, request.type)
            return {"ok": True}
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))

    @router.get("", response_model=TopicsResponse)
    def list_topics() -> dict:
        """Sorted names of all topics."""
        return {"topics": app.topic_names()}

    return router
