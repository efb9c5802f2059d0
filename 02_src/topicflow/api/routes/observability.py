"""Observability API routes: graph view and flow events."""

import asyncio
import json

from pydantic import BaseModel, ConfigDict, Field
from fastapi import APIRouter, Query, Request
from fastapi.responses import StreamingResponse

from ...app import IApplication
from ...config import DEFAULT_EVENTS_LIMIT
from ...event_bus import StreamSubscriber

# Seconds between disconnect checks while the stream is idle
STREAM_POLL_SECONDS = 1.0


class GraphNodeResponse(BaseModel):
    """Node of the topic/agent graph."""

    id: str
    kind: str


class GraphEdgeResponse(BaseModel):
    """Directed edge of the topic/agent graph."""

    model_config = ConfigDict(populate_by_name=True)

    from_: str = Field(alias="from")
    to: str


class GraphResponse(BaseModel):
    """Response model for the graph view."""

    model_config = ConfigDict(populate_by_name=True)

    nodes: list[GraphNodeResponse]
    edges: list[GraphEdgeResponse]
    has_cycles: bool = Field(alias="hasCycles")


class FlowEventResponse(BaseModel):
    """Response model for a flow event."""

    model_config = ConfigDict(populate_by_name=True)

    ts: int
    type: str
    from_: str = Field(alias="from")
    value: float | None = None


class EventsResponse(BaseModel):
    """Response model for recent events."""

    events: list[FlowEventResponse]


def create_observability_router(app: IApplication) -> APIRouter:
    """Create observability router."""
    router = APIRouter(prefix="/api", tags=["observability"])

    @router.get("/graph", response_model=GraphResponse)
    def get_graph() -> dict:
        """Snapshot of the current topic/agent wiring."""
        graph = app.build_graph()
        data = graph.to_dict()
        data["hasCycles"] = graph.has_cycles()
        return data

    @router.get("/events", response_model=EventsResponse)
    def get_events(
        limit: int = Query(DEFAULT_EVENTS_LIMIT, description="Most recent N events"),
    ) -> dict:
        """Most recent events, oldest first."""
        return {"events": [e.to_dict() for e in app.events(limit)]}

    @router.get("/events/stream")
    async def stream_events(request: Request) -> StreamingResponse:
        """Live Server-Sent Events feed, one frame per FlowEvent."""
        subscriber = StreamSubscriber()
        app.event_bus.subscribe(subscriber)

        async def generate_events():
            try:
                while not subscriber.closed:
                    if await request.is_disconnected():
                        break
                    event = await asyncio.to_thread(subscriber.get, STREAM_POLL_SECONDS)
                    if event is not None:
                        yield f"data: {json.dumps(event.to_dict())}\n\n"
            finally:
                subscriber.close()
                app.event_bus.unsubscribe(subscriber)

        return StreamingResponse(
            generate_events(),
            media_type="text/event-stream",
            headers={
                "Cache-Control": "no-cache",
                "Connection": "keep-alive",
                "X-Accel-Buffering": "no",
            },
        )

    return router
