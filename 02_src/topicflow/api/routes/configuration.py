"""Config load/unload API routes."""

from pydantic import BaseModel, Field
from fastapi import APIRouter

from ...app import IApplication
from ...errors import ConfigError
from ...logging_config import get_logger

logger = get_logger(__name__)


class ConfigLoadRequest(BaseModel):
    """Request model for loading a config."""

    config_text: str = Field(alias="configText")


class ConfigLoadResponse(BaseModel):
    """Response model for config load."""

    ok: bool
    topics: list[str] | None = None
    error: str | None = None


class OkResponse(BaseModel):
    """Plain acknowledgement."""

    ok: bool = True


def create_configuration_router(app: IApplication) -> APIRouter:
    """Create config router."""
    router = APIRouter(prefix="/api/config", tags=["config"])

    @router.post(
        "/load",
        response_model=ConfigLoadResponse,
        response_model_exclude_none=True,
    )
    def load_config(request: ConfigLoadRequest) -> dict:
        """Replace the active config with the posted one."""
        try:
            topics = app.load_config(request.config_text)
            return {"ok": True, "topics": topics}
        except ConfigError as e:
            return {"ok": False, "error": str(e)}
        except Exception as e:
            logger.exception("Unexpected config load failure")
            return {"ok": False, "error": str(e) or type(e).__name__}

    @router.post("/unload", response_model=OkResponse)
    def unload_config() -> dict:
        """Close the active config and clear all topics."""
        app.unload_config()
        return {"ok": True}

    return router
