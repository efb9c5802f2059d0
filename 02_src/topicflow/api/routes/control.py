"""Control API routes: runtime reset and the demo traffic driver."""

from typing import Any

from pydantic import BaseModel
from fastapi import APIRouter, HTTPException

from ...app import IApplication


class StatusResponse(BaseModel):
    """Response model for status."""

    status: str


class SimStatusResponse(BaseModel):
    """Demo driver state."""

    running: bool
    sent: int


# Set by main.py when the demo driver is enabled
_sim_instance: Any = None


def set_sim_instance(sim: Any) -> None:
    """Set the global SIM instance."""
    global _sim_instance
    _sim_instance = sim


def get_sim_instance() -> Any:
    """Get the global SIM instance."""
    return _sim_instance


def _require_sim() -> Any:
    if _sim_instance is None:
        raise HTTPException(status_code=404, detail="SIM not configured")
    return _sim_instance


def create_control_router(app: IApplication) -> APIRouter:
    """Create control router."""
    router = APIRouter(prefix="/api/control", tags=["control"])

    @router.post("/reset", response_model=StatusResponse)
    def reset_system() -> dict:
        """Unload the active config and drop recorded events."""
        try:
            app.reset()
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
        return {"status": "ok"}

    @router.get("/sim", response_model=SimStatusResponse)
    def sim_status() -> dict:
        sim = _require_sim()
        return {"running": sim.running, "sent": sim.sent}

    @router.post("/sim/start", response_model=StatusResponse)
    async def start_sim() -> dict:
        """Load the demo config and start publishing random inputs."""
        sim = _require_sim()
        try:
            await sim.start()
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
        return {"status": "ok"}

    @router.post("/sim/stop", response_model=StatusResponse)
    async def stop_sim() -> dict:
        """Stop the demo driver; the loaded config stays active."""
        sim = _require_sim()
        try:
            await sim.stop()
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
        return {"status": "ok"}

    return router
