"""Main entry point for topicflow."""

import os
from pathlib import Path

import uvicorn
from dotenv import load_dotenv

from sim import Sim
from topicflow.api import create_fastapi_app, get_app
from topicflow.api.routes import control
from topicflow.config import DEFAULT_SIM_INTERVAL, resolve_float
from topicflow.logging_config import get_logger, setup_logging


def main():
    """Run the HTTP server, optionally preloading a config file."""
    project_root = Path(__file__).resolve().parent.parent
    load_dotenv(project_root / ".env")
    setup_logging()
    logger = get_logger("topicflow.main")

    api_host = os.getenv("API_HOST", "localhost")
    api_port = int(os.getenv("API_PORT", "8000"))

    application = get_app()

    # CONFIG_FILE: agents to load before the first request
    config_file = os.getenv("CONFIG_FILE")
    if config_file:
        topics = application.load_config(Path(config_file).read_text(encoding="utf-8"))
        logger.info("Preloaded %s: topics %s", config_file, topics)

    control.set_sim_instance(
        Sim(
            api_url=f"http://{api_host}:{api_port}",
            interval=resolve_float(os.getenv("SIM_INTERVAL"), DEFAULT_SIM_INTERVAL),
        )
    )

    uvicorn.run(
        create_fastapi_app(application),
        host=api_host,
        port=api_port,
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )


if __name__ == "__main__":
    main()
