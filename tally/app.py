"""FastAPI application factory. uvicorn serves the module-level ``app``."""

import os
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI

from tally import storage
from tally.routes import router

REPO_ROOT = Path(__file__).resolve().parent.parent

load_dotenv(REPO_ROOT / ".env")


def create_app(data_dir: Path | None = None) -> FastAPI:
    """Build the API, storing data in data_dir, else $DATA_DIR, else ./data."""
    storage.init_storage(data_dir or Path(os.getenv("DATA_DIR", REPO_ROOT / "data")))
    app = FastAPI(title="Table Tally", description="Scores, outcomes and character deaths for game nights")
    app.include_router(router, prefix="/api")
    return app


app = create_app()
