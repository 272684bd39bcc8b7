"""Service configuration constants: single source of truth for all env vars."""

import os
from pathlib import Path

# Server binding: used by entrypoint / uvicorn
API_HOST = os.getenv("API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("API_PORT", "8000"))

# CORS: comma-separated list of allowed origins (canvas editor front-end)
CORS_ORIGINS = [
    o.strip()
    for o in os.getenv("CORS_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000").split(",")
    if o.strip()
]

# Log directory: configurable via LOG_DIR env var for Docker
LOG_DIR = Path(os.getenv("LOG_DIR", str(Path(__file__).parent.parent / "logs")))

# Log level for engine + API loggers (DEBUG shows per-node classification decisions)
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Upper bound on top-level canvas objects accepted by the HTTP surface
MAX_SCENE_OBJECTS = int(os.getenv("MAX_SCENE_OBJECTS", "5000"))

# Seconds before an HTTP-triggered analysis is abandoned
ANALYSIS_TIMEOUT = float(os.getenv("ANALYSIS_TIMEOUT", "30"))
