"""Root conftest for engine and API tests.

Provides:
- Temporary LOG_DIR (set before any designbridge import)
- FastAPI AsyncClient over ASGITransport
- Canvas object builders shared by route tests
"""

from __future__ import annotations

import os
import tempfile

os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="designbridge-logs-"))

from typing import Any, AsyncGenerator, Dict, List  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402


# ---------------------------------------------------------------------------
# FastAPI test client
# ---------------------------------------------------------------------------

@pytest_asyncio.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client for testing FastAPI routes."""
    from app.main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


# ---------------------------------------------------------------------------
# Canvas builders
# ---------------------------------------------------------------------------

@pytest.fixture
def landing_objects() -> List[Dict[str, Any]]:
    """Navbar strip with a title plus one dark call-to-action button."""
    return [
        {
            "id": "nav", "type": "group", "left": 0, "top": 0, "width": 1200, "height": 64,
            "objects": [{"id": "nav-title", "type": "text", "text": "Dashboard",
                         "left": 24, "top": 20, "fontSize": 20}],
        },
        {
            "id": "cta", "type": "group", "left": 100, "top": 400, "width": 160, "height": 48,
            "fill": "#000000", "rx": 8,
            "objects": [{"id": "cta-label", "type": "text", "text": "Get Started",
                         "left": 120, "top": 412, "fontSize": 16}],
        },
    ]
