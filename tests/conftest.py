import io
import os
import sys
import tempfile
from pathlib import Path

import numpy as np
import pytest
from fastapi.testclient import TestClient
from PIL import Image

# Ensure project root is on sys.path so 'src' is importable during tests
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

os.environ.setdefault("SUPABASE_DISABLED", "1")
os.environ.setdefault("SUPABASE_STORAGE_LOCAL_DIR", tempfile.mkdtemp(prefix="jamboree-storage-"))


@pytest.fixture(scope="session")
def client() -> TestClient:
    # lazy import after env configured
    from src.main import create_app

    app = create_app()
    return TestClient(app)


@pytest.fixture(autouse=True)
def clean_memory_stores():
    from src.infrastructure.database.repositories import (
        event_repository,
        profile_repository,
        user_repository,
    )

    yield
    profile_repository._MEM_PROFILES.clear()
    user_repository._MEM_USERS.clear()
    event_repository._MEM_EVENTS.clear()


@pytest.fixture()
def auth_header() -> dict[str, str]:
    # any token is accepted in disabled mode
    return {"Authorization": "Bearer test-token"}


def bearer(user_id: str) -> dict[str, str]:
    """Header that signs in as ``user_id`` in disabled mode."""
    return {"Authorization": f"Bearer user-{user_id}"}


def make_png_bytes(w=8, h=4, color=(200, 120, 40)) -> bytes:
    arr = np.zeros((h, w, 3), dtype=np.uint8)
    arr[:, :] = color
    buf = io.BytesIO()
    Image.fromarray(arr).save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture()
def as_user():
    return bearer


@pytest.fixture()
def png_bytes() -> bytes:
    return make_png_bytes()
