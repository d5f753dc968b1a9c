from __future__ import annotations

import logging
import os
import time
from dataclasses import dataclass
from io import BytesIO
from pathlib import Path

import numpy as np
from PIL import Image
from supabase import Client

from src.infrastructure.database.supabase_client import supabase_disabled

logger = logging.getLogger(__name__)


@dataclass
class StorageResult:
    path: str
    width: int
    height: int
    content_type: str
    size: int


class SupabaseStorage:
    """Avatar storage on a Supabase bucket, with a local directory fallback."""

    def __init__(self, client: Client | None) -> None:
        self.client = client
        self.bucket = os.getenv("SUPABASE_STORAGE_BUCKET", "avatars")
        self.disabled = supabase_disabled()
        self.local_dir = Path(os.getenv("SUPABASE_STORAGE_LOCAL_DIR", ".local_storage")) / self.bucket

    @property
    def local(self) -> bool:
        return self.disabled or self.client is None

    @staticmethod
    def _encode_png(array: np.ndarray) -> bytes:
        pixels = (np.clip(array, 0.0, 1.0) * 255.0).astype("uint8")
        img = Image.fromarray(pixels[..., :3])
        buf = BytesIO()
        img.save(buf, format="PNG")
        return buf.getvalue()

    def upload_avatar(self, user_id: str, array: np.ndarray) -> StorageResult:
        """Store an RGB float image as ``<user_id>-<millis>.png``."""
        data = self._encode_png(array)
        height, width = array.shape[:2]
        name = f"{user_id}-{int(time.time() * 1000)}.png"
        result = StorageResult(path=name, width=width, height=height, content_type="image/png", size=len(data))
        if self.local:
            self.local_dir.mkdir(parents=True, exist_ok=True)
            (self.local_dir / name).write_bytes(data)
            return result
        try:  # pragma: no cover - network
            self.client.storage.from_(self.bucket).upload(
                path=name,
                file=data,
                file_options={"content-type": "image/png", "cache-control": "3600", "upsert": "true"},
            )
        except Exception as exc:  # pragma: no cover - network
            raise RuntimeError(f"Storage upload failed: {exc}") from exc
        return result

    def list_user_files(self, user_id: str) -> list[str]:
        if self.local:
            if not self.local_dir.exists():
                return []
            return sorted(p.name for p in self.local_dir.glob(f"{user_id}-*"))
        try:  # pragma: no cover - network
            entries = self.client.storage.from_(self.bucket).list("", {"search": user_id})
        except Exception as exc:  # pragma: no cover - network
            raise RuntimeError(f"Storage list failed: {exc}") from exc
        return [e["name"] for e in entries or [] if e["name"].startswith(f"{user_id}-")]

    def remove_user_files(self, user_id: str) -> int:
        """Delete earlier avatars of ``user_id``; returns how many went."""
        names = self.list_user_files(user_id)
        if not names:
            return 0
        if self.local:
            for name in names:
                (self.local_dir / name).unlink(missing_ok=True)
            return len(names)
        try:  # pragma: no cover - network
            self.client.storage.from_(self.bucket).remove(names)
        except Exception as exc:  # pragma: no cover - network
            raise RuntimeError(f"Storage delete failed: {exc}") from exc
        return len(names)

    def get_public_url(self, path: str) -> str:
        if self.local:
            return f"/local-storage/{self.bucket}/{path}"
        return self.client.storage.from_(self.bucket).get_public_url(path)  # pragma: no cover - network
