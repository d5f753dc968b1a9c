from __future__ import annotations

import logging
from dataclasses import dataclass, field

from src.domain.services.avatar_service import AvatarService
from src.infrastructure.config import settings
from src.infrastructure.storage.supabase_storage import StorageResult, SupabaseStorage

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UploadedAvatar:
    url: str
    stored: StorageResult
    replaced: int


@dataclass
class UploadAvatarUseCase:
    storage: SupabaseStorage
    max_bytes: int = field(default_factory=lambda: settings.max_avatar_bytes)

    def execute(self, user_id: str, data: bytes, content_type: str | None) -> UploadedAvatar:
        """
        Crop, shrink and store a new profile photo.

        Earlier photos of the same user are removed first so the bucket keeps
        one avatar per user.

        Raises:
            ValueError: Not an image, too large, or undecodable.
        """
        if not content_type or not content_type.startswith("image/"):
            raise ValueError("Please upload an image file")
        if len(data) > self.max_bytes:
            raise ValueError(f"File size should be less than {self.max_bytes // (1024 * 1024)}MB")

        avatar = AvatarService.make_avatar(data)
        replaced = self.storage.remove_user_files(user_id)
        stored = self.storage.upload_avatar(user_id, avatar)
        logger.info("Stored avatar %s for %s (replaced %d)", stored.path, user_id, replaced)
        return UploadedAvatar(url=self.storage.get_public_url(stored.path), stored=stored, replaced=replaced)
