from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

IconKind = Literal["instrument", "genre"]


@dataclass(frozen=True)
class MusicIcon:
    id: str
    name: str
    emoji: str
    kind: IconKind
