from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol

from .models.wireframe import Wireframe, WireframeImportError

logger = logging.getLogger(__name__)

ACTIVE_WIREFRAME_KEY = "activeWireframe"


class WireframeRepository(Protocol):
    def load(self) -> Wireframe | None:
        ...

    def save(self, wireframe: Wireframe) -> None:
        ...

    def clear(self) -> None:
        ...


class LocalWireframeRepository:
    """Client-local persisted state: one wireframe stored under a fixed key."""

    def __init__(self, *, base_path: Path, key: str = ACTIVE_WIREFRAME_KEY) -> None:
        self._file_path = base_path / f"{key}.json"

    @property
    def file_path(self) -> Path:
        return self._file_path

    def load(self) -> Wireframe | None:
        if not self._file_path.exists():
            return None
        try:
            payload = self._file_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise WireframeImportError(f"Cannot read {self._file_path}: {exc}") from exc
        return Wireframe.import_json(payload)

    def save(self, wireframe: Wireframe) -> None:
        self._file_path.parent.mkdir(parents=True, exist_ok=True)
        self._file_path.write_text(wireframe.export_json(), encoding="utf-8")
        logger.debug(
            "Saved active wireframe",
            extra={"wireframe_id": wireframe.id, "sections_count": len(wireframe.sections)},
        )

    def clear(self) -> None:
        self._file_path.unlink(missing_ok=True)


class InMemoryWireframeRepository:
    def __init__(self, wireframe: Wireframe | None = None) -> None:
        self._payload = wireframe.export_json() if wireframe else None

    def load(self) -> Wireframe | None:
        if self._payload is None:
            return None
        return Wireframe.import_json(self._payload)

    def save(self, wireframe: Wireframe) -> None:
        self._payload = wireframe.export_json()

    def clear(self) -> None:
        self._payload = None


__all__ = [
    "ACTIVE_WIREFRAME_KEY",
    "InMemoryWireframeRepository",
    "LocalWireframeRepository",
    "WireframeRepository",
]
