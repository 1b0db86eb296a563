from __future__ import annotations

import logging
import threading
from typing import Callable

from .layouts import DEFAULT_PAGE_SECTIONS, SECTION_TEMPLATES
from .models.section import Section
from .models.wireframe import Wireframe, WireframeImportError, utcnow
from .section_store import SectionStore, StoreResult
from .validator import synthesize_section
from .wireframe_repository import WireframeRepository

logger = logging.getLogger(__name__)


def default_wireframe() -> Wireframe:
    """Starter wireframe shown before anything has been generated."""
    sections = [
        synthesize_section(section_type, SECTION_TEMPLATES[section_type].content)
        for section_type in DEFAULT_PAGE_SECTIONS
    ]
    return Wireframe(name="New Wireframe", page_type="landing", page_name="Home", sections=sections)


class EditorSession:
    """One interactive editing session: the active wireframe and its persisted copy.

    The session is constructed explicitly and handed to whoever serves the
    editor. ``load`` hydrates from the repository, ``save`` overwrites the
    stored copy wholesale; mutations that were applied are saved immediately.
    """

    def __init__(
        self,
        *,
        repository: WireframeRepository,
        wireframe_factory: Callable[[], Wireframe] = default_wireframe,
    ) -> None:
        self._repository = repository
        self._wireframe_factory = wireframe_factory
        self._lock = threading.Lock()
        self._wireframe: Wireframe | None = None
        self._store = SectionStore()

    @property
    def store(self) -> SectionStore:
        self._ensure_loaded()
        return self._store

    @property
    def wireframe(self) -> Wireframe:
        wireframe = self._ensure_loaded()
        return wireframe.model_copy(update={"sections": self._store.snapshot()})

    def load(self) -> Wireframe:
        try:
            stored = self._repository.load()
        except WireframeImportError:
            logger.warning("Persisted wireframe is unreadable, starting fresh", exc_info=True)
            stored = None
        with self._lock:
            self._set(stored or self._wireframe_factory())
        logger.info(
            "Loaded active wireframe",
            extra={"wireframe_id": self._wireframe.id, "restored": stored is not None},
        )
        return self.wireframe

    def save(self) -> Wireframe:
        with self._lock:
            self._wireframe = self._ensure_loaded().model_copy(update={"updated_at": utcnow()})
            wireframe = self._wireframe.model_copy(update={"sections": self._store.snapshot()})
            self._repository.save(wireframe)
        return wireframe

    def replace(self, wireframe: Wireframe) -> Wireframe:
        with self._lock:
            self._set(wireframe)
        return self.save()

    def clear(self) -> Wireframe:
        self._repository.clear()
        with self._lock:
            self._set(self._wireframe_factory())
        return self.wireframe

    def add_section(self, section: Section) -> Section:
        added = self.store.add(section)
        self.save()
        return added

    def apply(self, mutation: Callable[[SectionStore], StoreResult]) -> StoreResult:
        """Run ``mutation`` against the store and persist it if it was applied."""
        result = mutation(self.store)
        if result.is_applied:
            self.save()
        return result

    def _ensure_loaded(self) -> Wireframe:
        if self._wireframe is None:
            self._set(self._wireframe_factory())
        return self._wireframe

    def _set(self, wireframe: Wireframe) -> None:
        self._wireframe = wireframe.model_copy(update={"sections": []})
        self._store = SectionStore(wireframe.sections)


__all__ = ["EditorSession", "default_wireframe"]
