from __future__ import annotations

import logging
import random
import threading
from enum import Enum
from typing import Iterable, Iterator

from .models.section import Section
from .validator import choose_fallback_layout

logger = logging.getLogger(__name__)


class StoreResult(str, Enum):
    applied = "applied"
    ignored_not_found = "ignored_not_found"
    ignored_boundary = "ignored_boundary"

    @property
    def is_applied(self) -> bool:
        return self is StoreResult.applied


class MoveDirection(str, Enum):
    up = "up"
    down = "down"


class DuplicateSectionError(ValueError):
    pass


class SectionStore:
    """Ordered sections of one wireframe plus the active selection.

    Every mutation swaps in a freshly built tuple, so the full state is always
    recoverable from ``sections`` and ``active_id`` alone. Operations on an
    unknown id are reported as ``StoreResult.ignored_not_found`` rather than
    raised: a section may be deleted while its regeneration is still in flight.
    """

    def __init__(self, sections: Iterable[Section] = (), *, active_id: str | None = None) -> None:
        self._sections: tuple[Section, ...] = tuple(sections)
        self._check_unique(self._sections)
        ids = {section.id for section in self._sections}
        if active_id not in ids:
            active_id = self._sections[0].id if self._sections else None
        self._active_id = active_id
        self._lock = threading.Lock()

    @property
    def sections(self) -> tuple[Section, ...]:
        return self._sections

    @property
    def active_id(self) -> str | None:
        return self._active_id

    def __len__(self) -> int:
        return len(self._sections)

    def __iter__(self) -> Iterator[Section]:
        return iter(self._sections)

    def snapshot(self) -> list[Section]:
        return list(self._sections)

    def get(self, section_id: str) -> Section | None:
        index = self._index_of(section_id)
        return None if index is None else self._sections[index]

    def add(self, section: Section) -> Section:
        with self._lock:
            if self._index_of(section.id) is not None:
                raise DuplicateSectionError(f"Section id already exists: {section.id}")
            self._sections = (*self._sections, section)
            self._active_id = section.id
        logger.debug("Added section", extra={"section_id": section.id, "section_type": section.type})
        return section

    def update(self, section_id: str, section: Section) -> StoreResult:
        with self._lock:
            return self._replace(section_id, section)

    def delete(self, section_id: str) -> StoreResult:
        with self._lock:
            index = self._index_of(section_id)
            if index is None:
                return self._ignored("delete", section_id)
            remaining = self._sections[:index] + self._sections[index + 1 :]
            if self._active_id == section_id:
                if index > 0:
                    self._active_id = remaining[index - 1].id
                elif remaining:
                    self._active_id = remaining[0].id
                else:
                    self._active_id = None
            self._sections = remaining
            return StoreResult.applied

    def move(self, section_id: str, direction: MoveDirection | str) -> StoreResult:
        direction = MoveDirection(direction)
        with self._lock:
            index = self._index_of(section_id)
            if index is None:
                return self._ignored("move", section_id)
            target = index - 1 if direction is MoveDirection.up else index + 1
            if target < 0 or target >= len(self._sections):
                return StoreResult.ignored_boundary
            sections = list(self._sections)
            sections[index], sections[target] = sections[target], sections[index]
            self._sections = tuple(sections)
            return StoreResult.applied

    def select(self, section_id: str) -> StoreResult:
        with self._lock:
            if self._index_of(section_id) is None:
                return self._ignored("select", section_id)
            self._active_id = section_id
            return StoreResult.applied

    def set_layout(self, section_id: str, layout: str) -> StoreResult:
        with self._lock:
            current = self.get(section_id)
            if current is None:
                return self._ignored("set_layout", section_id)
            content = current.content_dict()
            content["layout"] = layout
            return self._replace(section_id, current.with_content(content))

    def shuffle_layout(self, section_id: str, rng: random.Random | None = None) -> StoreResult:
        """Switch the section to a random layout different from its current one."""
        with self._lock:
            current = self.get(section_id)
            if current is None:
                return self._ignored("shuffle_layout", section_id)
            content = current.content_dict()
            content["layout"] = choose_fallback_layout(current.type, current.layout, rng)
            return self._replace(section_id, current.with_content(content))

    def _replace(self, section_id: str, section: Section) -> StoreResult:
        index = self._index_of(section_id)
        if index is None:
            return self._ignored("update", section_id)
        if section.id != section_id:
            section = section.model_copy(update={"id": section_id})
        self._sections = self._sections[:index] + (section,) + self._sections[index + 1 :]
        return StoreResult.applied

    def _index_of(self, section_id: str) -> int | None:
        for index, section in enumerate(self._sections):
            if section.id == section_id:
                return index
        return None

    def _ignored(self, operation: str, section_id: str) -> StoreResult:
        logger.info(
            "Section not found, operation ignored",
            extra={"operation": operation, "section_id": section_id},
        )
        return StoreResult.ignored_not_found

    @staticmethod
    def _check_unique(sections: Iterable[Section]) -> None:
        seen: set[str] = set()
        for section in sections:
            if section.id in seen:
                raise DuplicateSectionError(f"Section id already exists: {section.id}")
            seen.add(section.id)


__all__ = ["DuplicateSectionError", "MoveDirection", "SectionStore", "StoreResult"]
