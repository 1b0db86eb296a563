from __future__ import annotations

import re
import uuid
from datetime import date, datetime, timezone
from typing import Any
from urllib.parse import quote

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from .section import Section


class WireframeImportError(ValueError):
    """Raised when a serialized wireframe cannot be parsed back."""


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Wireframe(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    name: str = "New Wireframe"
    page_type: str = Field(default="landing", alias="pageType")
    page_name: str = Field(default="Home", alias="pageName")
    sections: list[Section] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=utcnow, alias="createdAt")
    updated_at: datetime = Field(default_factory=utcnow, alias="updatedAt")

    @model_validator(mode="after")
    def _check_unique_section_ids(self) -> "Wireframe":
        seen: set[str] = set()
        for section in self.sections:
            if section.id in seen:
                raise ValueError(f"duplicate section id: {section.id}")
            seen.add(section.id)
        return self

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")

    def export_json(self) -> str:
        return self.model_dump_json(by_alias=True, indent=2)

    @classmethod
    def import_json(cls, payload: str | bytes) -> "Wireframe":
        try:
            return cls.model_validate_json(payload)
        except ValidationError as exc:
            raise WireframeImportError(f"Invalid wireframe payload: {exc}") from exc

    def export_filename(self, today: date | None = None, *, ascii_only: bool = True) -> str:
        """Download name ``wireframe-<slug>-<date>.json``.

        The default slug keeps ASCII letters and digits only, so it is safe in
        an HTTP header. With ``ascii_only=False`` the name is kept as typed,
        with whitespace collapsed to dashes.
        """
        name = self.name.strip().lower()
        pattern = r"[^a-z0-9]+" if ascii_only else r"\s+"
        slug = re.sub(pattern, "-", name).strip("-") or "untitled"
        day = (today or date.today()).isoformat()
        return f"wireframe-{slug}-{day}.json"

    def content_disposition(self, today: date | None = None) -> str:
        """``attachment`` header value with an RFC 5987 UTF-8 filename alongside the ASCII one."""
        today = today or date.today()
        fallback = self.export_filename(today)
        original = quote(self.export_filename(today, ascii_only=False), safe="")
        return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{original}"


__all__ = ["Wireframe", "WireframeImportError", "utcnow"]
