from __future__ import annotations

import copy
import logging
import random
from collections import defaultdict
from typing import Any, Mapping

from pydantic import BaseModel, ValidationError

from .layouts import default_layout, layouts_for
from .models.section import Section, SectionContent, content_model_for

logger = logging.getLogger(__name__)


# Minimum fields a renderer needs, with the value substituted when missing.
REQUIRED_DEFAULTS: Mapping[str, Mapping[str, Any]] = {
    "navigation": {
        "logo": "Logo",
        "menuItems": ["Home", "About", "Contact"],
    },
    "hero": {
        "headline": "Welcome to our website",
    },
    "features": {
        "features": [
            {"title": "Feature 1", "description": "Description of feature 1"},
            {"title": "Feature 2", "description": "Description of feature 2"},
            {"title": "Feature 3", "description": "Description of feature 3"},
        ],
    },
    "testimonials": {
        "testimonials": [
            {"quote": "This is an amazing service!", "author": "John Doe"},
        ],
    },
    "pricing": {
        "tiers": [
            {"name": "Basic", "price": "$9.99", "features": ["Feature 1", "Feature 2"]},
            {"name": "Pro", "price": "$19.99", "features": ["Feature 1", "Feature 2", "Feature 3"]},
        ],
    },
    "contact": {
        "heading": "Contact Us",
        "email": "info@example.com",
    },
    "cta": {
        "heading": "Ready to get started?",
        "buttonText": "Get Started Now",
    },
    "footer": {},
}

# Extra copy filled in only when a fallback section replaces a failed regeneration.
FALLBACK_EXTRAS: Mapping[str, Mapping[str, Any]] = {
    "hero": {"subheadline": "Discover what we have to offer"},
}


def _has_shape(value: Any, default: Any) -> bool:
    if isinstance(default, list):
        return isinstance(value, list)
    if isinstance(default, str):
        return isinstance(value, str) and bool(value.strip())
    return value is not None


def coerce_layout(section_type: str, layout: Any) -> str | None:
    """Return ``layout`` if the catalog allows it for ``section_type``, else the default.

    Custom kinds have no catalog entry and keep any string layout they carry.
    """
    layouts = layouts_for(section_type)
    if not layouts:
        return layout if isinstance(layout, str) else None
    if layout in layouts:
        return layout
    return layouts[0]


def ensure_content(
    section_type: str,
    candidate: Any,
    *,
    previous: Mapping[str, Any] | None = None,
) -> dict[str, Any]:
    """Fill in the fields a renderer needs for ``section_type``.

    Total: any input, including non-mappings, yields a content record where
    every required field is present with the right shape. When ``previous``
    content is given (regeneration), its values are preferred over the static
    defaults.
    """
    content = dict(candidate) if isinstance(candidate, Mapping) else {}
    previous = previous if isinstance(previous, Mapping) else {}

    for key, default in REQUIRED_DEFAULTS.get(section_type, {}).items():
        if _has_shape(content.get(key), default):
            continue
        if _has_shape(previous.get(key), default):
            content[key] = copy.deepcopy(previous[key])
        else:
            content[key] = copy.deepcopy(default)

    content["layout"] = coerce_layout(section_type, content.get("layout"))
    return content


def _drop_invalid(content: dict[str, Any], exc: ValidationError) -> dict[str, Any]:
    """Remove the keys (or list items) a validation error points at."""
    repaired = dict(content)
    bad_items: dict[str, set[int]] = defaultdict(set)
    for error in exc.errors():
        loc = error.get("loc") or ()
        if not loc or loc[0] not in repaired:
            continue
        key = loc[0]
        value = repaired[key]
        if len(loc) > 1 and isinstance(loc[1], int) and isinstance(value, list):
            bad_items[key].add(loc[1])
        else:
            repaired.pop(key)

    for key, indexes in bad_items.items():
        if key in repaired:
            repaired[key] = [item for idx, item in enumerate(repaired[key]) if idx not in indexes]
    return repaired


def parse_content(
    section_type: str,
    candidate: Any,
    *,
    previous: Mapping[str, Any] | None = None,
) -> SectionContent:
    """Validate ``candidate`` into the typed content model for ``section_type``.

    Values with the wrong shape are dropped and required fields are defaulted
    again, so this never raises.
    """
    model_cls = content_model_for(section_type)
    if isinstance(candidate, BaseModel):
        candidate = candidate.model_dump(by_alias=True, exclude_unset=True)

    content = ensure_content(section_type, candidate, previous=previous)
    while True:
        try:
            return model_cls.model_validate(content)
        except ValidationError as exc:
            repaired = _drop_invalid(content, exc)
            if repaired == content:
                break
            logger.debug(
                "Dropped malformed content fields",
                extra={"section_type": section_type, "error_count": exc.error_count()},
            )
            content = ensure_content(section_type, repaired, previous=previous)

    logger.warning(
        "Content could not be repaired, using defaults",
        extra={"section_type": section_type},
    )
    return model_cls.model_validate(ensure_content(section_type, {}))


def choose_fallback_layout(
    section_type: str,
    current: str | None,
    rng: random.Random | None = None,
) -> str | None:
    """Pick a layout different from ``current``, uniformly at random.

    Keeps ``current`` when the catalog offers at most one layout.
    """
    layouts = layouts_for(section_type)
    if len(layouts) <= 1:
        return current
    candidates = [layout for layout in layouts if layout != current]
    return (rng or random).choice(candidates)


def build_fallback_section(section: Section, rng: random.Random | None = None) -> Section:
    """Synthesize the section shown when regenerating ``section`` failed.

    Keeps the id, type and whatever content is usable, and switches to a
    different layout so the regeneration still changes something visible.
    """
    content = ensure_content(section.type, section.content_dict())
    for key, value in FALLBACK_EXTRAS.get(section.type, {}).items():
        if not _has_shape(content.get(key), value):
            content[key] = copy.deepcopy(value)

    current = section.layout or default_layout(section.type)
    content["layout"] = choose_fallback_layout(section.type, current, rng)
    return Section.model_validate({"id": section.id, "type": section.type, "content": content})


def synthesize_section(
    section_type: str,
    partial: Mapping[str, Any] | None = None,
    *,
    section_id: str | None = None,
) -> Section:
    """Build a section locally from ``partial`` content plus the defaults."""
    payload: dict[str, Any] = {"type": section_type, "content": ensure_content(section_type, partial)}
    if section_id:
        payload["id"] = section_id
    return Section.model_validate(payload)


__all__ = [
    "FALLBACK_EXTRAS",
    "REQUIRED_DEFAULTS",
    "build_fallback_section",
    "choose_fallback_layout",
    "coerce_layout",
    "ensure_content",
    "parse_content",
    "synthesize_section",
]
