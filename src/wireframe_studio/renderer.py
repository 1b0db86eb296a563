"""HTML mock-up rendering of sections and wireframes."""

from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import Mapping

from jinja2 import Environment, FileSystemLoader, select_autoescape

from .models.section import Section
from .models.wireframe import Wireframe

TEMPLATES_DIR = Path(__file__).parent / "templates"

# (type, layout) -> template variant. Layouts missing here use the type default.
RENDER_VARIANTS: Mapping[str, Mapping[str, str]] = {
    "navigation": {
        "centered": "centered",
        "minimal": "minimal",
        "hamburger": "minimal",
        "sidebar": "sidebar",
    },
    "hero": {
        "split": "split",
        "imageBg": "background",
        "video": "background",
        "parallax": "background",
        "slideshow": "background",
        "minimal": "minimal",
    },
    "features": {
        "horizontal": "list",
        "vertical": "list",
        "alternating": "list",
        "sideImage": "list",
        "timeline": "timeline",
        "accordion": "accordion",
        "tabbed": "accordion",
    },
    "testimonials": {
        "quote": "quote",
        "spotlight": "quote",
        "minimal": "quote",
        "carousel": "carousel",
        "slider": "carousel",
        "avatars": "carousel",
    },
    "pricing": {
        "compact": "compact",
        "minimalist": "compact",
        "comparison": "comparison",
        "feature-focused": "comparison",
    },
    "contact": {
        "split": "split",
        "map": "split",
        "sidebar": "split",
        "minimal": "minimal",
        "card": "minimal",
        "boxed": "minimal",
    },
    "cta": {
        "banner": "banner",
        "full": "banner",
        "sticky": "banner",
        "notification": "banner",
        "side": "side",
    },
    "footer": {
        "simple": "simple",
        "minimal": "simple",
        "compact": "simple",
        "centered": "simple",
        "logo": "simple",
        "newsletter": "newsletter",
    },
}

DEFAULT_VARIANTS: Mapping[str, str] = {
    "navigation": "standard",
    "hero": "centered",
    "features": "grid",
    "testimonials": "grid",
    "pricing": "cards",
    "contact": "standard",
    "cta": "standard",
    "footer": "columns",
}


@lru_cache(maxsize=1)
def _env() -> Environment:
    env = Environment(
        loader=FileSystemLoader(str(TEMPLATES_DIR)),
        autoescape=select_autoescape(["html", "xml", "j2"]),
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["tojson_pretty"] = lambda value: json.dumps(value, indent=2, ensure_ascii=False)
    return env


def resolve_variant(section_type: str, layout: str | None) -> str | None:
    """Map ``(section_type, layout)`` to a template variant; ``None`` for unknown types."""
    if section_type not in DEFAULT_VARIANTS:
        return None
    return RENDER_VARIANTS[section_type].get(layout or "", DEFAULT_VARIANTS[section_type])


def render_section(section: Section) -> str:
    variant = resolve_variant(section.type, section.layout)
    template_name = f"sections/{section.type}.html.j2" if variant else "sections/custom.html.j2"
    return _env().get_template(template_name).render(
        section=section,
        content=section.content_dict(),
        layout=section.layout or "standard",
        variant=variant,
    )


def render_wireframe(wireframe: Wireframe) -> str:
    return _env().get_template("page.html.j2").render(
        wireframe=wireframe,
        sections=[render_section(section) for section in wireframe.sections],
    )


__all__ = ["DEFAULT_VARIANTS", "RENDER_VARIANTS", "render_section", "render_wireframe", "resolve_variant"]
