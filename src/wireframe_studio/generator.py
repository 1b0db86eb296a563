from __future__ import annotations

import asyncio
import logging
import random
from dataclasses import dataclass, field
from typing import Mapping, Sequence

from .gateway import GatewayError, GenerationGateway
from .layouts import DEFAULT_PAGE_SECTIONS, SECTION_TEMPLATES, SectionTemplate
from .models.generation import PageContext
from .models.section import Section, new_section_id
from .models.wireframe import Wireframe, utcnow
from .validator import build_fallback_section, ensure_content, synthesize_section

logger = logging.getLogger(__name__)


@dataclass
class SectionOutcome:
    section: Section
    fallback_applied: bool = False
    error: str | None = None


@dataclass
class WireframeOutcome:
    wireframe: Wireframe
    fallback_applied: bool = False
    errors: list[str] = field(default_factory=list)


class WireframeGenerator:
    """Runs generation through the gateway and keeps the results consistent.

    Every gateway failure degrades to a locally synthesized section, so callers
    always get a usable wireframe back.
    """

    def __init__(
        self,
        *,
        gateway: GenerationGateway | None = None,
        templates: Mapping[str, SectionTemplate] = SECTION_TEMPLATES,
        page_sections: Sequence[str] = DEFAULT_PAGE_SECTIONS,
        rng: random.Random | None = None,
    ) -> None:
        self._gateway = gateway
        self._templates = templates
        self._page_sections = tuple(page_sections)
        self._rng = rng or random.Random()

    @property
    def has_gateway(self) -> bool:
        return self._gateway is not None

    def generate_wireframe(
        self,
        prompt: str,
        context: PageContext,
        *,
        base: Wireframe | None = None,
        name: str | None = None,
    ) -> WireframeOutcome:
        errors: list[str] = []
        try:
            generated = self._require_gateway().generate_wireframe(prompt, context)
            sections = [
                synthesize_section(section_type, content, section_id=new_section_id())
                for section_type, content in generated
            ]
        except GatewayError as exc:
            logger.warning(
                "Wireframe generation failed, using default sections",
                exc_info=True,
                extra={"page_type": context.page_type, "page_name": context.page_name},
            )
            errors.append(str(exc))
            sections = self.fallback_sections()

        wireframe = self._assemble(sections, context, base=base, name=name)
        logger.info(
            "Generated wireframe",
            extra={
                "wireframe_id": wireframe.id,
                "sections_count": len(wireframe.sections),
                "fallback_applied": bool(errors),
            },
        )
        return WireframeOutcome(wireframe=wireframe, fallback_applied=bool(errors), errors=errors)

    def generate_section(self, section_type: str, prompt: str, context: PageContext) -> SectionOutcome:
        try:
            content = self._require_gateway().generate_section(section_type, prompt, context)
        except GatewayError as exc:
            logger.warning(
                "Section generation failed, using template content",
                exc_info=True,
                extra={"section_type": section_type},
            )
            return SectionOutcome(
                section=self._template_section(section_type),
                fallback_applied=True,
                error=str(exc),
            )
        return SectionOutcome(section=synthesize_section(section_type, content))

    async def generate_sections(
        self, section_types: Sequence[str], prompt: str, context: PageContext
    ) -> list[SectionOutcome]:
        """Generate one section per type concurrently; failures fall back independently."""
        return list(
            await asyncio.gather(
                *(
                    asyncio.to_thread(self.generate_section, section_type, prompt, context)
                    for section_type in section_types
                )
            )
        )

    async def generate_wireframe_by_sections(
        self,
        section_types: Sequence[str],
        prompt: str,
        context: PageContext,
        *,
        base: Wireframe | None = None,
        name: str | None = None,
    ) -> WireframeOutcome:
        """Build a page from one concurrent gateway call per section type."""
        outcomes = await self.generate_sections(section_types, prompt, context)
        errors = [outcome.error for outcome in outcomes if outcome.error]
        fallback_applied = any(outcome.fallback_applied for outcome in outcomes)
        wireframe = self._assemble(
            [outcome.section for outcome in outcomes], context, base=base, name=name
        )
        logger.info(
            "Generated wireframe by sections",
            extra={
                "wireframe_id": wireframe.id,
                "sections_count": len(wireframe.sections),
                "fallback_count": sum(outcome.fallback_applied for outcome in outcomes),
            },
        )
        return WireframeOutcome(wireframe=wireframe, fallback_applied=fallback_applied, errors=errors)

    def regenerate_section(self, section: Section, context: PageContext) -> SectionOutcome:
        previous = section.content_dict()
        try:
            content = self._require_gateway().regenerate_section(section, context)
        except GatewayError as exc:
            logger.warning(
                "Section regeneration failed, applying fallback section",
                exc_info=True,
                extra={"section_id": section.id, "section_type": section.type},
            )
            fallback = build_fallback_section(section, rng=self._rng)
            return SectionOutcome(section=fallback, fallback_applied=True, error=str(exc))

        content = ensure_content(section.type, content, previous=previous)
        regenerated = section.with_content(content)
        logger.info(
            "Regenerated section",
            extra={
                "section_id": section.id,
                "section_type": section.type,
                "previous_layout": section.layout,
                "layout": regenerated.layout,
            },
        )
        return SectionOutcome(section=regenerated)

    def fallback_sections(self) -> list[Section]:
        return [self._template_section(section_type) for section_type in self._page_sections]

    def _template_section(self, section_type: str) -> Section:
        template = self._templates.get(section_type)
        partial = dict(template.content) if template else None
        return synthesize_section(section_type, partial, section_id=new_section_id())

    def _assemble(
        self,
        sections: list[Section],
        context: PageContext,
        *,
        base: Wireframe | None,
        name: str | None,
    ) -> Wireframe:
        if base is None:
            return Wireframe(
                name=name or context.page_name,
                page_type=context.page_type,
                page_name=context.page_name,
                sections=sections,
            )
        return Wireframe(
            id=base.id,
            name=name or base.name,
            page_type=context.page_type,
            page_name=context.page_name,
            sections=sections,
            created_at=base.created_at,
            updated_at=utcnow(),
        )

    def _require_gateway(self) -> GenerationGateway:
        if self._gateway is None:
            raise GatewayError("No generation gateway configured")
        return self._gateway


__all__ = ["SectionOutcome", "WireframeGenerator", "WireframeOutcome"]
