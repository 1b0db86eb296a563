from __future__ import annotations

import json
import logging
from typing import Any, Mapping, Protocol

import vertexai
from vertexai.generative_models import GenerationConfig, GenerativeModel

from .layouts import LAYOUT_CATALOG, layouts_for
from .models.generation import PageContext
from .models.section import Section

logger = logging.getLogger(__name__)


class GatewayError(RuntimeError):
    """The generation service failed or returned something unusable."""


class GenerationGateway(Protocol):
    def generate_section(
        self, section_type: str, prompt: str, context: PageContext
    ) -> dict[str, Any]:
        ...

    def generate_wireframe(
        self, prompt: str, context: PageContext
    ) -> list[tuple[str, dict[str, Any]]]:
        ...

    def regenerate_section(self, section: Section, context: PageContext) -> dict[str, Any]:
        ...


def strip_code_fence(text: str) -> str:
    text = text.strip()
    if text.startswith("```json"):
        text = text[7:]
    if text.startswith("```"):
        text = text[3:]
    if text.endswith("```"):
        text = text[:-3]
    return text.strip()


def _describe_catalog() -> str:
    return "\n".join(
        f"- {section_type}: {', '.join(layouts)}" for section_type, layouts in LAYOUT_CATALOG.items()
    )


def _section_summary(section: Section) -> str:
    content = section.content_dict()
    counts = {
        "navigation": ("menuItems", "menu items"),
        "features": ("features", "features"),
        "testimonials": ("testimonials", "testimonials"),
        "pricing": ("tiers", "pricing tiers"),
        "footer": ("menuGroups", "menu groups"),
    }
    if section.type in counts:
        key, label = counts[section.type]
        return f"with {len(content.get(key) or [])} {label}"
    if section.type == "hero":
        return f'with headline "{content.get("headline", "")}"'
    if section.type == "cta":
        return f'with heading "{content.get("heading", "")}"'
    if section.type == "contact":
        return "with contact form" if content.get("formFields") else "with contact information"
    return ""


def extract_content(result: Any) -> dict[str, Any]:
    """Pull the section content record out of a model response.

    Accepts ``{"content": {...}, "layout": ...}`` as well as a bare content
    record.
    """
    if not isinstance(result, Mapping):
        raise GatewayError("Generated section is not a JSON object")
    if "content" in result:
        content = result["content"]
        if not isinstance(content, Mapping):
            raise GatewayError("Generated section has invalid structure: content is not an object")
        content = dict(content)
        layout = result.get("layout")
        if isinstance(layout, str) and not content.get("layout"):
            content["layout"] = layout
        return content
    if "type" in result or "id" in result:
        raise GatewayError("Generated section has invalid structure: missing content")
    return dict(result)


class VertexAIGateway:
    """Generation gateway backed by Vertex AI Gemini models."""

    def __init__(
        self,
        *,
        project_id: str,
        location: str = "asia-northeast1",
        model_name: str = "gemini-1.5-pro",
        temperature: float = 0.7,
    ) -> None:
        self.project_id = project_id
        self.location = location
        self.model_name = model_name
        self.temperature = temperature

        vertexai.init(project=project_id, location=location)
        self.model = GenerativeModel(model_name)

    def generate_json(self, prompt: str, *, max_output_tokens: int = 8192) -> Any:
        """Send ``prompt`` in JSON mode and parse the reply.

        Any transport or parsing failure is raised as ``GatewayError``.
        """
        generation_config = GenerationConfig(
            temperature=self.temperature,
            max_output_tokens=max_output_tokens,
            response_mime_type="application/json",
        )
        try:
            response = self.model.generate_content(prompt, generation_config=generation_config)
            text = response.text
        except Exception as exc:
            raise GatewayError(f"Generation request failed: {exc}") from exc

        logger.info(
            "Generated content with Vertex AI",
            extra={
                "model": self.model_name,
                "temperature": self.temperature,
                "input_length": len(prompt),
                "output_length": len(text or ""),
            },
        )
        if not text:
            raise GatewayError("Generation returned an empty response")

        try:
            return json.loads(strip_code_fence(text))
        except json.JSONDecodeError as exc:
            raise GatewayError(f"Invalid JSON response: {exc}") from exc

    def generate_section(
        self, section_type: str, prompt: str, context: PageContext
    ) -> dict[str, Any]:
        layouts = layouts_for(section_type)
        layout_hint = (
            f"Choose one layout from: {', '.join(layouts)}."
            if layouts
            else "Pick a descriptive layout name."
        )
        request = f"""You are a website wireframe generation assistant.
Generate the content of a single "{section_type}" section for a {context.page_type} page called "{context.page_name}".

Page description:
{prompt}

{layout_hint}

Return ONLY a JSON object of the form {{"content": {{...section specific content...}}, "layout": "<layout>"}}.
"""
        return extract_content(self.generate_json(request))

    def generate_wireframe(
        self, prompt: str, context: PageContext
    ) -> list[tuple[str, dict[str, Any]]]:
        request = f"""You are a website wireframe generation assistant. Convert the text description into structured JSON for a wireframe renderer.

The JSON must follow this structure:
{{
  "pageType": "{context.page_type}",
  "pageName": "{context.page_name}",
  "sections": [
    {{"id": "unique-id", "type": "section-type", "content": {{"layout": "<layout>", "...": "section specific content"}}}}
  ]
}}

Always generate 5-7 sections: a navigation section, a hero section, 3-4 content sections
(features, testimonials, pricing, contact, cta) and a footer section.

Available section types and their layouts:
{_describe_catalog()}

Vary the layouts through the page to create visual interest.

Create a wireframe for a {context.page_type} page called "{context.page_name}" based on this description:
{prompt}

Return ONLY the JSON with no additional text or explanation.
"""
        result = self.generate_json(request)
        if not isinstance(result, Mapping) or not isinstance(result.get("sections"), list):
            raise GatewayError("Generated wireframe has no sections list")

        sections: list[tuple[str, dict[str, Any]]] = []
        for item in result["sections"]:
            if not isinstance(item, Mapping) or not isinstance(item.get("type"), str):
                logger.warning("Skipping malformed generated section", extra={"item": repr(item)[:200]})
                continue
            content = item.get("content")
            sections.append((item["type"], dict(content) if isinstance(content, Mapping) else {}))
        if not sections:
            raise GatewayError("Generated wireframe contains no usable sections")
        return sections

    def regenerate_section(self, section: Section, context: PageContext) -> dict[str, Any]:
        layouts = layouts_for(section.type)
        request = f"""You are an expert UI/UX designer specializing in modern website wireframes.
Regenerate a {section.type} section for a {context.page_type} page called "{context.page_name}" {_section_summary(section)}.

Available layout options for {section.type} sections:
{', '.join(layouts)}

The current section layout is: {section.layout or 'standard'}
Change the layout to a different one and keep the same general content, adapted to the new layout.

Current section:
{json.dumps(section.to_payload(), ensure_ascii=False)}

Return ONLY the section JSON ({{"id": ..., "type": ..., "content": {{...}}}}) with no additional text.
"""
        return extract_content(self.generate_json(request))


__all__ = [
    "GatewayError",
    "GenerationGateway",
    "VertexAIGateway",
    "extract_content",
    "strip_code_fence",
]
