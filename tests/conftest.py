from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from wireframe_studio.gateway import GatewayError
from wireframe_studio.models.generation import PageContext
from wireframe_studio.models.section import Section
from wireframe_studio.models.wireframe import Wireframe

FIXTURES_DIR = Path(__file__).resolve().parent.parent / "data" / "wireframes"


def load_fixture(name: str) -> Wireframe:
    fixture_path = FIXTURES_DIR / f"{name}.json"
    return Wireframe.import_json(fixture_path.read_text(encoding="utf-8"))


class FakeGateway:
    """In-process stand-in for the LLM gateway."""

    def __init__(
        self,
        *,
        page: list[tuple[str, dict[str, Any]]] | None = None,
        section_content: dict[str, dict[str, Any]] | None = None,
        regenerated: dict[str, Any] | None = None,
        fail: bool = False,
        failing_types: tuple[str, ...] = (),
    ) -> None:
        self.page = page or []
        self.section_content = section_content or {}
        self.regenerated = regenerated or {}
        self.fail = fail
        self.failing_types = failing_types
        self.calls: list[tuple[str, str]] = []

    def generate_section(self, section_type: str, prompt: str, context: PageContext) -> dict[str, Any]:
        self.calls.append(("generate_section", section_type))
        if self.fail or section_type in self.failing_types:
            raise GatewayError(f"{section_type} generation unavailable")
        return dict(self.section_content.get(section_type, {}))

    def generate_wireframe(self, prompt: str, context: PageContext) -> list[tuple[str, dict[str, Any]]]:
        self.calls.append(("generate_wireframe", prompt))
        if self.fail:
            raise GatewayError("wireframe generation unavailable")
        return [(section_type, dict(content)) for section_type, content in self.page]

    def regenerate_section(self, section: Section, context: PageContext) -> dict[str, Any]:
        self.calls.append(("regenerate_section", section.id))
        if self.fail or section.type in self.failing_types:
            raise GatewayError("Failed to parse generated section")
        return dict(self.regenerated)


@pytest.fixture
def travel_wireframe() -> Wireframe:
    return load_fixture("travel-booking")


@pytest.fixture
def page_context() -> PageContext:
    return PageContext(page_type="landing", page_name="Travel Booking Platform")
