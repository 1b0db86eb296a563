import asyncio
import random

from conftest import FakeGateway

from wireframe_studio.generator import WireframeGenerator
from wireframe_studio.layouts import DEFAULT_PAGE_SECTIONS, layouts_for


def test_generate_wireframe_normalizes_gateway_sections(page_context):
    gateway = FakeGateway(
        page=[
            ("navigation", {"logo": "Travel Co", "layout": "sidebar"}),
            ("hero", {"headline": "Go places", "layout": "warp-speed"}),
            ("faq", {"questions": ["Refunds?"], "layout": "stacked"}),
        ]
    )
    generator = WireframeGenerator(gateway=gateway)

    outcome = generator.generate_wireframe("Travel booking site", page_context)

    assert not outcome.fallback_applied
    assert outcome.errors == []
    sections = outcome.wireframe.sections
    assert [section.type for section in sections] == ["navigation", "hero", "faq"]
    assert sections[0].content.menu_items == ["Home", "About", "Contact"]
    assert sections[0].layout == "sidebar"
    assert sections[1].layout == "centered"
    assert sections[2].layout == "stacked"
    assert len({section.id for section in sections}) == 3
    assert outcome.wireframe.page_name == "Travel Booking Platform"


def test_generate_wireframe_falls_back_to_starter_sections(page_context):
    generator = WireframeGenerator(gateway=FakeGateway(fail=True))

    outcome = generator.generate_wireframe("Travel booking site", page_context)

    assert outcome.fallback_applied
    assert outcome.errors == ["wireframe generation unavailable"]
    assert [section.type for section in outcome.wireframe.sections] == list(DEFAULT_PAGE_SECTIONS)


def test_generate_wireframe_keeps_base_identity(travel_wireframe, page_context):
    generator = WireframeGenerator(gateway=FakeGateway(page=[("hero", {"headline": "New"})]))

    outcome = generator.generate_wireframe("Refresh", page_context, base=travel_wireframe)

    assert outcome.wireframe.id == travel_wireframe.id
    assert outcome.wireframe.name == travel_wireframe.name
    assert outcome.wireframe.created_at == travel_wireframe.created_at
    assert outcome.wireframe.updated_at >= travel_wireframe.updated_at


def test_generator_without_gateway_always_falls_back(page_context):
    generator = WireframeGenerator()
    assert not generator.has_gateway

    outcome = generator.generate_section("pricing", "Plans", page_context)

    assert outcome.fallback_applied
    assert outcome.error == "No generation gateway configured"
    assert [tier.name for tier in outcome.section.content.tiers]


def test_generate_section_fills_required_fields(page_context):
    gateway = FakeGateway(section_content={"cta": {"heading": "Pack your bags"}})
    outcome = WireframeGenerator(gateway=gateway).generate_section("cta", "Travel", page_context)

    assert not outcome.fallback_applied
    assert outcome.section.content.heading == "Pack your bags"
    assert outcome.section.content.button_text == "Get Started Now"


def test_generate_sections_falls_back_independently(page_context):
    gateway = FakeGateway(
        section_content={"hero": {"headline": "Fly"}, "contact": {"heading": "Talk to us", "email": "hi@travel.co"}},
        failing_types=("pricing",),
    )
    generator = WireframeGenerator(gateway=gateway)

    outcomes = asyncio.run(generator.generate_sections(["hero", "pricing", "contact"], "Travel", page_context))

    assert [outcome.section.type for outcome in outcomes] == ["hero", "pricing", "contact"]
    assert [outcome.fallback_applied for outcome in outcomes] == [False, True, False]
    assert outcomes[0].section.content.headline == "Fly"
    assert outcomes[2].section.content.email == "hi@travel.co"
    assert len(gateway.calls) == 3


def test_regenerate_section_keeps_identity_and_previous_values(travel_wireframe, page_context):
    hero = travel_wireframe.sections[1]
    gateway = FakeGateway(regenerated={"subheadline": "Cheaper than ever", "layout": "parallax"})
    generator = WireframeGenerator(gateway=gateway)

    outcome = generator.regenerate_section(hero, page_context)

    assert not outcome.fallback_applied
    assert outcome.section.id == hero.id
    assert outcome.section.type == "hero"
    assert outcome.section.layout == "parallax"
    assert outcome.section.content.headline == "Discover Your Next Adventure"
    assert outcome.section.content.subheadline == "Cheaper than ever"


def test_regenerate_section_failure_switches_layout(travel_wireframe, page_context):
    features = travel_wireframe.sections[2]
    generator = WireframeGenerator(gateway=FakeGateway(fail=True), rng=random.Random(2))

    outcome = generator.regenerate_section(features, page_context)

    assert outcome.fallback_applied
    assert outcome.error == "Failed to parse generated section"
    assert outcome.section.id == features.id
    assert outcome.section.layout != "grid"
    assert outcome.section.layout in layouts_for("features")
    assert [item.title for item in outcome.section.content.features][0] == "Best Prices"


def test_generate_wireframe_by_sections_keeps_successful_types(travel_wireframe, page_context):
    gateway = FakeGateway(section_content={"hero": {"headline": "Fly"}}, failing_types=("pricing",))
    generator = WireframeGenerator(gateway=gateway)

    outcome = asyncio.run(
        generator.generate_wireframe_by_sections(
            ["navigation", "hero", "pricing", "footer"], "Travel", page_context, base=travel_wireframe
        )
    )

    assert outcome.fallback_applied
    assert outcome.errors == ["pricing generation unavailable"]
    wireframe = outcome.wireframe
    assert wireframe.id == travel_wireframe.id
    assert [section.type for section in wireframe.sections] == ["navigation", "hero", "pricing", "footer"]
    assert wireframe.sections[1].content.headline == "Fly"
    assert [tier.name for tier in wireframe.sections[2].content.tiers] == ["Basic", "Pro"]
