import json
from datetime import date

import pytest

from wireframe_studio.models.section import FooterContent, HeroContent, NavigationContent, Section
from wireframe_studio.models.wireframe import Wireframe, WireframeImportError


def test_fixture_loads_with_typed_content(travel_wireframe):
    assert travel_wireframe.id == "wf-travel-booking"
    assert [section.type for section in travel_wireframe.sections] == [
        "navigation",
        "hero",
        "features",
        "testimonials",
        "footer",
    ]
    navigation, hero = travel_wireframe.sections[:2]
    assert isinstance(navigation.content, NavigationContent)
    assert navigation.content.menu_items[0] == "Flights"
    assert isinstance(hero.content, HeroContent)
    assert hero.content.search_bar.filters == ["Destination", "Dates", "Travelers"]
    assert isinstance(travel_wireframe.sections[-1].content, FooterContent)


def test_export_then_import_preserves_wireframe(travel_wireframe):
    exported = travel_wireframe.export_json()
    restored = Wireframe.import_json(exported)

    assert restored.id == travel_wireframe.id
    assert restored.created_at == travel_wireframe.created_at
    assert restored.sections == travel_wireframe.sections
    assert restored == travel_wireframe


def test_export_keeps_explicit_null_content_keys():
    wireframe = Wireframe(
        sections=[
            Section.model_validate(
                {"id": "nav", "type": "navigation", "content": {"menuItems": ["Home"], "cta": None, "badge": None}}
            )
        ]
    )

    restored = Wireframe.import_json(wireframe.export_json())

    assert restored.sections == wireframe.sections
    content = json.loads(wireframe.export_json())["sections"][0]["content"]
    assert content["badge"] is None
    assert content["cta"] is None
    assert "logo" in content


def test_export_uses_camel_case_keys(travel_wireframe):
    payload = json.loads(travel_wireframe.export_json())
    assert {"pageType", "pageName", "createdAt", "updatedAt"} <= payload.keys()
    assert "menuItems" in payload["sections"][0]["content"]
    assert "searchBar" in payload["sections"][1]["content"]


def test_import_rejects_duplicate_section_ids(travel_wireframe):
    payload = travel_wireframe.to_payload()
    payload["sections"].append(dict(payload["sections"][0]))

    with pytest.raises(WireframeImportError):
        Wireframe.import_json(json.dumps(payload))


def test_import_rejects_malformed_json():
    with pytest.raises(WireframeImportError):
        Wireframe.import_json("{not json")


def test_import_repairs_missing_required_content():
    payload = {"id": "wf", "sections": [{"id": "nav", "type": "navigation", "content": {}}]}
    wireframe = Wireframe.import_json(json.dumps(payload))
    assert wireframe.sections[0].content.logo == "Logo"


def test_export_filename_slugifies_name():
    wireframe = Wireframe(name="Travel  Booking Platform")
    assert wireframe.export_filename(date(2025, 3, 1)) == "wireframe-travel-booking-platform-2025-03-01.json"


def test_export_filename_for_blank_name():
    assert Wireframe(name="  ").export_filename(date(2025, 3, 1)) == "wireframe-untitled-2025-03-01.json"


def test_export_filename_is_ascii_for_any_name():
    wireframe = Wireframe(name='Café ☕ 東京 "Deals"')
    filename = wireframe.export_filename(date(2025, 3, 1))
    assert filename == "wireframe-caf-deals-2025-03-01.json"
    assert filename.isascii()


def test_content_disposition_keeps_unicode_name_encoded():
    header = Wireframe(name="Café ☕ 東京").content_disposition(date(2025, 3, 1))
    header.encode("latin-1")
    assert 'filename="wireframe-caf-2025-03-01.json"' in header
    assert "filename*=UTF-8''wireframe-caf%C3%A9-%E2%98%95-%E6%9D%B1%E4%BA%AC-2025-03-01.json" in header
