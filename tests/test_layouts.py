from wireframe_studio.layouts import (
    DEFAULT_PAGE_SECTIONS,
    LAYOUT_CATALOG,
    LAYOUT_DESCRIPTIONS,
    SECTION_TEMPLATES,
    default_layout,
    layouts_for,
)
from wireframe_studio.models.section import SectionType


def test_every_builtin_type_has_unique_layouts():
    for section_type in SectionType:
        layouts = layouts_for(section_type.value)
        assert layouts, f"{section_type.value} should offer layouts"
        assert len(layouts) == len(set(layouts))


def test_unknown_type_has_no_layouts():
    assert layouts_for("pricing-matrix") == ()
    assert default_layout("pricing-matrix") is None


def test_default_layout_is_first_catalog_entry():
    assert default_layout("hero") == "centered"
    assert default_layout("navigation") == "standard"


def test_every_catalog_layout_is_described():
    missing = {
        layout
        for layouts in LAYOUT_CATALOG.values()
        for layout in layouts
        if layout not in LAYOUT_DESCRIPTIONS
    }
    assert not missing


def test_templates_use_catalog_layouts():
    for section_type in DEFAULT_PAGE_SECTIONS:
        template = SECTION_TEMPLATES[section_type]
        assert template.content["layout"] in layouts_for(section_type)
