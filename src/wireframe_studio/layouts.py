from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Sequence

from .models.section import SectionType


LAYOUT_CATALOG: Mapping[str, tuple[str, ...]] = {
    SectionType.navigation.value: (
        "standard", "centered", "minimal", "transparent", "fullwidth", "bordered",
        "dropdown", "glassmorphic", "hamburger", "sidebar", "floating", "gradient",
    ),
    SectionType.hero.value: (
        "centered", "split", "imageBg", "video", "minimal", "animated", "parallax",
        "slideshow", "3d", "geometric", "gradient", "interactive", "scroll",
    ),
    SectionType.features.value: (
        "grid", "horizontal", "vertical", "imageCards", "sideImage", "alternating",
        "carousel", "tabbed", "timeline", "interactive", "accordion", "masonry", "iconGrid",
    ),
    SectionType.testimonials.value: (
        "grid", "carousel", "masonry", "minimal", "cards", "quote", "timeline",
        "slider", "bubbles", "spotlight", "video", "avatars", "magazine",
    ),
    SectionType.pricing.value: (
        "standard", "horizontal", "compact", "toggle", "cards", "comparison", "tiered",
        "minimalist", "feature-focused", "interactive", "slider", "floating", "subscription",
    ),
    SectionType.contact.value: (
        "standard", "split", "minimal", "fullwidth", "boxed", "map", "floating",
        "sidebar", "interactive", "stepper", "modern", "card", "integrated",
    ),
    SectionType.cta.value: (
        "standard", "banner", "full", "popup", "floating", "side", "animated",
        "notification", "gradient", "interactive", "timeline", "sticky", "overlay",
    ),
    SectionType.footer.value: (
        "standard", "simple", "compact", "centered", "multicolumn", "dark", "minimal",
        "logo", "newsletter", "social", "app", "contact", "gradient",
    ),
}


# Layout names are shared across types, so descriptions are keyed by name only.
LAYOUT_DESCRIPTIONS: Mapping[str, str] = {
    "standard": "Traditional arrangement with the logo or heading on the left",
    "centered": "Centered content with the logo or headline in the middle",
    "minimal": "Clean, simple presentation with minimal styling",
    "transparent": "Transparent background that overlays content",
    "fullwidth": "Spans the entire width of the page",
    "bordered": "Decorative borders around the block",
    "dropdown": "Menu with dropdown submenus",
    "glassmorphic": "Modern frosted glass effect",
    "hamburger": "Mobile-friendly menu behind a hamburger icon",
    "sidebar": "Vertical sidebar arrangement",
    "floating": "Floats over the surrounding content",
    "gradient": "Colorful gradient background",
    "split": "Two columns: text on one side, media or form on the other",
    "imageBg": "Large background image with overlay text",
    "video": "Video background or embedded video",
    "animated": "Animated elements and transitions",
    "parallax": "Parallax scrolling effect for depth",
    "slideshow": "Rotating slideshow of content",
    "3d": "3D perspective elements and depth",
    "geometric": "Abstract geometric background shapes",
    "interactive": "Elements that respond to user actions",
    "scroll": "Full-screen with scroll indicator",
    "grid": "Even grid of cards",
    "horizontal": "Items arranged in a horizontal row",
    "vertical": "Vertically stacked cards",
    "imageCards": "Card-based layout with images",
    "sideImage": "Large side image with an item list",
    "alternating": "Items with alternating image positions",
    "carousel": "Scrollable carousel",
    "tabbed": "Tabbed interface for categories",
    "timeline": "Items shown along a timeline",
    "accordion": "Expandable panel per item",
    "masonry": "Grid with varying card heights",
    "iconGrid": "Grid of colorful icons with descriptions",
    "cards": "Card-based layout",
    "quote": "Large quote format with minimal styling",
    "slider": "Sliding carousel or interactive slider",
    "bubbles": "Speech bubble style",
    "spotlight": "One featured item with photo",
    "avatars": "Row of selectable avatars",
    "magazine": "Editorial layout with sidebar",
    "compact": "Compact table without extra details",
    "toggle": "Toggle between monthly and annual pricing",
    "comparison": "Side-by-side plan comparison",
    "tiered": "Tiered pricing with feature differences",
    "minimalist": "Clean, minimal pricing display",
    "feature-focused": "Focus on features rather than price",
    "subscription": "Subscription-based pricing display",
    "boxed": "Boxed layout with drop shadow",
    "map": "Contact form with map integration",
    "stepper": "Multi-step form with progress indicator",
    "modern": "Modern layout with decorative elements",
    "card": "Single card holding the form",
    "integrated": "Form integrated with background graphics",
    "banner": "Horizontal banner across the page",
    "full": "Full-width call to action",
    "popup": "Popup-style block with shadow effects",
    "side": "Side-by-side text and button",
    "notification": "Notification-style prompt",
    "sticky": "Stays visible while scrolling",
    "overlay": "Overlays other content",
    "simple": "Simple footer with minimal elements",
    "multicolumn": "Several link columns",
    "dark": "Dark background footer",
    "logo": "Logo-focused footer",
    "newsletter": "Footer with newsletter signup form",
    "social": "Social media focused footer",
    "app": "Footer with app download links",
    "contact": "Contact information focused footer",
}


def layouts_for(section_type: str) -> tuple[str, ...]:
    """Return the ordered layouts allowed for ``section_type`` (empty if unknown)."""
    return LAYOUT_CATALOG.get(section_type, ())


def default_layout(section_type: str) -> str | None:
    layouts = layouts_for(section_type)
    return layouts[0] if layouts else None


@dataclass(frozen=True)
class SectionTemplate:
    kind: str
    label: str
    content: Mapping[str, Any] = field(default_factory=dict)


SECTION_TEMPLATES: Mapping[str, SectionTemplate] = {
    "navigation": SectionTemplate(
        kind="navigation",
        label="Navigation",
        content={
            "logo": "Company Name",
            "menuItems": ["Home", "About", "Services", "Contact"],
            "cta": "Sign Up",
            "layout": "standard",
        },
    ),
    "hero": SectionTemplate(
        kind="hero",
        label="Hero",
        content={
            "headline": "Main Headline",
            "subheadline": "Subheadline text goes here",
            "cta": {"text": "Get Started", "url": "#get-started"},
            "layout": "centered",
        },
    ),
    "features": SectionTemplate(
        kind="features",
        label="Features",
        content={
            "heading": "Features Heading",
            "subheading": "Features subheading text",
            "features": [
                {"title": "Feature 1", "description": "Description of feature 1", "icon": "icon-1"},
                {"title": "Feature 2", "description": "Description of feature 2", "icon": "icon-2"},
            ],
            "layout": "grid",
        },
    ),
    "testimonials": SectionTemplate(
        kind="testimonials",
        label="Testimonials",
        content={
            "heading": "Testimonials Heading",
            "testimonials": [
                {"quote": "This is an amazing product!", "author": "John Doe", "role": "CEO, Company"},
            ],
            "layout": "grid",
        },
    ),
    "pricing": SectionTemplate(
        kind="pricing",
        label="Pricing",
        content={
            "heading": "Pricing Plans",
            "subheading": "Choose the best plan for your needs.",
            "tiers": [
                {"name": "Basic", "price": "$9.99", "features": ["Feature 1", "Feature 2", "Feature 3"]},
                {
                    "name": "Pro",
                    "price": "$19.99",
                    "features": ["Feature 1", "Feature 2", "Feature 3", "Feature 4"],
                    "isPopular": True,
                },
            ],
            "layout": "cards",
        },
    ),
    "contact": SectionTemplate(
        kind="contact",
        label="Contact",
        content={
            "heading": "Contact Us",
            "subheading": "Have questions? Reach out and we'll get back to you.",
            "email": "info@example.com",
            "phone": "+1 (555) 123-4567",
            "address": "123 Main St, City, Country",
            "formFields": ["Name", "Email", "Message"],
            "layout": "split",
        },
    ),
    "cta": SectionTemplate(
        kind="cta",
        label="Call to Action",
        content={
            "heading": "Ready to Get Started?",
            "subheading": "Join thousands of satisfied customers today.",
            "buttonText": "Sign Up Now",
            "buttonUrl": "#",
            "layout": "gradient",
        },
    ),
    "footer": SectionTemplate(
        kind="footer",
        label="Footer",
        content={
            "logo": "Company Name",
            "menuGroups": [
                {
                    "title": "Company",
                    "items": [
                        {"name": "About Us", "url": "/about"},
                        {"name": "Careers", "url": "/careers"},
                    ],
                }
            ],
            "copyright": "© Company Name. All rights reserved.",
            "layout": "multicolumn",
        },
    ),
}


# Section order used when a whole page has to be synthesized without the LLM.
DEFAULT_PAGE_SECTIONS: Sequence[str] = (
    "navigation",
    "hero",
    "features",
    "testimonials",
    "pricing",
    "contact",
    "cta",
    "footer",
)


__all__ = [
    "LAYOUT_CATALOG",
    "LAYOUT_DESCRIPTIONS",
    "SECTION_TEMPLATES",
    "DEFAULT_PAGE_SECTIONS",
    "SectionTemplate",
    "default_layout",
    "layouts_for",
]
