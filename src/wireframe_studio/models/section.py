from __future__ import annotations

import uuid
from enum import Enum
from typing import Any, Mapping, Union

from pydantic import BaseModel, ConfigDict, Field, SerializationInfo, field_serializer, model_validator


class SectionType(str, Enum):
    navigation = "navigation"
    hero = "hero"
    features = "features"
    testimonials = "testimonials"
    pricing = "pricing"
    contact = "contact"
    cta = "cta"
    footer = "footer"


def new_section_id() -> str:
    return uuid.uuid4().hex


class SectionContentBase(BaseModel):
    """Common base of every content shape.

    Generated content is open-ended, so unknown keys are kept and dumped back
    unchanged.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    layout: str | None = None


class MenuItem(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: str = ""
    url: str | None = None


class NavigationContent(SectionContentBase):
    logo: str
    menu_items: list[Union[str, MenuItem]] = Field(alias="menuItems")
    cta: str | None = None


class SearchBar(BaseModel):
    model_config = ConfigDict(extra="allow")

    placeholder: str = ""
    filters: list[str] | None = None


class HeroCallToAction(BaseModel):
    model_config = ConfigDict(extra="allow")

    text: str = ""
    url: str | None = None


class HeroContent(SectionContentBase):
    headline: str
    subheadline: str | None = None
    search_bar: SearchBar | None = Field(default=None, alias="searchBar")
    background_image: str | None = Field(default=None, alias="backgroundImage")
    cta: HeroCallToAction | None = None


class FeatureItem(BaseModel):
    model_config = ConfigDict(extra="allow")

    title: str = ""
    description: str = ""
    icon: str | None = None
    image: str | None = None


class FeaturesContent(SectionContentBase):
    heading: str | None = None
    subheading: str | None = None
    features: list[FeatureItem]


class TestimonialItem(BaseModel):
    model_config = ConfigDict(extra="allow")

    quote: str = ""
    author: str = ""
    role: str | None = None
    avatar: str | None = None


class TestimonialsContent(SectionContentBase):
    heading: str | None = None
    subheading: str | None = None
    testimonials: list[TestimonialItem]


class PricingTier(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    name: str = ""
    price: str = ""
    description: str | None = None
    features: list[str] = Field(default_factory=list)
    is_popular: bool | None = Field(default=None, alias="isPopular")
    cta: str | None = None


class PricingContent(SectionContentBase):
    heading: str | None = None
    subheading: str | None = None
    tiers: list[PricingTier]


class ContactContent(SectionContentBase):
    heading: str
    subheading: str | None = None
    address: str | None = None
    email: str
    phone: str | None = None
    form_fields: list[str] | None = Field(default=None, alias="formFields")
    map_location: str | None = Field(default=None, alias="mapLocation")


class CTAContent(SectionContentBase):
    heading: str
    subheading: str | None = None
    button_text: str = Field(alias="buttonText")
    button_url: str | None = Field(default=None, alias="buttonUrl")
    background_image: str | None = Field(default=None, alias="backgroundImage")


class FooterMenuGroup(BaseModel):
    model_config = ConfigDict(extra="allow")

    title: str = ""
    items: list[MenuItem] = Field(default_factory=list)


class FooterContent(SectionContentBase):
    logo: str | None = None
    tagline: str | None = None
    menu_groups: list[FooterMenuGroup] | None = Field(default=None, alias="menuGroups")
    social_links: list[str] | None = Field(default=None, alias="socialLinks")
    copyright: str | None = None


class CustomContent(SectionContentBase):
    """Open record for section kinds outside the built-in catalog."""


SectionContent = Union[
    NavigationContent,
    HeroContent,
    FeaturesContent,
    TestimonialsContent,
    PricingContent,
    ContactContent,
    CTAContent,
    FooterContent,
    CustomContent,
]


CONTENT_MODELS: Mapping[str, type[SectionContentBase]] = {
    SectionType.navigation.value: NavigationContent,
    SectionType.hero.value: HeroContent,
    SectionType.features.value: FeaturesContent,
    SectionType.testimonials.value: TestimonialsContent,
    SectionType.pricing.value: PricingContent,
    SectionType.contact.value: ContactContent,
    SectionType.cta.value: CTAContent,
    SectionType.footer.value: FooterContent,
}


def content_model_for(section_type: str) -> type[SectionContentBase]:
    return CONTENT_MODELS.get(section_type, CustomContent)


class Section(BaseModel):
    id: str = Field(default_factory=new_section_id, min_length=1)
    type: str = Field(min_length=1)
    content: SectionContent = Field(default_factory=CustomContent)

    @model_validator(mode="before")
    @classmethod
    def _validate_content(cls, data: Any) -> Any:
        if not isinstance(data, Mapping) or not isinstance(data.get("type"), str):
            return data
        from ..validator import parse_content

        return {**data, "content": parse_content(data["type"], data.get("content"))}

    @field_serializer("content")
    def _serialize_content(self, content: SectionContentBase, info: SerializationInfo) -> dict[str, Any]:
        # Keys the content actually carried are written back, explicit nulls included.
        return content.model_dump(mode=info.mode, by_alias=bool(info.by_alias), exclude_unset=True)

    @property
    def layout(self) -> str | None:
        return self.content.layout

    def content_dict(self) -> dict[str, Any]:
        return self.content.model_dump(by_alias=True, exclude_unset=True)

    def with_content(self, content: Mapping[str, Any]) -> "Section":
        return Section.model_validate({"id": self.id, "type": self.type, "content": dict(content)})

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")


__all__ = [
    "CONTENT_MODELS",
    "CTAContent",
    "ContactContent",
    "CustomContent",
    "FeatureItem",
    "FeaturesContent",
    "FooterContent",
    "FooterMenuGroup",
    "HeroCallToAction",
    "HeroContent",
    "MenuItem",
    "NavigationContent",
    "PricingContent",
    "PricingTier",
    "SearchBar",
    "Section",
    "SectionContent",
    "SectionContentBase",
    "SectionType",
    "TestimonialItem",
    "TestimonialsContent",
    "content_model_for",
    "new_section_id",
]
