from __future__ import annotations

from typing import Any, Mapping, Sequence

from pydantic import BaseModel, ConfigDict, Field


class PageContext(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    page_type: str = Field(default="landing", alias="pageType")
    page_name: str = Field(default="Website", alias="pageName")


class GenerateWireframeRequest(PageContext):
    prompt: str = Field(min_length=1)
    name: str | None = None
    section_types: list[str] | None = Field(
        default=None,
        alias="sectionTypes",
        min_length=1,
        description="Generate these sections concurrently instead of one whole-page call",
    )


class GenerateSectionRequest(PageContext):
    prompt: str = Field(min_length=1)
    section_type: str = Field(alias="sectionType", min_length=1)


class GenerateSectionResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    content: Mapping[str, Any]
    layout: str | None = None
    fallback_applied: bool = Field(default=False, alias="fallbackApplied")
    error: str | None = None


class RegenerateSectionRequest(PageContext):
    # Kept raw so a section without a type can be answered with 400.
    section: Mapping[str, Any]


class RegenerationErrorResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    error: str
    fallback_section: Mapping[str, Any] = Field(alias="fallbackSection")


class AddSectionRequest(BaseModel):
    id: str | None = None
    type: str = Field(min_length=1)
    content: Mapping[str, Any] | None = Field(
        default=None, description="Starter template content is used when omitted"
    )


class UpdateSectionRequest(BaseModel):
    content: Mapping[str, Any]


class MoveSectionRequest(BaseModel):
    direction: str = Field(pattern="^(up|down)$")


class LayoutChangeRequest(BaseModel):
    layout: str | None = Field(default=None, description="Random different layout when omitted")


class LayoutOption(BaseModel):
    name: str
    description: str | None = None


class LayoutsResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    section_type: str = Field(alias="sectionType")
    layouts: Sequence[LayoutOption] = Field(default_factory=list)
    default: str | None = None


__all__ = [
    "AddSectionRequest",
    "GenerateSectionRequest",
    "GenerateSectionResponse",
    "GenerateWireframeRequest",
    "LayoutChangeRequest",
    "LayoutOption",
    "LayoutsResponse",
    "MoveSectionRequest",
    "PageContext",
    "RegenerateSectionRequest",
    "RegenerationErrorResponse",
    "UpdateSectionRequest",
]
