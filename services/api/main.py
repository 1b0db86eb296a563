from __future__ import annotations

import asyncio
import logging
import os
import uuid
from pathlib import Path
from typing import Any

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import HTMLResponse, JSONResponse, Response
from pydantic import ValidationError

from wireframe_studio.gateway import VertexAIGateway
from wireframe_studio.generator import WireframeGenerator
from wireframe_studio.layouts import LAYOUT_DESCRIPTIONS, SECTION_TEMPLATES, default_layout, layouts_for
from wireframe_studio.logging_config import set_trace_id, setup_logging, trace_from_header
from wireframe_studio.models.generation import (
    AddSectionRequest,
    GenerateSectionRequest,
    GenerateSectionResponse,
    GenerateWireframeRequest,
    LayoutChangeRequest,
    LayoutOption,
    LayoutsResponse,
    MoveSectionRequest,
    PageContext,
    RegenerateSectionRequest,
    RegenerationErrorResponse,
    UpdateSectionRequest,
)
from wireframe_studio.models.section import Section
from wireframe_studio.models.wireframe import Wireframe, WireframeImportError
from wireframe_studio.renderer import render_wireframe
from wireframe_studio.section_store import DuplicateSectionError, StoreResult
from wireframe_studio.session import EditorSession
from wireframe_studio.wireframe_repository import LocalWireframeRepository

# Environment configuration
ENVIRONMENT = os.getenv("ENVIRONMENT", "dev")
PROJECT_ID = os.getenv("PROJECT_ID")
VERTEX_LOCATION = os.getenv("VERTEX_LOCATION", "asia-northeast1")
VERTEX_MODEL = os.getenv("VERTEX_MODEL", "gemini-1.5-pro")
WIREFRAME_STATE_DIR = os.getenv("WIREFRAME_STATE_DIR", "data/state")

# Setup logging
setup_logging(environment=ENVIRONMENT, project_id=PROJECT_ID)
logger = logging.getLogger(__name__)

app = FastAPI(title="Wireframe Studio API", version="0.1.0")

# Without a project there is no LLM; every generation degrades to fallbacks.
gateway = (
    VertexAIGateway(project_id=PROJECT_ID, location=VERTEX_LOCATION, model_name=VERTEX_MODEL)
    if PROJECT_ID
    else None
)
wireframe_generator = WireframeGenerator(gateway=gateway)

session = EditorSession(
    repository=LocalWireframeRepository(base_path=Path(WIREFRAME_STATE_DIR).resolve())
)
session.load()


@app.middleware("http")
async def trace_requests(request: Request, call_next):
    trace = trace_from_header(request.headers.get("X-Cloud-Trace-Context"), PROJECT_ID)
    set_trace_id(trace or uuid.uuid4().hex)
    try:
        return await call_next(request)
    finally:
        set_trace_id(None)


def _mutation_response(result: StoreResult, **extra: Any) -> dict[str, Any]:
    return {
        "result": result.value,
        "activeSectionId": session.store.active_id,
        "wireframe": session.wireframe.to_payload(),
        **extra,
    }


# -------------------------------------------------------------------------
# Generation
# -------------------------------------------------------------------------


@app.post("/v1/wireframes:generate")
async def generate_wireframe(request: GenerateWireframeRequest) -> dict[str, Any]:
    context = PageContext(page_type=request.page_type, page_name=request.page_name)
    if request.section_types:
        outcome = await wireframe_generator.generate_wireframe_by_sections(
            request.section_types,
            request.prompt,
            context,
            base=session.wireframe,
            name=request.name,
        )
    else:
        outcome = await asyncio.to_thread(
            wireframe_generator.generate_wireframe,
            request.prompt,
            context,
            base=session.wireframe,
            name=request.name,
        )
    wireframe = session.replace(outcome.wireframe)
    return {
        "wireframe": wireframe.to_payload(),
        "fallbackApplied": outcome.fallback_applied,
        "errors": outcome.errors,
    }


@app.post("/v1/sections:generate", response_model=GenerateSectionResponse)
async def generate_section(request: GenerateSectionRequest) -> GenerateSectionResponse:
    context = PageContext(page_type=request.page_type, page_name=request.page_name)
    outcome = await asyncio.to_thread(
        wireframe_generator.generate_section, request.section_type, request.prompt, context
    )
    return GenerateSectionResponse(
        content=outcome.section.content_dict(),
        layout=outcome.section.layout,
        fallback_applied=outcome.fallback_applied,
        error=outcome.error,
    )


@app.post("/v1/sections:regenerate")
async def regenerate_section(request: RegenerateSectionRequest) -> JSONResponse:
    section_type = request.section.get("type")
    if not isinstance(section_type, str) or not section_type:
        raise HTTPException(status_code=400, detail="Section type is required")
    if not layouts_for(section_type):
        raise HTTPException(status_code=400, detail="No layout options available for this section type")
    try:
        section = Section.model_validate(request.section)
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=f"Invalid section: {exc}") from exc

    context = PageContext(page_type=request.page_type, page_name=request.page_name)
    outcome = await asyncio.to_thread(wireframe_generator.regenerate_section, section, context)
    if outcome.fallback_applied:
        payload = RegenerationErrorResponse(
            error=f"Failed to regenerate section: {outcome.error}",
            fallback_section=outcome.section.to_payload(),
        )
        return JSONResponse(status_code=502, content=payload.model_dump(by_alias=True))
    return JSONResponse(outcome.section.to_payload())


# -------------------------------------------------------------------------
# Active wireframe
# -------------------------------------------------------------------------


@app.get("/v1/wireframe")
async def get_wireframe() -> dict[str, Any]:
    return {"activeSectionId": session.store.active_id, "wireframe": session.wireframe.to_payload()}


@app.put("/v1/wireframe")
async def import_wireframe(request: Request) -> dict[str, Any]:
    body = await request.body()
    try:
        wireframe = Wireframe.import_json(body)
    except WireframeImportError as exc:
        logger.warning("Rejected wireframe import", extra={"error": str(exc)})
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return {"wireframe": session.replace(wireframe).to_payload()}


@app.delete("/v1/wireframe")
async def reset_wireframe() -> dict[str, Any]:
    return {"wireframe": session.clear().to_payload()}


@app.get("/v1/wireframe/export")
async def export_wireframe() -> Response:
    wireframe = session.wireframe
    return Response(
        content=wireframe.export_json(),
        media_type="application/json",
        headers={"Content-Disposition": wireframe.content_disposition()},
    )


@app.get("/v1/wireframe/preview", response_class=HTMLResponse)
async def preview_wireframe() -> HTMLResponse:
    return HTMLResponse(render_wireframe(session.wireframe))


# -------------------------------------------------------------------------
# Section editing
# -------------------------------------------------------------------------


@app.post("/v1/wireframe/sections")
async def add_section(request: AddSectionRequest) -> dict[str, Any]:
    content = request.content
    if content is None and request.type in SECTION_TEMPLATES:
        content = SECTION_TEMPLATES[request.type].content
    payload: dict[str, Any] = {"type": request.type, "content": dict(content or {})}
    if request.id:
        payload["id"] = request.id
    try:
        section = session.add_section(Section.model_validate(payload))
    except DuplicateSectionError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    return _mutation_response(StoreResult.applied, section=section.to_payload())


@app.put("/v1/wireframe/sections/{section_id}")
async def update_section(section_id: str, request: UpdateSectionRequest) -> dict[str, Any]:
    current = session.store.get(section_id)
    if current is None:
        return _mutation_response(StoreResult.ignored_not_found)
    updated = current.with_content(request.content)
    return _mutation_response(session.apply(lambda store: store.update(section_id, updated)))


@app.delete("/v1/wireframe/sections/{section_id}")
async def delete_section(section_id: str) -> dict[str, Any]:
    return _mutation_response(session.apply(lambda store: store.delete(section_id)))


@app.post("/v1/wireframe/sections/{section_id}:move")
async def move_section(section_id: str, request: MoveSectionRequest) -> dict[str, Any]:
    return _mutation_response(session.apply(lambda store: store.move(section_id, request.direction)))


@app.post("/v1/wireframe/sections/{section_id}:select")
async def select_section(section_id: str) -> dict[str, Any]:
    return _mutation_response(session.apply(lambda store: store.select(section_id)))


@app.post("/v1/wireframe/sections/{section_id}:layout")
async def change_layout(section_id: str, request: LayoutChangeRequest) -> dict[str, Any]:
    if request.layout:
        result = session.apply(lambda store: store.set_layout(section_id, request.layout))
    else:
        result = session.apply(lambda store: store.shuffle_layout(section_id))
    return _mutation_response(result)


@app.post("/v1/wireframe/sections/{section_id}:regenerate")
async def regenerate_stored_section(section_id: str) -> dict[str, Any]:
    current = session.store.get(section_id)
    if current is None:
        return _mutation_response(StoreResult.ignored_not_found, fallbackApplied=False, error=None)

    wireframe = session.wireframe
    context = PageContext(page_type=wireframe.page_type, page_name=wireframe.page_name)
    outcome = await asyncio.to_thread(wireframe_generator.regenerate_section, current, context)
    # The section may have been deleted while the gateway call was in flight.
    result = session.apply(lambda store: store.update(section_id, outcome.section))
    return _mutation_response(result, fallbackApplied=outcome.fallback_applied, error=outcome.error)


# -------------------------------------------------------------------------
# Catalog
# -------------------------------------------------------------------------


@app.get("/v1/layouts/{section_type}", response_model=LayoutsResponse)
async def get_layouts(section_type: str) -> LayoutsResponse:
    layouts = layouts_for(section_type)
    if not layouts:
        raise HTTPException(status_code=404, detail="Unknown section type")
    return LayoutsResponse(
        section_type=section_type,
        layouts=[LayoutOption(name=name, description=LAYOUT_DESCRIPTIONS.get(name)) for name in layouts],
        default=default_layout(section_type),
    )


@app.get("/v1/templates/{section_type}")
async def get_template(section_type: str) -> dict[str, Any]:
    template = SECTION_TEMPLATES.get(section_type)
    if template is None:
        raise HTTPException(status_code=404, detail="Unknown section type")
    return {"type": template.kind, "label": template.label, "content": dict(template.content)}


@app.get("/health")
async def healthcheck() -> JSONResponse:
    return JSONResponse({"status": "ok", "generation": wireframe_generator.has_gateway})
