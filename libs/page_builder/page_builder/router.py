"""
Router FastAPI — endpoints page_builder sans état.

GET  /page-builder/catalog   → types de composants, défauts, presets, JSON schema
POST /page-builder/validate  → liste de composants → {"valid": bool, "errors"?}
POST /page-builder/render    → liste de composants → HTMLResponse (rendu live)
POST /page-builder/export    → liste de composants → document exporté en pièce jointe
"""
from typing import List

from fastapi import APIRouter, Body
from fastapi.responses import HTMLResponse, JSONResponse, Response
from pydantic import TypeAdapter, ValidationError

from .blocks import toolbox
from .core.design_system import presets
from .core.schemas import PageComponent
from .renderer.export import EXPORT_FILENAME, export_page
from .renderer.html import render_page

router = APIRouter(prefix="/page-builder", tags=["page_builder"])

_COMPONENTS = TypeAdapter(List[PageComponent])


@router.get("/catalog", summary="Liste les composants disponibles, leurs défauts et les presets")
def catalog() -> JSONResponse:
    return JSONResponse({
        "components": toolbox(),
        "presets": presets(),
        "schema": PageComponent.model_json_schema(),
    })


@router.post("/validate", summary="Valide une liste de composants sans la rendre")
def validate(payload: list = Body(...)) -> dict:
    """Types fermés, order/position numériques, clés de style connues."""
    try:
        _COMPONENTS.validate_python(payload)
        return {"valid": True}
    except ValidationError as e:
        errors = [{"loc": list(err["loc"]), "msg": err["msg"]} for err in e.errors()]
        return {"valid": False, "errors": errors}


@router.post("/render", response_class=HTMLResponse, summary="Rend des composants en HTML live")
def render(components: List[PageComponent]) -> HTMLResponse:
    return HTMLResponse(content=render_page(components))


@router.post("/export", summary="Export statique téléchargeable")
def export(components: List[PageComponent]) -> Response:
    return Response(
        content=export_page(components),
        media_type="text/html; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{EXPORT_FILENAME}"'},
    )
