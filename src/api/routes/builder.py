"""
Builder HTML — canvas éditable piloté par formulaires (protégé).

Chaque requête ouvre une BuilderSession sur la page demandée, applique
l'édition, sauve, puis redirige (303) vers le canvas.

GET  /builder?page=&selected=                      → pages + toolbox + canvas + propriétés
POST /builder/pages                {name}          → crée une page et l'ouvre
POST /builder/components           {page, type}    → ajoute un composant, le sélectionne
POST /builder/pages/{pid}/components/{cid}         → contenu + style du composant
POST /builder/pages/{pid}/components/{cid}/delete  → supprime le composant
"""
import html
import logging
from typing import Optional
from urllib.parse import quote

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from sqlalchemy.orm import Session

from page_builder import CanvasLinks, ComponentStyle, PageComponent, toolbox
from page_builder.renderer.chrome import LIVE_CSS, document

from ...database import get_db
from ...errors import NotFoundError
from ...session import BuilderSession
from ...store import PageStore
from .auth import require_admin
from .site import _active

log = logging.getLogger(__name__)

router = APIRouter(tags=["Builder"], dependencies=[Depends(require_admin)])

STYLE_FIELDS = list(ComponentStyle.model_fields)
_ALIGN_CHOICES = ("", "left", "center", "right")

_BUILDER_CSS = """
    .builder { display: grid; grid-template-columns: 220px 1fr 260px; min-height: 100vh; }
    .builder aside { border-right: 1px solid #e4e4e7; padding: 16px; font-size: 14px; }
    .builder aside h2, .props h2 { font-size: 12px; text-transform: uppercase; color: #71717a; margin: 16px 0 8px; }
    .builder aside a, .toolbox button { display: block; width: 100%; text-align: left; padding: 6px 8px; border: 0; border-radius: 6px;
      background: none; color: #18181b; text-decoration: none; font: inherit; cursor: pointer; }
    .builder aside a.active { background: #3b82f6; color: #fff; }
    .toolbox button:hover { background: #f4f4f5; }
    .new-page { display: flex; gap: 4px; margin-top: 8px; }
    .new-page input { flex: 1; min-width: 0; padding: 4px 6px; border: 1px solid #e4e4e7; border-radius: 6px; }
    .builder .canvas { padding: 24px; background: #fafafa; }
    .props { border-left: 1px solid #e4e4e7; padding: 16px; font-size: 13px; }
    .props label { display: block; color: #52525b; margin: 10px 0 4px; }
    .props input, .props select, .props textarea { width: 100%; padding: 6px; border: 1px solid #e4e4e7; border-radius: 6px; font: inherit; }
    .props button { margin-top: 16px; width: 100%; padding: 8px; border: 0; border-radius: 6px; background: #3b82f6; color: #fff; font: inherit; cursor: pointer; }"""


def builder_url(page_id: Optional[str], selected: Optional[str] = None) -> str:
    url = f"/builder?page={quote(page_id, safe='')}" if page_id else "/builder"
    if selected:
        url += ("&" if page_id else "?") + f"selected={quote(selected, safe='')}"
    return url


def canvas_links(page_id: Optional[str]) -> CanvasLinks:
    """Contrôles du canvas → routes du builder pour la page courante."""
    if not page_id:
        return CanvasLinks(select="/builder?selected={id}", clear="/builder")
    pid = quote(page_id, safe="")
    return CanvasLinks(
        select=f"/builder?page={pid}&selected={{id}}",
        clear=f"/builder?page={pid}",
        delete=f"/builder/pages/{pid}/components/{{id}}/delete",
    )


def open_session(db: Session, page_id: Optional[str]) -> BuilderSession:
    """Session sur `page_id` (404 si inconnue), ou sur la première page."""
    session = BuilderSession(PageStore(db))
    session.open()
    if page_id and page_id != session.page_id:
        session.load_page(session.store.get(page_id))
    return session


# ── Rendu ────────────────────────────────────────────────────────────────────

def _field(name: str, value: Optional[str]) -> str:
    if name == "textAlign":
        options = "".join(
            f'<option value="{a}"{" selected" if (value or "") == a else ""}>{a or "(default)"}</option>'
            for a in _ALIGN_CHOICES
        )
        control = f'<select name="{name}">{options}</select>'
    else:
        control = f'<input type="text" name="{name}" value="{html.escape(value or "")}">'
    return f'<label>{name}</label>{control}'


def properties_panel(page_id: str, comp: PageComponent) -> str:
    action = f"/builder/pages/{quote(page_id, safe='')}/components/{quote(comp.id, safe='')}"
    content_label = "Image URL" if comp.type == "image" else "Content"
    fields = "".join(_field(name, getattr(comp.style, name)) for name in STYLE_FIELDS)
    return (
        f'<aside class="props"><h2>Properties — {html.escape(comp.type)}</h2>'
        f'<form method="post" action="{html.escape(action)}">'
        f'<label>{content_label}</label><textarea name="content" rows="3">{html.escape(comp.content)}</textarea>'
        f'{fields}<button type="submit">Apply</button></form></aside>'
    )


def builder_body(session: BuilderSession) -> str:
    pages = "".join(
        f'<a href="{html.escape(builder_url(p.id))}"'
        f'{_active(p.id == session.page_id)}>{html.escape(p.name)}</a>'
        for p in session.pages
    )
    new_page = ('<form class="new-page" method="post" action="/builder/pages">'
                '<input type="text" name="name" placeholder="New page" required>'
                '<button type="submit">Add</button></form>')
    tools = "".join(
        f'<button type="submit" name="type" value="{t["type"]}" title="{html.escape(t["description"])}">'
        f'{html.escape(t["label"])}</button>'
        for t in toolbox()
    )
    toolbox_form = (f'<form class="toolbox" method="post" action="/builder/components">'
                    f'<input type="hidden" name="page" value="{html.escape(session.page_id or "")}">'
                    f'{tools}</form>')
    export = (f'<a href="/api/pages/{html.escape(session.page_id)}/export">Export HTML</a>'
              if session.page_id else "")
    selected = session.selected
    props = properties_panel(session.page_id, selected) if selected is not None and session.page_id else ""
    canvas = session.render_canvas(canvas_links(session.page_id))
    return (f'<div class="builder"><aside><h2>Pages</h2>{pages}{new_page}<h2>Components</h2>{toolbox_form}'
            f'<h2>Site</h2>{export}<a href="/logout">Logout</a></aside>'
            f'<section class="canvas">{canvas}</section>{props}</div>')


@router.get("/builder", response_class=HTMLResponse)
def builder(page: Optional[str] = None, selected: Optional[str] = None, db: Session = Depends(get_db)):
    session = open_session(db, page)
    if selected:
        try:
            session.select_component(selected)
        except NotFoundError:
            log.debug("Sélection %s absente de la page %s", selected, session.page_id)
    return HTMLResponse(document(builder_body(session), title=f"{session.title} — Jaki Global Builder",
                                 extra_css=LIVE_CSS + _BUILDER_CSS))


# ── Éditions ─────────────────────────────────────────────────────────────────

@router.post("/builder/pages")
async def create_page(request: Request, db: Session = Depends(get_db)):
    form = await request.form()
    session = BuilderSession(PageStore(db))
    session.refresh_pages()
    page = session.create_page(str(form.get("name", "")))
    return RedirectResponse(builder_url(page.id), status_code=303)


@router.post("/builder/components")
async def add_component(request: Request, db: Session = Depends(get_db)):
    form = await request.form()
    session = open_session(db, str(form.get("page", "")) or None)
    comp = session.add_component(str(form.get("type", "")))
    page = session.save()
    log.info("Composant %s ajouté à la page %s", comp.id, page.id)
    return RedirectResponse(builder_url(page.id, comp.id), status_code=303)


@router.post("/builder/pages/{page_id}/components/{component_id}")
async def update_component(page_id: str, component_id: str, request: Request, db: Session = Depends(get_db)):
    form = await request.form()
    session = open_session(db, page_id)
    session.select_component(component_id)
    updates = {}
    if "content" in form:
        updates["content"] = str(form["content"])
    # champ vide : la clé de style est effacée
    style = {name: str(form[name]).strip() or None for name in STYLE_FIELDS if name in form}
    if style:
        updates["style"] = style
    session.update_selected(**updates)
    session.save()
    return RedirectResponse(builder_url(page_id, component_id), status_code=303)


@router.post("/builder/pages/{page_id}/components/{component_id}/delete")
def delete_component(page_id: str, component_id: str, db: Session = Depends(get_db)):
    session = open_session(db, page_id)
    session.delete_component(component_id)
    session.save()
    return RedirectResponse(builder_url(page_id), status_code=303)
