"""
Page Store HTTP.

GET    /api/pages              → liste
GET    /api/pages/{id}         → page | 404
POST   /api/pages              → création (protégé)
PUT    /api/pages/{id}         → remplacement name/components (protégé)
DELETE /api/pages/{id}         → suppression (protégé)
GET    /api/pages/{id}/export  → export HTML en pièce jointe (protégé)
"""
import logging

from fastapi import APIRouter, Depends
from fastapi.responses import Response
from sqlalchemy.orm import Session

from page_builder import EXPORT_FILENAME, export_page

from ...database import get_db
from ...models import PageCreate, PageUpdate
from ...store import PageStore
from .auth import require_admin

log = logging.getLogger(__name__)

router = APIRouter(prefix="/api/pages", tags=["Pages"])


@router.get("")
def list_pages(db: Session = Depends(get_db)):
    return [p.to_wire() for p in PageStore(db).list()]


@router.get("/{page_id}")
def get_page(page_id: str, db: Session = Depends(get_db)):
    return PageStore(db).get(page_id).to_wire()


@router.post("", dependencies=[Depends(require_admin)])
def create_page(data: PageCreate, db: Session = Depends(get_db)):
    return PageStore(db).create(data.name, data.components).to_wire()


@router.put("/{page_id}", dependencies=[Depends(require_admin)])
def update_page(page_id: str, data: PageUpdate, db: Session = Depends(get_db)):
    return PageStore(db).update(page_id, name=data.name, components=data.components).to_wire()


@router.delete("/{page_id}", dependencies=[Depends(require_admin)])
def delete_page(page_id: str, db: Session = Depends(get_db)):
    PageStore(db).delete(page_id)
    return {"success": True}


@router.get("/{page_id}/export", dependencies=[Depends(require_admin)])
def export(page_id: str, db: Session = Depends(get_db)):
    page = PageStore(db).get(page_id)
    return Response(
        content=export_page(page.components),
        media_type="text/html; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{EXPORT_FILENAME}"'},
    )
