"""
Page Store + Cart Store — CRUD sur SQLite, sémantique de remplacement complet.

Les stores n'effectuent aucune fusion élément par élément : `components`
et `items` sont remplacés en bloc. Les ids inconnus lèvent NotFoundError.
"""
import logging
from typing import List, Optional

import pydantic
from sqlalchemy.orm import Session

from page_builder.core.schemas import PageComponent, PageConfig

from .database import (
    db_create_cart, db_create_page, db_delete_page, db_get_cart, db_get_page,
    db_list_pages, db_update_cart, db_update_page, jd, jl,
)
from .errors import NotFoundError, ValidationError
from .models import CartDB, CartItem, PageConfigDB, cart_total

log = logging.getLogger(__name__)


def _validated(model, data):
    try:
        return model(**data)
    except pydantic.ValidationError as e:
        raise ValidationError.from_pydantic(e) from e


def page_from_row(row: PageConfigDB) -> PageConfig:
    return PageConfig(id=row.id, name=row.name, components=jl(row.components))


def _components_json(components) -> str:
    out = []
    for c in components:
        comp = c if isinstance(c, PageComponent) else _validated(PageComponent, c)
        out.append(comp.to_wire())
    return jd(out)


class PageStore:
    def __init__(self, db: Session):
        self.db = db

    def _row(self, page_id: str) -> PageConfigDB:
        row = db_get_page(self.db, page_id)
        if row is None:
            raise NotFoundError(f"Page {page_id} introuvable")
        return row

    def list(self) -> List[PageConfig]:
        return [page_from_row(r) for r in db_list_pages(self.db)]

    def get(self, page_id: str) -> PageConfig:
        return page_from_row(self._row(page_id))

    def create(self, name: str, components=None) -> PageConfig:
        row = db_create_page(self.db, PageConfigDB(name=name, components=_components_json(components or [])))
        log.info("Page créée %s (%s)", row.id, row.name)
        return page_from_row(row)

    def update(self, page_id: str, name: Optional[str] = None, components=None) -> PageConfig:
        row = self._row(page_id)
        fields = {}
        if name is not None:
            fields["name"] = name
        if components is not None:
            fields["components"] = _components_json(components)
        return page_from_row(db_update_page(self.db, row, **fields))

    def delete(self, page_id: str) -> None:
        db_delete_page(self.db, self._row(page_id))
        log.info("Page supprimée %s", page_id)


# ── Cart ───────────────────────────────────────────────────────────────

def cart_to_dict(row: CartDB) -> dict:
    return {"id": row.id, "items": jl(row.items), "total": row.total}


def _items(items) -> List[CartItem]:
    return [i if isinstance(i, CartItem) else _validated(CartItem, i) for i in items]


class CartStore:
    """Le total est toujours recalculé depuis les items, jamais repris du client."""

    def __init__(self, db: Session):
        self.db = db

    def get(self, cart_id: str) -> dict:
        row = db_get_cart(self.db, cart_id)
        if row is None:
            raise NotFoundError(f"Panier {cart_id} introuvable")
        return cart_to_dict(row)

    def create(self, items=None) -> dict:
        parsed = _items(items or [])
        row = db_create_cart(self.db, CartDB(
            items=jd([i.model_dump() for i in parsed]),
            total=cart_total(parsed),
        ))
        return cart_to_dict(row)

    def update(self, cart_id: str, items=None) -> dict:
        row = db_get_cart(self.db, cart_id)
        if row is None:
            raise NotFoundError(f"Panier {cart_id} introuvable")
        if items is not None:
            parsed = _items(items)
            row = db_update_cart(self.db, row, items=jd([i.model_dump() for i in parsed]),
                                 total=cart_total(parsed))
        return cart_to_dict(row)
