"""
Cart Store HTTP — le total est recalculé côté serveur.

GET  /api/cart/{id}  → panier | 404
POST /api/cart       → création
PUT  /api/cart/{id}  → remplacement des items | 404
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...database import get_db
from ...models import CartCreate, CartUpdate
from ...store import CartStore

router = APIRouter(prefix="/api/cart", tags=["Cart"])


@router.get("/{cart_id}")
def get_cart(cart_id: str, db: Session = Depends(get_db)):
    return CartStore(db).get(cart_id)


@router.post("")
def create_cart(data: CartCreate, db: Session = Depends(get_db)):
    return CartStore(db).create(data.items)


@router.put("/{cart_id}")
def update_cart(cart_id: str, data: CartUpdate, db: Session = Depends(get_db)):
    return CartStore(db).update(cart_id, data.items)
