"""
Data models — PageConfig, Cart
SQLAlchemy (SQLite) + Pydantic v2
"""
import uuid
from typing import List, Optional

import sqlalchemy as sa
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from page_builder.core.schemas import PageComponent


# ── ORM ────────────────────────────────────────────────────────────────

class Base(DeclarativeBase):
    pass


class PageConfigDB(Base):
    __tablename__ = "page_configs"
    id:         Mapped[str] = mapped_column(sa.String, primary_key=True, default=lambda: str(uuid.uuid4()))
    name:       Mapped[str] = mapped_column(sa.String, nullable=False)
    components: Mapped[str] = mapped_column(sa.Text, default="[]")   # JSON list[PageComponent]


class CartDB(Base):
    __tablename__ = "carts"
    id:    Mapped[str] = mapped_column(sa.String, primary_key=True, default=lambda: str(uuid.uuid4()))
    items: Mapped[str] = mapped_column(sa.Text, default="[]")        # JSON list[CartItem]
    total: Mapped[int] = mapped_column(sa.Integer, default=0)        # centimes


# ── PYDANTIC (I/O) ─────────────────────────────────────────────────────

class PageCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")
    name:       str
    components: List[PageComponent] = Field(default_factory=list)


class PageUpdate(BaseModel):
    """Remplacement champ par champ ; `components` est toujours remplacé en bloc."""
    model_config = ConfigDict(extra="forbid")
    name:       Optional[str]                 = None
    components: Optional[List[PageComponent]] = None


class CartItem(BaseModel):
    productId:    str
    variantId:    int
    productTitle: str
    variantTitle: str = ""
    price:        int = Field(..., ge=0, description="Prix unitaire en centimes")
    quantity:     int = Field(1, ge=1)
    image:        str = ""

    @property
    def key(self) -> tuple:
        return (self.productId, self.variantId)


class CartCreate(BaseModel):
    items: List[CartItem] = Field(default_factory=list)
    total: Optional[int]  = None   # ignoré : recalculé côté serveur


class CartUpdate(BaseModel):
    items: Optional[List[CartItem]] = None
    total: Optional[int]            = None   # ignoré : recalculé côté serveur


def cart_total(items: List[CartItem]) -> int:
    return sum(i.price * i.quantity for i in items)
