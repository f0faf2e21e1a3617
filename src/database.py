"""SQLite — init + session + CRUD helpers"""
import json, logging, os
from pathlib import Path
from typing import List, Optional

from sqlalchemy import create_engine, text
from sqlalchemy.orm import Session, sessionmaker

from .models import Base, CartDB, PageConfigDB

log = logging.getLogger(__name__)

DATA_DIR = Path(__file__).parent.parent / "data"

DB_PATH      = os.getenv("DB_PATH", str(DATA_DIR / "jaki_global.db"))
ENGINE       = None
SessionLocal = sessionmaker(autocommit=False, autoflush=False)


def _bind(db_url: str):
    global ENGINE
    ENGINE = create_engine(db_url, connect_args={"check_same_thread": False})
    SessionLocal.configure(bind=ENGINE)


def init_db(db_url: Optional[str] = None):
    """Crée les tables. Un `db_url` explicite (tests) rebranche le moteur."""
    if db_url:
        _bind(db_url)
    elif ENGINE is None:
        path = Path(os.getenv("DB_PATH", DB_PATH))
        path.parent.mkdir(parents=True, exist_ok=True)
        _bind(f"sqlite:///{path}")
    Base.metadata.create_all(bind=ENGINE)


def get_db():
    if ENGINE is None:
        init_db()
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


# ── JSON helpers ──
def jl(s: str) -> list:
    try: return json.loads(s or "[]")
    except ValueError:
        log.warning("colonne JSON illisible, remplacée par []")
        return []

def jd(o) -> str:
    return json.dumps(o, ensure_ascii=False)


# ── Pages ──
def db_create_page(db: Session, obj: PageConfigDB) -> PageConfigDB:
    db.add(obj); db.commit(); db.refresh(obj); return obj

def db_get_page(db: Session, page_id: str) -> Optional[PageConfigDB]:
    return db.get(PageConfigDB, page_id)

def db_list_pages(db: Session) -> List[PageConfigDB]:
    return db.query(PageConfigDB).order_by(text("page_configs.rowid")).all()

def db_update_page(db: Session, page: PageConfigDB, **kwargs) -> PageConfigDB:
    for k, v in kwargs.items():
        setattr(page, k, v)
    db.commit(); db.refresh(page); return page

def db_delete_page(db: Session, page: PageConfigDB):
    db.delete(page); db.commit()


# ── Carts ──
def db_create_cart(db: Session, obj: CartDB) -> CartDB:
    db.add(obj); db.commit(); db.refresh(obj); return obj

def db_get_cart(db: Session, cart_id: str) -> Optional[CartDB]:
    return db.get(CartDB, cart_id)

def db_update_cart(db: Session, cart: CartDB, **kwargs) -> CartDB:
    for k, v in kwargs.items():
        setattr(cart, k, v)
    db.commit(); db.refresh(cart); return cart
