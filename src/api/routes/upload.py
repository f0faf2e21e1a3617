"""
Stockage d'objets (images du builder).

POST /api/objects/upload           → {"uploadURL"} cible d'upload pré-générée (protégé)
PUT  /api/objects/upload/{oid}     → corps brut stocké sous UPLOADS_DIR/oid (une fois, cible émise uniquement)
PUT  /api/images {"imageURL"}      → {"objectPath": "/objects/<oid>"} (protégé)
GET  /objects/{oid}                → fichier stocké

`objectPath` est directement utilisable comme `content` d'une image ou
comme `style.backgroundImage`.
"""
import logging
import os
import re
import uuid
from pathlib import Path
from urllib.parse import urlparse

from fastapi import APIRouter, Depends, Request
from fastapi.responses import FileResponse
from pydantic import BaseModel

from ...errors import NotFoundError, UpstreamError, ValidationError
from .auth import require_admin

log = logging.getLogger(__name__)

router = APIRouter(tags=["Upload"])

# Répertoire de stockage des fichiers uploadés
_DEFAULT_UPLOADS = str(Path(__file__).parent.parent.parent.parent / "dist" / "uploads")

_OBJECT_ID = re.compile(r"^[0-9a-f]{32}$")

# Types servis tels quels (svg exclu)
IMAGE_TYPES = {"image/png", "image/jpeg", "image/gif", "image/webp", "image/avif"}


def _uploads_dir() -> Path:
    return Path(os.getenv("UPLOADS_DIR", _DEFAULT_UPLOADS))


def _base_url() -> str:
    return os.getenv("BASE_URL", "http://localhost:5000").rstrip("/")


def _object_file(oid: str) -> Path:
    if not _OBJECT_ID.match(oid):
        raise NotFoundError(f"Objet {oid} introuvable")
    return _uploads_dir() / oid


# ── Cible d'upload ───────────────────────────────────────────────────────────

def _pending_file(oid: str) -> Path:
    return _uploads_dir() / f"{oid}.pending"


def stored_media_type(content_type: str) -> str:
    """Type servi plus tard : images raster uniquement, sinon octet-stream."""
    main = (content_type or "").split(";", 1)[0].strip().lower()
    return main if main in IMAGE_TYPES else "application/octet-stream"


@router.post("/api/objects/upload", dependencies=[Depends(require_admin)])
def upload_target():
    oid = uuid.uuid4().hex
    try:
        _uploads_dir().mkdir(parents=True, exist_ok=True)
        _pending_file(oid).touch()
    except OSError as e:
        log.error("Réservation objet %s impossible : %s", oid, e)
        raise UpstreamError("Object storage unavailable") from e
    return {"uploadURL": f"{_base_url()}/api/objects/upload/{oid}"}


@router.put("/api/objects/upload/{oid}")
async def upload_object(oid: str, request: Request):
    """Un seul PUT par cible émise ; la cible est consommée avant l'écriture."""
    dest = _object_file(oid)
    marker = _pending_file(oid)
    if dest.exists():
        raise ValidationError("Object already uploaded", [{"loc": ["oid"], "msg": "already uploaded"}])
    if not marker.exists():
        raise NotFoundError(f"Cible d'upload {oid} inconnue")
    body = await request.body()
    if not body:
        raise ValidationError("Empty upload", [{"loc": ["body"], "msg": "empty file"}])
    try:
        marker.unlink()
    except FileNotFoundError:
        raise ValidationError("Object already uploaded", [{"loc": ["oid"], "msg": "already uploaded"}]) from None
    media_type = stored_media_type(request.headers.get("content-type", ""))
    try:
        dest.write_bytes(body)
        dest.with_suffix(".type").write_text(media_type)
    except OSError as e:
        log.error("Écriture objet %s impossible : %s", oid, e)
        raise UpstreamError("Object storage unavailable") from e
    log.info("Objet %s stocké — %d octets (%s)", oid, len(body), media_type)
    return {"ok": True, "size": len(body)}


# ── Normalisation → chemin stable ────────────────────────────────────────────

class ImageInput(BaseModel):
    imageURL: str


@router.put("/api/images", dependencies=[Depends(require_admin)])
def normalize_image(data: ImageInput):
    oid = urlparse(data.imageURL).path.rstrip("/").rsplit("/", 1)[-1]
    if not _OBJECT_ID.match(oid):
        raise ValidationError("Not an uploaded object URL", [{"loc": ["imageURL"], "msg": "unknown object URL"}])
    if not _object_file(oid).exists():
        raise NotFoundError(f"Objet {oid} introuvable")
    return {"objectPath": f"/objects/{oid}"}


@router.get("/objects/{oid}")
def get_object(oid: str):
    path = _object_file(oid)
    if not path.exists():
        raise NotFoundError(f"Objet {oid} introuvable")
    type_file = path.with_suffix(".type")
    media_type = stored_media_type(type_file.read_text()) if type_file.exists() else "application/octet-stream"
    return FileResponse(str(path), media_type=media_type, headers={"X-Content-Type-Options": "nosniff"})
