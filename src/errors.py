"""
Taxonomie d'erreurs Jaki Global — partagée par stores, session, clients HTTP et API.

BuilderError
 ├─ ValidationError   422  payload invalide (fields = [{loc, msg}])
 ├─ NotFoundError     404  page / panier / composant / produit / objet inconnu
 ├─ UnauthorizedError 401  appel protégé sans session
 ├─ UpstreamError     502  catalogue / paiement / stockage en erreur
 └─ TransientIOError  503  réseau vers Page Store / Cart Store
"""
from typing import List, Optional

import pydantic


class BuilderError(Exception):
    status_code = 500
    kind = "error"

    def __init__(self, detail: str = ""):
        super().__init__(detail)
        self.detail = detail

    def to_dict(self) -> dict:
        return {"error": self.kind, "detail": self.detail}


class ValidationError(BuilderError):
    status_code = 422
    kind = "validation_error"

    def __init__(self, detail: str = "Invalid payload", fields: Optional[List[dict]] = None):
        super().__init__(detail)
        self.fields = fields or []

    @classmethod
    def from_pydantic(cls, exc: pydantic.ValidationError, detail: str = "Invalid payload") -> "ValidationError":
        fields = [{"loc": list(e["loc"]), "msg": e["msg"]} for e in exc.errors()]
        return cls(detail, fields)

    def to_dict(self) -> dict:
        d = super().to_dict()
        if self.fields:
            d["fields"] = self.fields
        return d


class NotFoundError(BuilderError):
    status_code = 404
    kind = "not_found"


class UnauthorizedError(BuilderError):
    status_code = 401
    kind = "unauthorized"


class UpstreamError(BuilderError):
    status_code = 502
    kind = "upstream_error"


class TransientIOError(BuilderError):
    status_code = 503
    kind = "transient_io_error"


_BY_STATUS = {401: UnauthorizedError, 404: NotFoundError, 400: ValidationError,
              422: ValidationError, 502: UpstreamError}


def error_for_status(status: int, detail: str = "", fields: Optional[List[dict]] = None) -> BuilderError:
    """Erreur typée correspondant à un statut HTTP (5xx non mappés → TransientIOError)."""
    cls = _BY_STATUS.get(status)
    if cls is ValidationError:
        return ValidationError(detail or "Invalid payload", fields)
    if cls is not None:
        return cls(detail)
    if status >= 500:
        return TransientIOError(detail or f"HTTP {status}")
    return BuilderError(detail or f"HTTP {status}")
