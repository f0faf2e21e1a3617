"""
Clients HTTP de l'API Jaki Global (requests).

PagesClient / CartClient  : mêmes opérations que PageStore / CartStore, à distance
AuthContext               : {authenticated, email, refresh(), login(), logout()}

Les trois partagent une requests.Session (cookie de session jaki_session).
Statuts → erreurs typées : 401 Unauthorized, 404 NotFound, 400/422 Validation,
502 Upstream, autres 5xx et erreurs réseau → TransientIOError.
"""
import logging, os
from typing import List, Optional

import requests

from page_builder.core.schemas import PageComponent, PageConfig

from .errors import TransientIOError, error_for_status

log = logging.getLogger(__name__)


def _default_base_url() -> str:
    return os.getenv("API_BASE_URL", "http://localhost:5000")


class ApiClient:
    def __init__(self, base_url: Optional[str] = None, session: Optional[requests.Session] = None,
                 timeout: float = 10):
        self.base_url = (base_url or _default_base_url()).rstrip("/")
        self.http = session if session is not None else requests.Session()
        self.timeout = timeout

    def _request(self, method: str, path: str, **kwargs):
        url = f"{self.base_url}{path}"
        try:
            resp = self.http.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            log.warning("%s %s injoignable : %s", method, path, e)
            raise TransientIOError(f"{method} {path}: {e}") from e
        if resp.status_code >= 400:
            detail, fields = "", None
            try:
                body = resp.json()
                detail = body.get("detail", "") if isinstance(body, dict) else ""
                fields = body.get("fields") if isinstance(body, dict) else None
            except ValueError:
                detail = resp.text[:200]
            raise error_for_status(resp.status_code, str(detail), fields)
        if not resp.content:
            return None
        return resp.json()


def _wire(components) -> List[dict]:
    return [c.to_wire() if isinstance(c, PageComponent) else c for c in components]


class PagesClient(ApiClient):
    """Page Store distant ; même interface que src.store.PageStore."""

    def list(self) -> List[PageConfig]:
        return [PageConfig(**p) for p in self._request("GET", "/api/pages")]

    def get(self, page_id: str) -> PageConfig:
        return PageConfig(**self._request("GET", f"/api/pages/{page_id}"))

    def create(self, name: str, components=None) -> PageConfig:
        body = {"name": name, "components": _wire(components or [])}
        return PageConfig(**self._request("POST", "/api/pages", json=body))

    def update(self, page_id: str, name: Optional[str] = None, components=None) -> PageConfig:
        body = {}
        if name is not None:
            body["name"] = name
        if components is not None:
            body["components"] = _wire(components)
        return PageConfig(**self._request("PUT", f"/api/pages/{page_id}", json=body))

    def delete(self, page_id: str) -> None:
        self._request("DELETE", f"/api/pages/{page_id}")


class CartClient(ApiClient):
    def get(self, cart_id: str) -> dict:
        return self._request("GET", f"/api/cart/{cart_id}")

    def create(self, payload: dict) -> dict:
        return self._request("POST", "/api/cart", json=payload)

    def update(self, cart_id: str, payload: dict) -> dict:
        return self._request("PUT", f"/api/cart/{cart_id}", json=payload)


class AuthContext(ApiClient):
    """État d'authentification côté client, rafraîchi explicitement."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.authenticated = False
        self.email: Optional[str] = None

    def refresh(self) -> bool:
        data = self._request("GET", "/api/auth/me")
        self.authenticated = bool(data.get("authenticated"))
        self.email = data.get("email") if self.authenticated else None
        return self.authenticated

    def login(self, email: str, password: str) -> bool:
        """Lève UnauthorizedError si les identifiants sont refusés."""
        data = self._request("POST", "/api/auth/login", json={"email": email, "password": password})
        self.authenticated = True
        self.email = data.get("email", email)
        return True

    def logout(self) -> None:
        self._request("POST", "/api/auth/logout")
        self.authenticated = False
        self.email = None

    def pages(self) -> PagesClient:
        """Client Page Store partageant le cookie de session."""
        return PagesClient(self.base_url, session=self.http, timeout=self.timeout)

    def cart(self) -> CartClient:
        return CartClient(self.base_url, session=self.http, timeout=self.timeout)
