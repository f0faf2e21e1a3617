"""
Auth — identifiant admin unique + cookie de session signé.

POST /api/auth/login   {email, password} → pose jaki_session, 401 sinon
GET  /api/auth/me      → {authenticated, email?}
POST /api/auth/logout  → efface le cookie
GET  /login            → formulaire
POST /login            → valide, redirige vers /builder (ou /login?error=1)
GET  /logout           → efface le cookie, redirige vers /login
"""
import hashlib
import hmac
import logging
import os
from typing import Optional

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse
from pydantic import BaseModel

from ...errors import UnauthorizedError

log = logging.getLogger(__name__)

router = APIRouter(tags=["Auth"])

COOKIE_NAME = "jaki_session"


def _admin_email() -> str:
    return os.getenv("ADMIN_EMAIL", "admin@jakiglobal.com")


def _admin_password() -> str:
    return os.getenv("ADMIN_PASSWORD", "changeme")


def _secret() -> bytes:
    return os.getenv("SESSION_SECRET", "jaki-global-secret-key").encode()


def _max_age() -> int:
    return int(os.getenv("SESSION_MAX_AGE", "86400"))


def _sign(email: str) -> str:
    return hmac.new(_secret(), email.encode(), hashlib.sha256).hexdigest()


def session_value(email: str) -> str:
    return f"{email}|{_sign(email)}"


def current_email(request: Request) -> Optional[str]:
    """Email de la session si le cookie est présent et correctement signé."""
    raw = request.cookies.get(COOKIE_NAME, "")
    email, sep, sig = raw.rpartition("|")
    if not sep or not email:
        return None
    if not hmac.compare_digest(_sign(email), sig):
        return None
    return email


def require_admin(request: Request) -> str:
    """Dépendance FastAPI des routes protégées."""
    email = current_email(request)
    if email is None:
        raise UnauthorizedError("Not authenticated")
    return email


def check_credentials(email: str, password: str) -> bool:
    return (hmac.compare_digest(email.strip().lower(), _admin_email().lower())
            and hmac.compare_digest(password, _admin_password()))


def _set_session(resp, email: str):
    resp.set_cookie(
        key=COOKIE_NAME,
        value=session_value(email),
        httponly=True,
        samesite="lax",
        max_age=_max_age(),
        secure=False,                 # True en prod HTTPS (proxy)
    )
    return resp


# ── API JSON ───────────────────────────────────────────────────────────

class LoginInput(BaseModel):
    email:    str
    password: str


@router.post("/api/auth/login")
def api_login(data: LoginInput):
    if not check_credentials(data.email, data.password):
        log.info("Connexion refusée pour %s", data.email)
        raise UnauthorizedError("Invalid credentials")
    email = _admin_email()
    return _set_session(JSONResponse({"success": True, "email": email}), email)


@router.get("/api/auth/me")
def api_me(request: Request):
    email = current_email(request)
    if email is None:
        return {"authenticated": False}
    return {"authenticated": True, "email": email}


@router.post("/api/auth/logout")
def api_logout():
    resp = JSONResponse({"success": True})
    resp.delete_cookie(COOKIE_NAME)
    return resp


# ── Formulaire HTML ────────────────────────────────────────────────────

_CSS = """
*{box-sizing:border-box;margin:0;padding:0}
body{font-family:'Inter',sans-serif;background:#f4f4f5;color:#18181b;
  display:flex;align-items:center;justify-content:center;min-height:100vh}
.card{background:#fff;border:1px solid #e4e4e7;border-radius:12px;
  padding:40px 36px;width:100%;max-width:380px}
.logo{font-family:'Montserrat',sans-serif;font-size:1.5rem;font-weight:700;text-align:center}
.sub{color:#71717a;font-size:13px;text-align:center;margin:4px 0 28px}
label{display:block;color:#52525b;font-size:12px;margin:14px 0 6px}
input{width:100%;border:1px solid #e4e4e7;border-radius:6px;padding:11px 12px;
  font-size:15px;font-family:inherit;outline:none}
input:focus{border-color:#3b82f6}
.btn{display:block;width:100%;margin-top:22px;background:#3b82f6;color:#fff;
  border:none;padding:13px;border-radius:8px;font-size:15px;font-weight:600;cursor:pointer}
.err{color:#ef4444;font-size:13px;margin-top:14px;text-align:center}
"""


@router.get("/login", response_class=HTMLResponse)
def login_page(error: str = ""):
    err_html = '<p class="err">Invalid email or password.</p>' if error else ""
    return HTMLResponse(f"""<!DOCTYPE html><html lang="en"><head>
<meta charset="UTF-8"><meta name="viewport" content="width=device-width,initial-scale=1">
<title>Admin Login — Jaki Global</title>
<style>{_CSS}</style>
</head><body>
<div class="card">
  <div class="logo">Jaki Global</div>
  <p class="sub">Admin Login</p>
  <form method="POST" action="/login">
    <label>Email</label>
    <input type="email" name="email" autofocus placeholder="admin@jakiglobal.com">
    <label>Password</label>
    <input type="password" name="password" placeholder="••••••••">
    <button class="btn" type="submit">Sign in</button>
  </form>
  {err_html}
</div>
</body></html>""")


@router.post("/login")
async def login_submit(request: Request):
    form = await request.form()
    email = str(form.get("email", ""))
    password = str(form.get("password", ""))

    if not check_credentials(email, password):
        return RedirectResponse("/login?error=1", status_code=303)

    return _set_session(RedirectResponse("/builder", status_code=303), _admin_email())


@router.get("/logout")
def logout():
    resp = RedirectResponse("/login", status_code=303)
    resp.delete_cookie(COOKIE_NAME)
    return resp
