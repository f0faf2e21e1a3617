"""
JAKI GLOBAL — FastAPI app (builder + boutique)
Démarrer : uvicorn src.api.main:app --reload --port 5000
"""
import logging
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles

from page_builder.router import router as page_builder_router

from ..errors import BuilderError, ValidationError
from .routes import auth, builder, cart, pages, products, site, upload

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s — %(message)s")
log = logging.getLogger(__name__)

app = FastAPI(title="JAKI GLOBAL — Page Builder & Shop", version="1.0.0", docs_url="/docs")

app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])


@app.exception_handler(BuilderError)
async def builder_error_handler(request: Request, exc: BuilderError):
    if exc.status_code >= 500:
        log.error("%s %s → %s : %s", request.method, request.url.path, exc.status_code, exc.detail)
    return JSONResponse(exc.to_dict(), status_code=exc.status_code)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    fields = [{"loc": list(e["loc"]), "msg": e["msg"]} for e in exc.errors()]
    err = ValidationError("Invalid payload", fields)
    return JSONResponse(err.to_dict(), status_code=err.status_code)


@app.middleware("http")
async def redirect_401_to_login(request: Request, call_next):
    """Redirige les 401 sur les pages HTML protégées vers /login pour les navigateurs."""
    response = await call_next(request)
    path = request.url.path
    accept = request.headers.get("accept", "")
    is_browser = "text/html" in accept
    if (response.status_code == 401
            and not path.startswith("/api")
            and is_browser):
        return RedirectResponse("/login", status_code=303)
    return response


@app.on_event("startup")
def startup():
    from ..database import init_db
    init_db()
    log.info("DB initialisée (SQLite)")

    # Montage fichiers statiques (créé si absent, silencieux si permission refusée)
    assets = Path(__file__).parent.parent.parent / "dist" / "assets"
    try:
        assets.mkdir(parents=True, exist_ok=True)
        app.mount("/assets", StaticFiles(directory=str(assets)), name="assets")
        log.info("Static assets monté sur %s", assets)
    except OSError as e:
        log.warning("Impossible de monter /assets : %s", e)


@app.get("/health")
def health():
    return {"status": "ok", "service": "jaki_global", "version": "1.0.0"}


app.include_router(auth.router)
app.include_router(pages.router)
app.include_router(cart.router)
app.include_router(products.router)
app.include_router(upload.router)
app.include_router(page_builder_router)
app.include_router(site.router)
app.include_router(builder.router)
