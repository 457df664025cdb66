# catalog/main.py
import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from .auth import require_api_key
from .config import Settings, get_settings
from .core import ProductIn, ProductUpdate
from .database import ProductStore
from .errors import register_exception_handlers
from .logging_config import setup_logging
from .logic import (
    DEFAULT_LIMIT, DEFAULT_PAGE,
    list_products_logic, get_product_logic, create_product_logic,
    update_product_logic, delete_product_logic, stats_logic,
)

logger = logging.getLogger(__name__)

GREETING = "Welcome to the Product API! Try /api/products or /api/products/stats"


def get_store(request: Request) -> ProductStore:
    return request.app.state.store


# ---------------------------
# Product endpoints
# ---------------------------
router = APIRouter(prefix="/api/products", dependencies=[Depends(require_api_key)])

@router.get("")
async def list_products(
    category: Optional[str] = None,
    search: Optional[str] = None,
    page: str = str(DEFAULT_PAGE),
    limit: str = str(DEFAULT_LIMIT),
    store: ProductStore = Depends(get_store),
):
    return list_products_logic(store, category=category, search=search, page=page, limit=limit)

# must stay ahead of /{product_id}, otherwise "stats" is taken for an id
@router.get("/stats")
async def product_stats(store: ProductStore = Depends(get_store)):
    return stats_logic(store)

@router.get("/{product_id}")
async def get_product(product_id: str, store: ProductStore = Depends(get_store)):
    return get_product_logic(store, product_id)

@router.post("", status_code=201)
async def create_product(payload: Optional[ProductIn] = None, store: ProductStore = Depends(get_store)):
    return create_product_logic(store, payload or ProductIn())

@router.put("/{product_id}")
async def update_product(product_id: str, payload: Optional[ProductUpdate] = None, store: ProductStore = Depends(get_store)):
    return update_product_logic(store, product_id, payload or ProductUpdate())

@router.delete("/{product_id}")
async def delete_product(product_id: str, store: ProductStore = Depends(get_store)):
    return delete_product_logic(store, product_id)


# ---------------------------
# App factory
# ---------------------------
def create_app(settings: Optional[Settings] = None, store: Optional[ProductStore] = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings.log_level)

    app = FastAPI(title=settings.app_name)
    app.state.settings = settings
    app.state.store = store if store is not None else ProductStore()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        path = request.url.path
        if request.url.query:
            path = f"{path}?{request.url.query}"
        logger.info("[%s] %s %s", datetime.now(timezone.utc).isoformat(), request.method, path)
        return await call_next(request)

    register_exception_handlers(app)

    @app.get("/", response_class=PlainTextResponse)
    async def root():
        return GREETING

    app.include_router(router)
    return app


app = create_app()


def run() -> None:
    import uvicorn

    settings = get_settings()
    logger.info("Server running on http://%s:%s", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
