"""Store FastAPI application.

Web server that processes catalogue, cart and checkout requests
synchronously via HTTP. Each request runs inside the store domain context.

Usage:
    uvicorn src.app:app --host 0.0.0.0 --port 8000 --reload
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# The domain is initialized at module level, once per worker process.
# Workers share nothing in memory: the per-shopper checkout lock is
# process-local, and the cart clear inside the checkout unit of work is
# what keeps concurrent workers from recording one cart twice.
# PROTEAN_ENV selects the config overlay from src/store/domain.toml
# (e.g. "production" switches the database provider to PostgreSQL).
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from protean.integrations.fastapi import register_exception_handlers
from store.domain import store  # noqa: E402
from store.utils.logging import add_context, clear_context

store.init()

# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Store Checkout API",
    description="Catalogue, shopping cart and atomic checkout",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Push the store domain context for each request."""
    clear_context()
    add_context(method=request.method, path=request.url.path)
    with store.domain_context():
        response = await call_next(request)
    return response


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
from store.api import (  # noqa: E402
    product_router,
    purchase_router,
    register_checkout_error_handlers,
    shopper_router,
)

app.include_router(shopper_router)
app.include_router(product_router)
app.include_router(purchase_router)

register_exception_handlers(app)
register_checkout_error_handlers(app)


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(
        content={
            "status": "ok",
            "domain": {"name": store.name},
        }
    )
