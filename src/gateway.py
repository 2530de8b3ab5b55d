"""FastAPI application factory for the Qahwa domains.

Each request is wrapped in the Protean domain context that owns its path.
Paths are matched in order, so ``/customers/{id}/orders`` (an Ordering feed)
is resolved before the Loyalty ``/customers`` routes.
"""

import re

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from protean.integrations.fastapi import register_exception_handlers


def build_route_map(catalogue, ordering, loyalty):
    """Return ``(pattern, domain)`` pairs, most specific first."""
    return [
        (re.compile(r"^/menu-items(/|$)"), catalogue),
        (re.compile(r"^/customers/[^/]+/orders/?$"), ordering),
        (re.compile(r"^/sessions/[^/]+/orders/?$"), ordering),
        (re.compile(r"^/cart(/|$)"), ordering),
        (re.compile(r"^/orders(/|$)"), ordering),
        (re.compile(r"^/customers(/|$)"), loyalty),
        (re.compile(r"^/cards(/|$)"), loyalty),
    ]


def resolve_domain(route_map, path: str):
    """Return the domain for the given request path, or None."""
    for pattern, domain in route_map:
        if pattern.match(path):
            return domain
    return None


def create_app(catalogue, ordering, loyalty) -> FastAPI:
    """Build the API for already-initialized domains."""
    from catalogue.api import menu_router
    from loyalty.api import card_router, customer_router
    from ordering.api import cart_router, feed_router, order_router

    route_map = build_route_map(catalogue, ordering, loyalty)

    app = FastAPI(
        title="Qahwa API",
        description="Coffee-shop ordering: Catalogue, Ordering and Loyalty domains",
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
        """Push the correct Protean domain context for each request."""
        domain = resolve_domain(route_map, request.url.path)
        if domain is not None:
            with domain.domain_context():
                response = await call_next(request)
            return response
        # No domain match: health check and docs pass through
        return await call_next(request)

    register_exception_handlers(app)

    # Feed routes share the /customers prefix with Loyalty and must be registered first
    app.include_router(feed_router)
    app.include_router(menu_router)
    app.include_router(cart_router)
    app.include_router(order_router)
    app.include_router(customer_router)
    app.include_router(card_router)

    @app.get("/health")
    async def health():
        return JSONResponse(
            content={
                "status": "ok",
                "domains": {
                    "catalogue": {"name": catalogue.name},
                    "ordering": {"name": ordering.name},
                    "loyalty": {"name": loyalty.name},
                },
            }
        )

    return app
