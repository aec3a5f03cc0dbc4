from __future__ import annotations

import json
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, List, Optional, Tuple

from starlette.applications import Starlette
from starlette.exceptions import HTTPException
from starlette.middleware.cors import CORSMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.routing import Route

from ...config import load_config
from ...logging import get_logger
from ..db import InventoryDatabase
from ..models import MutationResult
from ..report import generate_report
from ..repository import ProductRepository
from ..validation import (
    validate_name,
    validate_price,
    validate_product_id,
    validate_quantity,
    validate_search_term,
    validate_threshold,
)


LOG = get_logger("api")


async def _read_payload(request: Request) -> Tuple[str, int, float]:
    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise HTTPException(status_code=400, detail="Request body must be JSON") from exc
    if not isinstance(body, dict):
        raise HTTPException(status_code=400, detail="Request body must be a JSON object")

    name = validate_name(body.get("name"))
    quantity = validate_quantity(body.get("quantity"))
    price = validate_price(body.get("price"))
    for checked in (name, quantity, price):
        if not checked.ok:
            raise HTTPException(status_code=400, detail=checked.reason)
    return name.value, quantity.value, price.value


def _path_product_id(request: Request) -> int:
    # IDs outside SQLite's integer range cannot name a stored product.
    checked = validate_product_id(request.path_params["product_id"])
    if not checked.ok:
        raise HTTPException(status_code=404, detail="Product not found")
    return checked.value


def create_app(
    db_path: Optional[str] = None,
    *,
    allow_origins: Optional[List[str]] = None,
) -> Starlette:
    """Create a Starlette app exposing the inventory as a JSON API.

    Opens the database up front so an unusable path fails at startup with
    DatabaseInitError rather than on the first request.
    """

    resolved_path = db_path or load_config().db_path
    db = InventoryDatabase(resolved_path, check_same_thread=False).open()
    repository = ProductRepository(db)

    @asynccontextmanager
    async def lifespan(_: Starlette) -> AsyncIterator[None]:
        try:
            yield
        finally:
            db.close()

    async def health(_: Request) -> JSONResponse:
        return JSONResponse({"status": "ok", "db_path": db.db_path})

    async def list_products(request: Request) -> JSONResponse:
        qp = request.query_params
        search = qp.get("search")
        below = qp.get("below")
        if search is not None and below is not None:
            raise HTTPException(status_code=400, detail="Use either search or below, not both")
        if search is not None:
            term = validate_search_term(search)
            if not term.ok:
                raise HTTPException(status_code=400, detail=term.reason)
            products = repository.search_by_name(term.value)
        elif below is not None:
            threshold = validate_threshold(below)
            if not threshold.ok:
                raise HTTPException(status_code=400, detail=threshold.reason)
            products = repository.filter_by_quantity(threshold.value)
        else:
            products = repository.get_all()
        if products is None:
            raise HTTPException(status_code=500, detail="Failed to retrieve products")
        items: List[Dict[str, Any]] = [p.to_dict() for p in products]
        return JSONResponse({"total": len(items), "items": items})

    async def create_product(request: Request) -> JSONResponse:
        name, quantity, price = await _read_payload(request)
        new_id = repository.add(name, quantity, price)
        if new_id is None:
            raise HTTPException(status_code=500, detail="Failed to add product")
        product = repository.get(new_id)
        if product is None:
            raise HTTPException(status_code=500, detail="Product vanished after insert")
        LOG.info(f"Product '{name}' added with id {new_id}")
        return JSONResponse(product.to_dict(), status_code=201)

    async def product_detail(request: Request) -> JSONResponse:
        product_id = _path_product_id(request)
        product = repository.get(product_id)
        if product is None:
            raise HTTPException(status_code=404, detail="Product not found")
        return JSONResponse(product.to_dict())

    async def update_product(request: Request) -> JSONResponse:
        product_id = _path_product_id(request)
        name, quantity, price = await _read_payload(request)
        outcome = repository.update(product_id, name, quantity, price)
        if outcome is MutationResult.NOT_FOUND:
            raise HTTPException(status_code=404, detail=f"No product found with ID {product_id}")
        if outcome is MutationResult.FAILURE:
            raise HTTPException(status_code=500, detail="Failed to update product")
        return JSONResponse({"id": product_id, "name": name, "quantity": quantity, "price": price})

    async def delete_product(request: Request) -> Response:
        product_id = _path_product_id(request)
        outcome = repository.delete(product_id)
        if outcome is MutationResult.NOT_FOUND:
            raise HTTPException(status_code=404, detail=f"No product found with ID {product_id}")
        if outcome is MutationResult.FAILURE:
            raise HTTPException(status_code=500, detail="Failed to delete product")
        return Response(status_code=204)

    async def report(_: Request) -> JSONResponse:
        summary = generate_report(repository)
        if summary is None:
            raise HTTPException(status_code=500, detail="Failed to generate report")
        return JSONResponse(summary.to_dict())

    routes = [
        Route("/api/health", health, methods=["GET"]),
        Route("/api/products", list_products, methods=["GET"]),
        Route("/api/products", create_product, methods=["POST"]),
        Route("/api/products/{product_id:int}", product_detail, methods=["GET"]),
        Route("/api/products/{product_id:int}", update_product, methods=["PUT"]),
        Route("/api/products/{product_id:int}", delete_product, methods=["DELETE"]),
        Route("/api/report", report, methods=["GET"]),
    ]

    app = Starlette(debug=False, routes=routes, lifespan=lifespan)

    origins = allow_origins or ["http://localhost:5173", "http://127.0.0.1:5173"]
    if "*" in origins:
        cors_allow_origins = ["*"]
    else:
        cors_allow_origins = origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_allow_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    LOG.info(f"Inventory API ready on database {db.db_path}")
    return app


__all__ = ["create_app"]
