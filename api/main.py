"""FastAPI application exposing extraction, scoring and enriched catalogs."""
from __future__ import annotations

from fastapi import FastAPI, HTTPException, Path, Query
from fastapi.responses import JSONResponse

from . import services
from .schemas import (
    ClearResponse,
    ProductDocument,
    ProductIngestResponse,
    ProductList,
    ProductPayload,
    ProductText,
    ScoreRequest,
    ScoreResponse,
    SEOReport,
    SpecificationsResponse,
)

app = FastAPI(
    title="Furniture Enrichment API",
    version="1.0.0",
    description=(
        "REST API for furniture attribute extraction, marketing text scoring and "
        "per-retailer enriched catalogs. Payloads are UTF-8 French product copy."
    ),
    default_response_class=JSONResponse,
)


@app.get("/healthz", summary="Health probe")
def healthcheck() -> dict:
    return {"status": "ok"}


@app.post(
    "/api/specifications",
    response_model=SpecificationsResponse,
    summary="Extract structured specifications from product text",
)
def extract_specifications(payload: ProductText) -> SpecificationsResponse:
    result = services.extract_specifications(payload.model_dump(mode="python"))
    return SpecificationsResponse(**result)


@app.post(
    "/api/scores/{kind}",
    response_model=ScoreResponse,
    summary="Score generated text with the seo, ads or confidence heuristic",
)
def score_product(
    payload: ScoreRequest,
    kind: str = Path(..., description="seo, ads or confidence"),
) -> ScoreResponse:
    try:
        result = services.score_product(kind, payload.model_dump(mode="python", exclude_none=True))
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return ScoreResponse(**result)


@app.post(
    "/api/retailers/{retailer_id}/products",
    response_model=ProductIngestResponse,
    summary="Enrich and store a product",
)
def ingest_product(retailer_id: str, payload: ProductPayload) -> ProductIngestResponse:
    try:
        result = services.upsert_product(
            retailer_id, payload.model_dump(mode="python", exclude_none=True)
        )
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return ProductIngestResponse(**result)


@app.get(
    "/api/retailers/{retailer_id}/products",
    response_model=ProductList,
    summary="List a retailer's enriched products",
)
def list_products(
    retailer_id: str,
    size: int = Query(100, ge=1, le=1000),
) -> ProductList:
    return ProductList(**services.list_products(retailer_id, size))


@app.get(
    "/api/retailers/{retailer_id}/products/{product_id}",
    response_model=ProductDocument,
    summary="Retrieve one enriched product",
)
def get_product(retailer_id: str, product_id: str) -> ProductDocument:
    try:
        result = services.fetch_product(retailer_id, product_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return ProductDocument(**result)


@app.delete(
    "/api/retailers/{retailer_id}/products",
    response_model=ClearResponse,
    summary="Remove every enriched product of a retailer",
)
def clear_products(retailer_id: str) -> ClearResponse:
    return ClearResponse(**services.clear_products(retailer_id))


@app.get(
    "/api/retailers/{retailer_id}/seo",
    response_model=SEOReport,
    summary="SEO review of a retailer's enriched catalog",
)
def get_seo_report(
    retailer_id: str,
    size: int = Query(500, ge=1, le=1000),
) -> SEOReport:
    return SEOReport(**services.seo_report(retailer_id, size))
