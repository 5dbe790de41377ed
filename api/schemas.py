"""Pydantic schemas for the FastAPI surface."""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ProductText(BaseModel):
    """Raw product copy submitted for specification extraction."""

    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = ""
    description: str = ""
    product_type: str = Field(default="", description="Category hint, ex: 'Canapé', 'Matelas'")


class SpecificationsResponse(BaseModel):
    specifications: Dict[str, Any]
    attributes: Dict[str, Any] = Field(
        default_factory=dict, description="Flattened attr_* projection of the specifications"
    )
    confidence: int = Field(..., ge=0, le=100)


class ScoreRequest(BaseModel):
    """Product record carrying the generated text to score.

    Unknown keys are kept so any enriched field can take part in a check.
    """

    model_config = ConfigDict(extra="allow")

    id: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    color: Optional[str] = None
    material: Optional[str] = None
    style: Optional[str] = None
    brand: Optional[str] = None
    dimensions: Optional[str] = None
    price: Optional[float] = None
    compare_at_price: Optional[float] = None
    image_url: Optional[str] = None
    google_product_category: Optional[str] = None
    seo_title: Optional[str] = None
    seo_description: Optional[str] = None
    ad_headline: Optional[str] = None
    ad_description: Optional[str] = None


class ScoreResponse(BaseModel):
    kind: str
    score: int = Field(..., ge=0, le=100)
    suggestions: List[str]


class ProductPayload(BaseModel):
    """Catalog product to enrich and store for a retailer."""

    model_config = ConfigDict(extra="allow", str_strip_whitespace=True)

    id: Optional[str] = None
    handle: Optional[str] = None
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    product_type: Optional[str] = None
    vendor: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    price: Optional[float] = Field(default=None, ge=0)
    compare_at_price: Optional[float] = Field(default=None, ge=0)
    stock_quantity: Optional[int] = None
    image_url: Optional[str] = None


class ProductIngestResponse(BaseModel):
    retailer_id: str
    product_id: str
    indexed: bool = True
    seo_score: int
    ads_score: int
    confidence_score: int
    specifications: Dict[str, Any]
    url: Optional[str] = None


class ProductDocument(BaseModel):
    retailer_id: str
    product_id: str
    document: Dict[str, Any]


class ProductList(BaseModel):
    retailer_id: str
    items: List[Dict[str, Any]]


class ClearResponse(BaseModel):
    retailer_id: str
    deleted: int


class SEOProductRow(BaseModel):
    product_id: Optional[str] = None
    title: str
    seo_title: str
    seo_description: str
    current_title_length: int
    current_description_length: int
    seo_score: int
    missing_keywords: List[str]
    optimization_suggestions: List[str]
    google_category: str
    search_volume: Optional[int] = None
    competition: Optional[str] = None


class SEOStats(BaseModel):
    total_products: int
    avg_score: int
    good_seo: int
    needs_work: int
    optimization_rate: int


class SEOReport(BaseModel):
    retailer_id: str
    stats: SEOStats
    items: List[SEOProductRow]
