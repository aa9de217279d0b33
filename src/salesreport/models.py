"""Pydantic data models for sales records and seller reports."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

Number = Union[int, float]


class _SourceRecord(BaseModel):
    """Immutable input record; unknown keys from raw datasets are dropped."""

    model_config = ConfigDict(frozen=True, extra="ignore", coerce_numbers_to_str=True)


class Seller(_SourceRecord):
    """Seller card."""

    id: str = Field(..., min_length=1)
    first_name: str
    last_name: str

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


class Product(_SourceRecord):
    """Catalogue entry keyed by SKU."""

    sku: str = Field(..., min_length=1)
    purchase_price: float = Field(..., description="Unit cost")
    name: Optional[str] = None
    category: Optional[str] = None
    sale_price: Optional[float] = Field(None, description="List price")


class Customer(_SourceRecord):
    """Customer card. Carried for dataset completeness only."""

    id: str = Field(..., min_length=1)
    first_name: Optional[str] = None
    last_name: Optional[str] = None


class LineItem(_SourceRecord):
    """One product entry within a purchase record."""

    sku: str = Field(..., min_length=1)
    quantity: Number = Field(..., description="Negative for returns")
    sale_price: float
    discount: float = Field(0, description="Discount percent; negative is a markup")


class PurchaseRecord(_SourceRecord):
    """Receipt issued by a seller."""

    seller_id: str = Field(..., min_length=1)
    total_amount: float = Field(..., description="Invoice-level revenue")
    items: List[LineItem] = Field(default_factory=list)
    receipt_id: Optional[str] = None
    date: Optional[str] = Field(None, description="Receipt date (ISO format)")
    customer_id: Optional[str] = None


class SalesDataset(BaseModel):
    """The four collections a report is computed from."""

    model_config = ConfigDict(extra="ignore")

    sellers: List[Seller]
    products: List[Product]
    customers: List[Customer]
    purchase_records: List[PurchaseRecord]


class TopProduct(BaseModel):
    """SKU with the cumulative quantity a seller sold."""

    model_config = ConfigDict(frozen=True)

    sku: str
    quantity: Number


class ReportEntry(BaseModel):
    """Final per-seller report line."""

    model_config = ConfigDict(frozen=True)

    seller_id: str
    name: str
    revenue: float
    profit: float
    sales_count: int
    top_products: List[TopProduct]
    bonus: float


@dataclass
class SellerStats:
    """Per-seller accumulators, mutated only while a report is computed."""

    seller_id: str
    name: str
    revenue: float = 0.0
    profit: float = 0.0
    sales_count: int = 0
    products_sold: Dict[str, Number] = field(default_factory=dict)
    bonus: float = 0.0
    top_products: List[TopProduct] = field(default_factory=list)

    @classmethod
    def for_seller(cls, seller: Seller) -> "SellerStats":
        return cls(seller_id=seller.id, name=seller.display_name)
