"""Seller performance analysis: aggregation, ranking and bonus assignment."""

import logging
import math
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from pydantic import ValidationError

from .exceptions import (
    InvalidInputError,
    InvalidOptionsError,
    UnknownProductError,
    UnknownSellerError,
)
from .models import (
    Product,
    PurchaseRecord,
    ReportEntry,
    SalesDataset,
    Seller,
    SellerStats,
    TopProduct,
)
from .strategies import AnalyzerOptions, OptionsLike

logger = logging.getLogger(__name__)

REQUIRED_COLLECTIONS = ("sellers", "products", "customers", "purchase_records")

_TWO_DP = Decimal("0.01")

DatasetLike = Union[SalesDataset, Mapping[str, Any]]


def _round2(value: float) -> float:
    """Round half away from zero to 2 decimal places."""
    if not math.isfinite(value):
        return value
    exact = Decimal(str(value))
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, exact.adjusted() + 3)
        return float(exact.quantize(_TWO_DP, rounding=ROUND_HALF_UP))


def _collections_of(data: DatasetLike) -> Dict[str, Any]:
    if isinstance(data, SalesDataset):
        return {name: getattr(data, name) for name in REQUIRED_COLLECTIONS}
    if isinstance(data, Mapping):
        return {name: data.get(name) for name in REQUIRED_COLLECTIONS}
    raise InvalidInputError(
        f"Dataset must be a mapping of collections, got {type(data).__name__}"
    )


def validate_dataset(data: Optional[DatasetLike]) -> SalesDataset:
    """
    Check the top-level collections and parse records into typed models.

    Raises:
        InvalidInputError: a collection is missing, not a list, or empty,
            or a record does not match its model.
    """
    if data is None:
        raise InvalidInputError("Dataset is required")

    collections = _collections_of(data)
    invalid = [
        name
        for name, value in collections.items()
        if not isinstance(value, (list, tuple)) or len(value) == 0
    ]
    if invalid:
        raise InvalidInputError(
            "Dataset collections must be non-empty lists: " + ", ".join(invalid),
            details={"collections": invalid},
        )

    if isinstance(data, SalesDataset):
        return data

    try:
        return SalesDataset.model_validate(collections)
    except ValidationError as exc:
        errors = [
            {
                "loc": ".".join(str(part) for part in err["loc"]),
                "msg": err["msg"],
                "type": err["type"],
            }
            for err in exc.errors()
        ]
        raise InvalidInputError(
            f"Dataset records are malformed ({len(errors)} errors)",
            details={"errors": errors},
        ) from exc


def validate_options(options: Optional[OptionsLike]) -> AnalyzerOptions:
    """
    Normalize options and check that both calculators are callable.

    Raises:
        InvalidOptionsError: options are missing or a calculator is not callable.
    """
    if isinstance(options, AnalyzerOptions):
        resolved = options
    elif isinstance(options, Mapping):
        resolved = AnalyzerOptions.from_mapping(options)
    else:
        raise InvalidOptionsError(
            "Options must provide calculate_revenue and calculate_bonus"
        )

    missing = [
        name
        for name in ("calculate_revenue", "calculate_bonus")
        if not callable(getattr(resolved, name))
    ]
    if missing:
        raise InvalidOptionsError(
            "Options must contain callable calculate_revenue and calculate_bonus",
            details={"not_callable": missing},
        )

    limit = resolved.top_products_limit
    if not isinstance(limit, int) or isinstance(limit, bool) or limit < 1:
        raise InvalidOptionsError(
            "top_products_limit must be a positive integer",
            details={"top_products_limit": limit},
        )

    return resolved


def build_seller_index(
    sellers: Sequence[Seller],
) -> tuple[List[SellerStats], Dict[str, SellerStats]]:
    """Create zeroed stats per seller, plus a lookup by seller id."""
    stats = [SellerStats.for_seller(seller) for seller in sellers]
    index: Dict[str, SellerStats] = {}
    for entry in stats:
        if entry.seller_id in index:
            logger.warning(
                "Duplicate seller id '%s'; last occurrence wins", entry.seller_id
            )
        index[entry.seller_id] = entry
    return stats, index


def build_product_index(products: Sequence[Product]) -> Dict[str, Product]:
    """Lookup of catalogue products by SKU."""
    index: Dict[str, Product] = {}
    for product in products:
        if product.sku in index:
            logger.warning("Duplicate SKU '%s'; last occurrence wins", product.sku)
        index[product.sku] = product
    return index


def aggregate_purchases(
    records: Sequence[PurchaseRecord],
    seller_index: Dict[str, SellerStats],
    product_index: Dict[str, Product],
    options: AnalyzerOptions,
) -> None:
    """Fold purchase records into the per-seller accumulators, in input order."""
    for record in records:
        seller = seller_index.get(record.seller_id)
        if seller is None:
            raise UnknownSellerError(record.seller_id)

        seller.sales_count += 1
        seller.revenue += record.total_amount

        for item in record.items:
            product = product_index.get(item.sku)
            if product is None:
                raise UnknownProductError(item.sku)

            cost = product.purchase_price * item.quantity
            revenue = options.calculate_revenue(item, product)
            seller.profit += revenue - cost

            seller.products_sold[item.sku] = (
                seller.products_sold.get(item.sku, 0) + item.quantity
            )


def _top_products(stats: SellerStats, limit: int) -> List[TopProduct]:
    ranked = sorted(
        stats.products_sold.items(), key=lambda pair: pair[1], reverse=True
    )
    return [TopProduct(sku=sku, quantity=quantity) for sku, quantity in ranked[:limit]]


def rank_sellers(
    stats: List[SellerStats], options: AnalyzerOptions
) -> List[SellerStats]:
    """
    Order sellers by profit and finalize bonus and top products.

    The sort is stable, so sellers with equal profit keep their input order.
    """
    ranked = sorted(stats, key=lambda s: s.profit, reverse=True)
    total = len(ranked)

    for index, seller in enumerate(ranked):
        seller.bonus = options.calculate_bonus(index, total, seller)
        seller.top_products = _top_products(seller, options.top_products_limit)
        logger.debug(
            "Rank %d: seller=%s profit=%s bonus=%s",
            index,
            seller.seller_id,
            seller.profit,
            seller.bonus,
        )

    return ranked


def project_report(ranked: Sequence[SellerStats]) -> List[ReportEntry]:
    """Shape finalized stats into rounded report entries, keeping order."""
    return [
        ReportEntry(
            seller_id=seller.seller_id,
            name=seller.name,
            revenue=_round2(seller.revenue),
            profit=_round2(seller.profit),
            sales_count=seller.sales_count,
            top_products=list(seller.top_products),
            bonus=_round2(seller.bonus),
        )
        for seller in ranked
    ]


def analyze_sales_data(
    data: Optional[DatasetLike], options: Optional[OptionsLike]
) -> List[ReportEntry]:
    """
    Compute the seller performance report.

    Args:
        data: SalesDataset, or a mapping with sellers, products, customers
            and purchase_records
        options: AnalyzerOptions, or a mapping with calculate_revenue and
            calculate_bonus callables

    Returns:
        One ReportEntry per seller, ordered by profit descending

    Raises:
        InvalidInputError: dataset collections are missing, empty or malformed
        InvalidOptionsError: a calculator is not callable
        UnknownSellerError: a purchase record names an unknown seller
        UnknownProductError: a line item names an unknown SKU
    """
    dataset = validate_dataset(data)
    resolved = validate_options(options)

    logger.info(
        f"Analyzing {len(dataset.purchase_records)} purchase records "
        f"for {len(dataset.sellers)} sellers"
    )

    stats, seller_index = build_seller_index(dataset.sellers)
    product_index = build_product_index(dataset.products)

    aggregate_purchases(dataset.purchase_records, seller_index, product_index, resolved)
    ranked = rank_sellers(stats, resolved)

    return project_report(ranked)
