"""Seller performance reporting from raw sales records."""

from salesreport.analyzer import analyze_sales_data
from salesreport.strategies import (
    AnalyzerOptions,
    DefaultRevenueStrategy,
    TieredBonusStrategy,
)

__version__ = "0.1.0"

__all__ = [
    "AnalyzerOptions",
    "DefaultRevenueStrategy",
    "TieredBonusStrategy",
    "analyze_sales_data",
]
