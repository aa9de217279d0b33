"""Pluggable revenue and bonus formulas."""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Mapping, Protocol, Union

from .models import LineItem, Number, Product, SellerStats

if TYPE_CHECKING:
    from .config import AnalyzerConfig


class RevenueStrategy(Protocol):
    """Revenue earned on one line item."""

    def __call__(self, item: LineItem, product: Product) -> Number: ...


class BonusStrategy(Protocol):
    """Bonus for the seller at ``index`` among ``total`` ranked sellers."""

    def __call__(self, index: int, total: int, seller: SellerStats) -> Number: ...


class DefaultRevenueStrategy:
    """Sale price times quantity, less the percentage discount."""

    def __call__(self, item: LineItem, product: Product) -> float:
        discount_factor = 1 - item.discount / 100
        return item.sale_price * item.quantity * discount_factor


@dataclass(frozen=True)
class TieredBonusStrategy:
    """
    Rank-based share of profit.

    Branches are checked in order and the first match wins:
    rank 0, then ranks 1 and 2, then the last rank, then everyone else.
    A lone seller therefore gets the first-place rate, and with two or
    three sellers nobody falls into the last-place tier.
    """

    first_place_rate: float = 0.15
    runner_up_rate: float = 0.10
    last_place_rate: float = 0.0
    default_rate: float = 0.05

    def __call__(self, index: int, total: int, seller: SellerStats) -> float:
        if index == 0:
            return seller.profit * self.first_place_rate
        elif index == 1 or index == 2:
            return seller.profit * self.runner_up_rate
        elif index == total - 1:
            return seller.profit * self.last_place_rate
        else:
            return seller.profit * self.default_rate

    @classmethod
    def from_config(cls, config: "AnalyzerConfig") -> "TieredBonusStrategy":
        return cls(**config.bonus_rates())


@dataclass
class AnalyzerOptions:
    """Calculators and limits used by one analysis run."""

    calculate_revenue: RevenueStrategy = field(default_factory=DefaultRevenueStrategy)
    calculate_bonus: BonusStrategy = field(default_factory=TieredBonusStrategy)
    top_products_limit: int = 10

    @classmethod
    def from_config(cls, config: "AnalyzerConfig") -> "AnalyzerOptions":
        """Default calculators parameterized by configuration."""
        return cls(
            calculate_revenue=DefaultRevenueStrategy(),
            calculate_bonus=TieredBonusStrategy.from_config(config),
            top_products_limit=config.top_products_limit,
        )

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any]) -> "AnalyzerOptions":
        """Build options from a plain mapping; camelCase keys are accepted."""
        return cls(
            calculate_revenue=options.get(
                "calculate_revenue", options.get("calculateRevenue")
            ),
            calculate_bonus=options.get(
                "calculate_bonus", options.get("calculateBonus")
            ),
            top_products_limit=options.get("top_products_limit", 10),
        )


OptionsLike = Union[AnalyzerOptions, Mapping[str, Any]]
