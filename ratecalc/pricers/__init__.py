"""Pricer implementations, one per expanded product type."""

from ratecalc.pricers.base import BasePricer
from ratecalc.pricers.deposit_pricer import DiscountingTermDepositProductPricer
from ratecalc.pricers.fra_pricer import DiscountingFraProductPricer
from ratecalc.pricers.swap_leg_pricer import DiscountingSwapLegPricer

__all__ = [
    "BasePricer",
    "DiscountingFraProductPricer",
    "DiscountingTermDepositProductPricer",
    "DiscountingSwapLegPricer",
]
