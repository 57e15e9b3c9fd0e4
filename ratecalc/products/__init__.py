"""Products: FRA, term deposit, swap leg (data only; expanded before pricing)."""

from ratecalc.products.common import BuySell, PayReceive
from ratecalc.products.deposit import ExpandedTermDeposit, TermDeposit
from ratecalc.products.fra import ExpandedFra, Fra, FraDiscounting
from ratecalc.products.swap_leg import ExpandedSwapLeg, RatePaymentPeriod, SwapLeg

__all__ = [
    "BuySell",
    "PayReceive",
    "Fra",
    "FraDiscounting",
    "ExpandedFra",
    "TermDeposit",
    "ExpandedTermDeposit",
    "SwapLeg",
    "ExpandedSwapLeg",
    "RatePaymentPeriod",
]
