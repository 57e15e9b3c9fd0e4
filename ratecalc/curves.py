"""
Interest-rate curve primitives.

Curves are pure functions of time:
- Times are **year fractions** measured from the valuation date of the view
  holding the curve (the view converts dates to times with its day count).
- Rates are **continuously compounded zero rates**.
- Interpolation is **linear in zero rates** between pillars, flat outside.

The same curve type serves as a discount curve (keyed by currency) and as an
index forward curve (keyed by index name); forward rates are implied from
discount-factor ratios.
"""

import math
from bisect import bisect_right
from dataclasses import dataclass


@dataclass(frozen=True)
class ZeroRateCurve:
    """
    Zero curve quoted as CC rates at increasing pillar times.

    Satisfies the `Curve` protocol structurally.
    """

    name: str
    pillars: tuple[float, ...]
    zero_rates_cc: tuple[float, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "pillars", tuple(self.pillars))
        object.__setattr__(self, "zero_rates_cc", tuple(self.zero_rates_cc))
        if len(self.pillars) != len(self.zero_rates_cc):
            raise ValueError("pillars and zero_rates_cc must have the same length")
        if not self.pillars:
            raise ValueError("curve has no pillars")
        if any(b <= a for a, b in zip(self.pillars, self.pillars[1:])):
            raise ValueError("pillars must be strictly increasing")

    @classmethod
    def flat(cls, name: str, rate: float) -> "ZeroRateCurve":
        """Single-pillar curve: the same zero rate at every time."""
        return cls(name=name, pillars=(1.0,), zero_rates_cc=(rate,))

    def zero_rate_cc(self, t: float) -> float:
        """CC zero rate at year fraction `t >= 0`."""
        if t < 0:
            raise ValueError("t must be >= 0")
        pillars, rates = self.pillars, self.zero_rates_cc
        if t <= pillars[0]:
            return rates[0]
        if t >= pillars[-1]:
            return rates[-1]
        hi = bisect_right(pillars, t)
        lo = hi - 1
        weight = (t - pillars[lo]) / (pillars[hi] - pillars[lo])
        return rates[lo] + (rates[hi] - rates[lo]) * weight

    def df(self, t: float) -> float:
        """Discount factor exp(-r(t) t)."""
        return math.exp(-self.zero_rate_cc(t) * t)

    def bumped(self, bump: float) -> "ZeroRateCurve":
        """
        Parallel additive shift of every zero rate (absolute terms, 1bp = 0.0001).

        Discount factors scale by exp(-bump t).
        """
        return ZeroRateCurve(
            name=self.name,
            pillars=self.pillars,
            zero_rates_cc=tuple(r + bump for r in self.zero_rates_cc),
        )
