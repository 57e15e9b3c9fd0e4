"""
Trades: a product plus trade-level information.

The product family is a closed set of kinds; calculation functions are
registered per `ProductKind` and looked up from the trade, never by
inspecting the product's class hierarchy.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import ClassVar, Optional, TypeAlias

from ratecalc.products.deposit import TermDeposit
from ratecalc.products.fra import Fra
from ratecalc.products.swap_leg import SwapLeg


class ProductKind(str, Enum):
    FRA = "FRA"
    TERM_DEPOSIT = "TERM_DEPOSIT"
    SWAP_LEG = "SWAP_LEG"


@dataclass(frozen=True)
class TradeInfo:
    id: str = ""
    trade_date: Optional[date] = None


@dataclass(frozen=True)
class FraTrade:
    product: Fra
    info: TradeInfo = field(default_factory=TradeInfo)
    product_kind: ClassVar[ProductKind] = ProductKind.FRA


@dataclass(frozen=True)
class TermDepositTrade:
    product: TermDeposit
    info: TradeInfo = field(default_factory=TradeInfo)
    product_kind: ClassVar[ProductKind] = ProductKind.TERM_DEPOSIT


@dataclass(frozen=True)
class SwapLegTrade:
    product: SwapLeg
    info: TradeInfo = field(default_factory=TradeInfo)
    product_kind: ClassVar[ProductKind] = ProductKind.SWAP_LEG


Trade: TypeAlias = FraTrade | TermDepositTrade | SwapLegTrade
