from __future__ import annotations
from dataclasses import dataclass, field, asdict

from .engine import Checkout

@dataclass
class SummaryLine:
    sku: str
    quantity: int
    unit_price: int
    subtotal: int  # before any bulk offer

@dataclass
class PromotionLine:
    sku: str
    quantity: int
    price: int
    applied: int
    saved: int

@dataclass
class CheckoutSummary:
    lines: list[SummaryLine] = field(default_factory=list)
    promotions: list[PromotionLine] = field(default_factory=list)
    total: int = 0

    @property
    def total_saved(self) -> int:
        return sum(p.saved for p in self.promotions)

    def to_dict(self) -> dict:
        data = asdict(self)
        data["total_saved"] = self.total_saved
        return data

def summarize(session: Checkout) -> CheckoutSummary:
    """
    Build the receipt view of a session from its public outputs only.

    The total is read first so an inconsistent session fails before any line is built.
    """
    total = session.total_price()
    lines = []
    for sku, quantity in session.tally.items():
        rule = session.catalogue[sku]
        lines.append(SummaryLine(sku, quantity, rule.unit_price, quantity * rule.unit_price))

    promotions = []
    for sku, applied in session.applied_promotions().items():
        rule = session.catalogue[sku]
        offer = rule.bulk
        promotions.append(PromotionLine(
            sku=sku,
            quantity=offer.quantity,
            price=offer.price,
            applied=applied,
            saved=offer.savings(rule.unit_price) * applied,
        ))
    return CheckoutSummary(lines=lines, promotions=promotions, total=total)
