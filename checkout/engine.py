from __future__ import annotations
from types import MappingProxyType
from typing import Mapping
import logging

from .errors import ConfigError, UnknownItemError
from .rules import Catalogue, PricingRule

class Checkout:
    """
    One checkout session: a fixed catalogue plus a tally of scanned units per SKU.

    Not thread-safe. A session belongs to a single scan/read stream; callers that
    need concurrency keep one session per worker.
    """
    def __init__(self, catalogue: Catalogue):
        if catalogue is None:
            raise ConfigError("checkout needs a catalogue")
        for sku, rule in catalogue.items():
            if not isinstance(rule, PricingRule):
                raise ConfigError(f"catalogue entry for {sku} is not a PricingRule")
        # own copy, the caller may still hold the dict behind a proxy
        self.catalogue = MappingProxyType(dict(catalogue))
        self._tally: dict[str, int] = {}

    @property
    def tally(self) -> Mapping[str, int]:
        return MappingProxyType(self._tally)

    @property
    def item_count(self) -> int:
        return sum(self._tally.values())

    def scan(self, sku: str) -> None:
        if sku not in self.catalogue:
            logging.info("rejected scan of unknown SKU %r", sku)
            raise UnknownItemError(sku)
        self._tally[sku] = self._tally.get(sku, 0) + 1
        logging.debug("scanned %s (count=%d)", sku, self._tally[sku])

    def _rule(self, sku: str) -> PricingRule:
        rule = self.catalogue.get(sku)
        if rule is None:
            raise UnknownItemError(sku)
        return rule

    def line_total(self, sku: str) -> int:
        """Price of everything scanned under `sku`, bulk offer applied."""
        return self._rule(sku).price_for(self._tally.get(sku, 0))

    def total_price(self) -> int:
        total = 0
        for sku, quantity in self._tally.items():
            total += self._rule(sku).price_for(quantity)
        return total

    def applied_promotions(self) -> dict[str, int]:
        applied = {}
        for sku, quantity in self._tally.items():
            bundles = self._rule(sku).bundles(quantity)
            if bundles:
                applied[sku] = bundles
        return applied

def create_session(catalogue: Catalogue) -> Checkout:
    return Checkout(catalogue)
