from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Union
import logging

from .engine import Checkout
from .errors import ConfigError, UnknownItemError
from .rules import Catalogue
from .summary import CheckoutSummary, summarize

class ScanPolicy(str, Enum):
    """What a run does when a scanned SKU is not in the catalogue."""
    SKIP = "skip"    # report it and keep scanning
    ABORT = "abort"  # stop the run, no total

    @classmethod
    def parse(cls, value: Union[str, "ScanPolicy"]) -> "ScanPolicy":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ConfigError(f"unknown scan policy: {value!r} (expected skip or abort)") from None

@dataclass
class CheckoutRun:
    session: Checkout
    rejected: list[str] = field(default_factory=list)

    def summary(self) -> CheckoutSummary:
        return summarize(self.session)

def run_checkout(catalogue: Catalogue, skus: Iterable[str], policy: Union[str, ScanPolicy] = ScanPolicy.SKIP) -> CheckoutRun:
    """
    Scan every SKU in order against a fresh session.

    With ScanPolicy.ABORT the first unknown SKU propagates as UnknownItemError;
    with ScanPolicy.SKIP it is collected in `rejected` and scanning continues.
    """
    policy = ScanPolicy.parse(policy)
    run = CheckoutRun(session=Checkout(catalogue))
    for sku in skus:
        try:
            run.session.scan(sku)
        except UnknownItemError as e:
            if policy is ScanPolicy.ABORT:
                logging.warning("aborting checkout: %s", e)
                raise
            run.rejected.append(e.sku)
    return run
