from __future__ import annotations


class CheckoutError(Exception):
    """Base class for everything the checkout package raises."""


class ConfigError(CheckoutError):
    """Malformed catalogue or configuration, rejected before any scan happens."""


class UnknownItemError(CheckoutError):
    def __init__(self, sku: str):
        super().__init__(f"invalid SKU: {sku}")
        self.sku = sku
