from __future__ import annotations
from pathlib import Path
from types import MappingProxyType
from typing import Any, Iterable, Mapping, Optional, Union
import json
import logging

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from .errors import ConfigError

class _Rule(BaseModel):
    """Immutable pricing value; invalid input and mutation both raise ConfigError."""
    model_config = ConfigDict(frozen=True)

    @model_validator(mode="wrap")
    @classmethod
    def _as_config_error(cls, data: Any, handler):
        try:
            return handler(data)
        except ValidationError as e:
            raise ConfigError(f"invalid {cls.__name__}: {e}") from e

    def __setattr__(self, name: str, value: Any) -> None:
        raise ConfigError(f"{type(self).__name__} is read-only")

class BulkOffer(_Rule):
    """Buy `quantity` units for a total of `price`."""
    quantity: int = Field(..., ge=1, description="Units that make up one bundle.")
    price: int = Field(..., ge=0, description="Price of one whole bundle, smallest currency unit.")

    def savings(self, unit_price: int) -> int:
        # may be negative when the offer is worse than the unit price
        return self.quantity * unit_price - self.price

class PricingRule(_Rule):
    unit_price: int = Field(..., ge=0, description="Price of a single unit, smallest currency unit.")
    bulk: Optional[BulkOffer] = Field(None, description="Optional buy-N-for-P offer.")

    @field_validator("bulk", mode="before")
    @classmethod
    def _zero_quantity_means_no_offer(cls, value: Any) -> Any:
        # only an explicit 0/None quantity; a missing key is a malformed offer
        if isinstance(value, Mapping) and "quantity" in value and value["quantity"] in (0, None):
            return None
        return value

    def bundles(self, quantity: int) -> int:
        """Number of whole bundles `quantity` units qualify for (0 without an offer)."""
        if self.bulk is None or quantity < self.bulk.quantity:
            return 0
        return quantity // self.bulk.quantity

    def price_for(self, quantity: int) -> int:
        bundles = self.bundles(quantity)
        if not bundles:
            return quantity * self.unit_price
        remainder = quantity % self.bulk.quantity
        return bundles * self.bulk.price + remainder * self.unit_price

Catalogue = Mapping[str, PricingRule]

RuleInput = Union[PricingRule, Mapping[str, Any]]

def _to_rule(sku: str, raw: RuleInput) -> PricingRule:
    if isinstance(raw, PricingRule):
        return raw
    try:
        return PricingRule.model_validate(raw)
    except ConfigError as e:
        raise ConfigError(f"invalid pricing rule for {sku}: {e}") from e

def build_catalogue(entries: Union[Mapping[str, RuleInput], Iterable[Mapping[str, Any]]]) -> Catalogue:
    """
    Validate pricing rules and freeze them into a read-only catalogue.

    Accepts either a mapping of sku -> rule (a PricingRule or its dict form) or
    an iterable of dicts that each carry a "sku" key next to the rule fields.
    """
    if entries is None:
        raise ConfigError("catalogue is required")
    rules: dict[str, PricingRule] = {}
    if isinstance(entries, Mapping):
        for sku, raw in entries.items():
            rules[str(sku)] = _to_rule(str(sku), raw)
    else:
        for raw in entries:
            if not isinstance(raw, Mapping) or not raw.get("sku"):
                raise ConfigError(f"catalogue entry without a sku: {raw!r}")
            sku = str(raw["sku"])
            if sku in rules:
                raise ConfigError(f"duplicate SKU in catalogue: {sku}")
            fields = {k: v for k, v in raw.items() if k != "sku"}
            rules[sku] = _to_rule(sku, fields)
    logging.debug("catalogue built with %d rules", len(rules))
    return MappingProxyType(rules)

def load_catalogue(path: Union[str, Path]) -> Catalogue:
    """
    Load a catalogue from a JSON file.

    Raises:
        ConfigError: the file is missing, not JSON, or holds invalid rules
    """
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise ConfigError(f"catalogue file '{path}' not found") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid JSON in catalogue file '{path}'") from e

    if isinstance(data, Mapping) and "items" in data:
        return build_catalogue(data["items"])
    if isinstance(data, Mapping):
        return build_catalogue(data)
    raise ConfigError(f"catalogue file '{path}' must hold an object")

def dump_catalogue(catalogue: Catalogue) -> dict:
    return {"items": [{"sku": sku, **rule.model_dump(exclude_none=True)} for sku, rule in catalogue.items()]}
