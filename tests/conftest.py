# Ensure project root (parent of tests) is on sys.path so `import checkout...` works.
import json
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
root_str = str(ROOT)
if root_str not in sys.path:
    sys.path.insert(0, root_str)

from checkout.rules import build_catalogue

RULES = {
    "A": {"unit_price": 50, "bulk": {"quantity": 3, "price": 130}},
    "B": {"unit_price": 30, "bulk": {"quantity": 2, "price": 45}},
    "C": {"unit_price": 20},
    "D": {"unit_price": 15},
}

@pytest.fixture()
def catalogue():
    return build_catalogue(RULES)

@pytest.fixture()
def catalogue_file(tmp_path: Path) -> Path:
    path = tmp_path / "catalogue.json"
    items = [{"sku": sku, **rule} for sku, rule in RULES.items()]
    path.write_text(json.dumps({"items": items}), encoding="utf-8")
    return path

@pytest.fixture(autouse=True)
def _clean_env(monkeypatch, tmp_path):
    # .env is looked up from the working directory, so tmp_path keeps a
    # developer's .env out; set-then-delete makes monkeypatch undo any
    # value a test's own .env loads
    for var in ["CHECKOUT_CATALOGUE", "CHECKOUT_SCAN_POLICY", "CHECKOUT_LOG_LEVEL", "CHECKOUT_HOST", "CHECKOUT_PORT"]:
        monkeypatch.setenv(var, "")
        monkeypatch.delenv(var)
    monkeypatch.chdir(tmp_path)
