from __future__ import annotations
from contextlib import asynccontextmanager
from fastapi import FastAPI, HTTPException
from pydantic import BaseModel
from typing import Optional
import logging

from checkout.config import CheckoutConfig
from checkout.errors import ConfigError, UnknownItemError
from checkout.rules import build_catalogue, dump_catalogue, load_catalogue
from checkout.runner import ScanPolicy, run_checkout

class CheckoutIn(BaseModel):
    items: list[str] = []
    policy: Optional[str] = None

def startup(app: FastAPI):
    cfg = CheckoutConfig.from_env().resolve()
    logging.basicConfig(level=cfg.log_level)
    app.state.cfg = cfg
    if cfg.catalogue_path is None:
        logging.warning("CHECKOUT_CATALOGUE not set. Every scan will be rejected.")
        app.state.catalogue = build_catalogue({})
    else:
        app.state.catalogue = load_catalogue(cfg.catalogue_path)

@asynccontextmanager
async def lifespan(app: FastAPI):
    startup(app)
    yield

app = FastAPI(title="Supermarket Checkout", version="0.1.0", lifespan=lifespan)

@app.get("/catalogue")
def catalogue():
    return dump_catalogue(app.state.catalogue)

@app.post("/checkout")
def checkout(inp: CheckoutIn):
    # one session per request, nothing is shared between requests
    try:
        policy = ScanPolicy.parse(inp.policy) if inp.policy else app.state.cfg.scan_policy
        run = run_checkout(app.state.catalogue, inp.items, policy)
        result = run.summary().to_dict()
    except ConfigError as e:
        raise HTTPException(400, detail=str(e))
    except UnknownItemError as e:
        raise HTTPException(404, detail=str(e))
    result["rejected"] = run.rejected
    return result

@app.get("/health")
def health():
    return {"ok": True}
