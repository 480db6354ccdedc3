import uvicorn

from checkout.config import CheckoutConfig

if __name__ == "__main__":
    cfg = CheckoutConfig.from_env()
    print(f"Checkout catalogue: {cfg.catalogue_path or '(none)'}")
    uvicorn.run("server.api:app", host=cfg.host, port=cfg.port, reload=False)
