"""HTTP layer: FastAPI routers and application wiring."""
