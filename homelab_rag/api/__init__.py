"""HTTP shell: FastAPI application, routers and dependencies."""
