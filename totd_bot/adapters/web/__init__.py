"""Web adapter: FastAPI interactions endpoint."""
