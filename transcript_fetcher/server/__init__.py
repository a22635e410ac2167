"""HTTP API package: FastAPI app, pydantic schemas, error mapping."""
