"""FastAPI application entry point."""

import os

from src.application import create_app

app = create_app()

__all__ = ["app"]


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=int(os.getenv("PORT", "8000")))
