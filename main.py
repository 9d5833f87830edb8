#!/usr/bin/env python3
"""Main entry point for the bounty tracker API server.

Run with: python main.py
Or with: uvicorn main:app --reload
"""

import logging
import os

import uvicorn

from bounty_tracker.api import create_app

logging.basicConfig(
    level=os.environ.get("LOG_LEVEL", "INFO"),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

# The store is opened at startup and closed at shutdown by the app lifespan
app = create_app()

if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=int(os.environ.get("PORT", "8080")),
        reload=True,
    )
