#!/usr/bin/env python3
# backend/run.py
"""
Development server runner.

Loads settings from the environment (and ``.env``) like the application
does, then serves ``taskmarket.main:app`` with auto-reload.
"""
import os
from pathlib import Path
import sys

backend_dir = Path(__file__).parent
sys.path.insert(0, str(backend_dir))
os.chdir(backend_dir)

import uvicorn

from taskmarket.core.config import settings

if __name__ == "__main__":
    print(f"Starting TaskMarket API ({settings.environment})")
    print(f"API prefix: {settings.api_prefix}")
    print("API Docs: http://localhost:8000/docs")

    uvicorn.run(
        "taskmarket.main:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
        reload=settings.environment == "development",
        log_level=settings.log_level.lower(),
    )
