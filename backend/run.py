#!/usr/bin/env python3
# backend/run.py
"""
Development server runner.

Reads backend/.env through luz.core.config like the app itself does.
"""
import os
from pathlib import Path
import sys

backend_dir = Path(__file__).parent
sys.path.insert(0, str(backend_dir))
os.chdir(backend_dir)

import uvicorn

from luz.core.config import settings

if __name__ == "__main__":
    print(f"Starting Luz API ({settings.environment}) at http://localhost:8000")
    print("API Docs: http://localhost:8000/docs")

    uvicorn.run(
        "luz.main:app",
        host="0.0.0.0",
        port=int(os.getenv("PORT", "8000")),
        reload=settings.environment == "development",
        log_level=settings.log_level.lower(),
    )
