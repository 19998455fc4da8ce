"""
Geodesic Distance Service
=========================
Entry point. Run with: uvicorn main:app --reload
"""

import uvicorn

from geodist.api.app import create_app
from geodist.config import settings

app = create_app()

if __name__ == "__main__":
    uvicorn.run("main:app", host=settings.app_host, port=settings.app_port, reload=True)
