"""
Resource Export — Application Runner.

Usage:
    python run.py              → FastAPI (port 8000)
    python run.py 9000         → FastAPI on a custom port
"""

import sys

import uvicorn

from resource_export.core.config import settings


def run_fastapi(port: int = 8000) -> None:
    """Start the export API."""
    print(f"🚀 FastAPI → http://localhost:{port}")
    if settings.DEBUG:
        print(f"📄 Docs    → http://localhost:{port}/api/docs")
    uvicorn.run(
        "resource_export.main:app",
        host="0.0.0.0",
        port=port,
        reload=settings.DEBUG,
    )


if __name__ == "__main__":
    run_fastapi(int(sys.argv[1]) if len(sys.argv) > 1 else 8000)
