"""Run the FastAPI development server."""
from __future__ import annotations

import uvicorn

from kipkuliah.core.config import get_settings


def main() -> None:
    """Launch uvicorn with settings-aware defaults."""
    settings = get_settings()
    uvicorn.run(
        "kipkuliah.app:app",
        host=settings.host,
        port=settings.port,
        reload=settings.app_env == "dev",
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
