"""Run the PromptForge API with uvicorn."""

import sys

import uvicorn

from promptforge.utils.config import get_settings


if __name__ == "__main__":
    settings = get_settings()
    try:
        uvicorn.run(
            "promptforge.main:app",
            host=settings.api_host,
            port=settings.api_port,
            reload=settings.debug,
            log_level=settings.log_level.lower(),
        )
    except KeyboardInterrupt:
        print("\nServer stopped")
        sys.exit(0)
