"""SendBird API Server startup script.

Reads HOST/PORT from the environment (or .env) and serves app.main:app
with uvicorn. Exits with status 1 if the Sendbird credentials are missing.
"""

from __future__ import annotations

import logging
import sys

logger = logging.getLogger("run")


def main() -> None:
    """Start the FastAPI app with uvicorn."""

    import uvicorn
    from pydantic import ValidationError

    # --- credentials are validated here, before the server binds a port ---
    try:
        from app.config import get_settings

        settings = get_settings()
    except ValidationError as e:
        logging.basicConfig(level=logging.INFO)
        logger.error(f"Failed to initialize SendBird client: {e}")
        sys.exit(1)

    print(f"SendBird API Server is running on port {settings.PORT}")
    print(f"Health check: http://localhost:{settings.PORT}/health")
    print(f"Swagger Documentation: http://localhost:{settings.PORT}/api-docs")
    print("\nAvailable endpoints:")
    print("  GET  /health")
    print("  GET  /api/users/:userId/token")
    print("  POST /api/users")
    print("  GET  /api-docs")

    uvicorn.run(
        "app.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )


if __name__ == "__main__":
    main()
