"""
Run the service with uvicorn on the configured host and port.

Usage:
    python -m recordstore
    BACKEND_PORT=8080 DATA_FILE=/var/lib/records.json python -m recordstore
"""

import uvicorn

from recordstore.config import settings


def main() -> None:
    uvicorn.run(
        "recordstore.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
