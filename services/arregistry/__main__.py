"""Run the registry server: python -m arregistry"""

import uvicorn

from arregistry.config import settings


def main() -> None:
    uvicorn.run(
        "arregistry.api.app:app",
        host=settings.host,
        port=settings.port,
        log_config=None,
        proxy_headers=True,
    )


if __name__ == "__main__":
    main()
