"""Run the API with uvicorn: ``python -m contacts_api`` or ``contacts-api``."""

import uvicorn

from contacts_api.config import settings


def main() -> None:
    uvicorn.run(
        "contacts_api.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
