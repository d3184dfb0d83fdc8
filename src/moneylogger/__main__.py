"""Run the API with uvicorn: ``python -m moneylogger``."""

import uvicorn

from moneylogger.config import settings


def main() -> None:
    uvicorn.run(
        "moneylogger.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_config=None,
    )


if __name__ == "__main__":
    main()
