"""Run the API with uvicorn: python -m driverlog"""

import uvicorn

from driverlog.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "driverlog.main:app",
        host=settings.host,
        port=settings.port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
