"""Run the API with uvicorn: ``python -m webgis``."""

import uvicorn

from webgis import config


def main() -> None:
    uvicorn.run(
        "webgis.main:app",
        host="0.0.0.0",
        port=config.PORT,
        log_level="debug" if config.DEBUG else "info",
    )


if __name__ == "__main__":
    main()
