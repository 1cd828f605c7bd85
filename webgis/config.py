"""Runtime configuration read from the environment, with a .env fallback."""

import os
from os import getenv
from pathlib import Path
from typing import List

PROJECT_ROOT = Path(__file__).resolve().parent.parent

ENV_FILE_PATHS = [
    Path("/opt/webgis/.env"),
    PROJECT_ROOT / ".env",
]


def load_env_file_fallback() -> bool:
    """Fill unset environment variables from the first readable .env file."""
    # Runs before logging is configured, hence print.
    for env_file in ENV_FILE_PATHS:
        if env_file.exists() and env_file.is_file():
            try:
                loaded_count = 0
                with open(env_file, "r") as f:
                    for line in f:
                        line = line.strip()
                        if not line or line.startswith("#") or "=" not in line:
                            continue
                        key, value = line.split("=", 1)
                        key = key.strip()
                        value = value.strip()
                        if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
                            value = value[1:-1]
                        if key and value and key not in os.environ:
                            os.environ[key] = value
                            loaded_count += 1
                if loaded_count > 0:
                    print(f"[WebGIS] Loaded {loaded_count} environment variables from {env_file}")
                return True
            except OSError as e:
                print(f"[WebGIS] Warning: Could not load .env file from {env_file}: {e}")
    return False


load_env_file_fallback()


def _csv(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


DEBUG = getenv("APP_DEBUG", "false").lower() == "true"
DATA_DIR = Path(getenv("DATA_DIR", str(PROJECT_ROOT / "data")))
CORS_ORIGINS = _csv(getenv("CORS_ORIGINS", "http://localhost:3000"))
BCRYPT_ROUNDS = int(getenv("BCRYPT_ROUNDS", "12"))
NOMINATIM_URL = getenv("NOMINATIM_URL", "https://nominatim.openstreetmap.org/reverse")
GEOCODER_USER_AGENT = getenv("GEOCODER_USER_AGENT", "webgis-demo/1.0")
GEOCODER_TIMEOUT = float(getenv("GEOCODER_TIMEOUT", "10"))
PORT = int(getenv("PORT", "4000"))
