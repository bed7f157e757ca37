import os
import sys
from pathlib import Path

from dotenv import dotenv_values

REQUIRED_VARS = ["DB_HOST", "DB_PORT", "DB_USER", "DB_PASSWORD", "DB_NAME", "SERVER_PORT"]
OPTIONAL_VARS = [
    "APP_NAME", "APP_ENV", "LOG_LEVEL", "CORS_ORIGINS",
    "DB_POOL_SIZE", "DB_MAX_OVERFLOW", "DB_POOL_TIMEOUT", "DB_POOL_RECYCLE",
    "DB_CONNECT_TIMEOUT", "DB_STATEMENT_TIMEOUT_MS", "DB_AUTO_CREATE",
]


def collect_env(env_file: Path) -> dict:
    """Merge .env values with the process environment; the environment wins."""
    values = {k: v for k, v in dotenv_values(env_file).items() if v is not None} if env_file.exists() else {}
    values.update({k: v for k, v in os.environ.items() if k in REQUIRED_VARS + OPTIONAL_VARS})
    return values


def verify(env_file: Path) -> int:
    values = collect_env(env_file)
    missing = [name for name in REQUIRED_VARS if not values.get(name)]
    defaulted = [name for name in OPTIONAL_VARS if name not in values]

    print("=== ENV VAR VERIFICATION ===")
    print(f"Source: environment + {env_file if env_file.exists() else 'no .env file'}")
    print("")
    if missing:
        print(f"MISSING REQUIRED ({len(missing)}):")
        for v in missing:
            print(f"  - {v}")
    else:
        print("All required vars present.")
    print("")
    if defaulted:
        print(f"USING DEFAULTS ({len(defaulted)}):")
        for v in defaulted:
            print(f"  - {v}")
    return 1 if missing else 0


if __name__ == "__main__":
    root = Path(__file__).resolve().parents[1]
    sys.exit(verify(root / ".env"))
