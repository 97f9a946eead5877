from pathlib import Path

# --- Paths (robust when using `flask run`) ---
BASE_DIR = Path(__file__).resolve().parent.parent


class DefaultConfig:
    """Defaults; override with FINTRACK_* environment variables or test_config."""

    DATA_FILE = str(BASE_DIR / "data" / "transactions.json")
    STATIC_DIR = str(BASE_DIR / "static")

    # False keeps error payloads on 200 responses for existing clients.
    STRICT_STATUS_CODES = False

    HOST = "0.0.0.0"
    PORT = 8181
    LOG_LEVEL = "INFO"
