"""Personal finance tracker: a Flask JSON API over a file-backed transaction ledger."""

from pathlib import Path

from flask import Flask, abort

from .api import STORE_EXTENSION, bp as api_bp
from .config import DefaultConfig
from .logging_setup import configure_logging, get_logger
from .persistence import JsonFilePersistence
from .store import TransactionStore

log = get_logger(__name__)


def create_app(test_config=None, store=None):
    """
    Build the application.
    Configuration layers, last one wins: DefaultConfig, FINTRACK_* environment
    variables, ``test_config``. A prebuilt ``store`` skips loading DATA_FILE.
    """
    app = Flask(__name__, static_folder=None)
    app.config.from_object(DefaultConfig)
    app.config.from_prefixed_env("FINTRACK")
    if test_config is not None:
        app.config.from_mapping(test_config)
    app.json.sort_keys = False

    configure_logging(app.config["LOG_LEVEL"])

    if store is None:
        store = TransactionStore(JsonFilePersistence(app.config["DATA_FILE"]))
    app.extensions[STORE_EXTENSION] = store
    app.register_blueprint(api_bp)

    # --- Static UI bundle at the root path ---
    static_dir = Path(app.config["STATIC_DIR"])
    app.static_folder = str(static_dir)
    app.add_url_rule("/<path:filename>", endpoint="static", view_func=app.send_static_file)

    @app.get("/")
    def index():
        if not (static_dir / "index.html").is_file():
            abort(404)
        return app.send_static_file("index.html")

    log.info("Serving %d transactions from %s", len(store), app.config["DATA_FILE"])
    return app
