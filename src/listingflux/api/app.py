"""
Flask application factory for ListingFlux.
"""
from typing import Optional

from flask import Flask
from flask_cors import CORS

from ..acquisition import ListingAcquirer, get_acquirer
from ..config import Config
from ..logger import get_logger
from ..optimizer import ListingOptimizer
from ..persistence import HistoryStore, connect_history
from .routes import EXTENSION_KEY, api_bp

logger = get_logger(__name__)


def create_app(
    *,
    acquirer: Optional[ListingAcquirer] = None,
    optimizer: Optional[ListingOptimizer] = None,
    history: Optional[HistoryStore] = None,
    connect_db: bool = True,
) -> Flask:
    """
    Create and configure Flask application.

    Args:
        acquirer: Listing acquirer (defaults to ACQUISITION_STRATEGY)
        optimizer: Listing optimizer (defaults to OPTIMIZER_MODEL)
        history: History store; when None and ``connect_db`` is set, one is
            created from DATABASE_URL if reachable
        connect_db: Try DATABASE_URL when no store is given

    Returns:
        Configured Flask app instance
    """
    app = Flask(__name__)

    app.config['SECRET_KEY'] = Config.SECRET_KEY
    app.config['ENV'] = Config.FLASK_ENV

    CORS(app, origins=Config.get_cors_origins())

    if history is None and connect_db:
        history = connect_history(Config.DATABASE_URL)

    app.extensions[EXTENSION_KEY] = {
        "acquirer": acquirer or get_acquirer(),
        "optimizer": optimizer or ListingOptimizer(),
        "history": history,
    }

    app.register_blueprint(api_bp)

    @app.route('/health')
    def health():
        """Health check endpoint."""
        return {
            'status': 'healthy',
            'version': '1.0.0',
            'history_enabled': app.extensions[EXTENSION_KEY]["history"] is not None,
        }

    logger.info("Flask app created")
    logger.info(f"Configuration: {Config.get_summary()}")

    errors = Config.validate()
    if errors:
        logger.warning(f"Configuration warnings: {errors}")

    if history is None:
        logger.warning("History/Save feature is offline (no database)")

    return app
