"""
Main entry point for the ListingFlux web application.

Run this file to start the Flask development server.
"""
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent / "src"))

from listingflux.api import create_app
from listingflux.config import Config
from listingflux.logger import get_logger

logger = get_logger(__name__)


def main():
    """Main function to run the Flask app."""
    errors = Config.validate()
    if errors:
        logger.warning("Configuration warnings:")
        for error in errors:
            logger.warning(f"  - {error}")
        logger.warning("App will start but some features may not work")

    app = create_app()

    logger.info(f"Backend running at http://{Config.FLASK_HOST}:{Config.FLASK_PORT}")
    logger.info(f"Debug mode: {Config.FLASK_DEBUG}")

    app.run(
        host=Config.FLASK_HOST,
        port=Config.FLASK_PORT,
        debug=Config.FLASK_DEBUG
    )


if __name__ == "__main__":
    main()
