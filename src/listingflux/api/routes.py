"""
API routes for ListingFlux application.
"""
from typing import Any, Optional

from flask import Blueprint, current_app, jsonify, request
from pydantic import ValidationError

from ..acquisition import ListingAcquirer
from ..config import Config
from ..exceptions import AcquisitionError, InvalidIdentifierError, ListingNotFoundError
from ..logger import get_logger
from ..optimizer import ListingOptimizer
from ..persistence import HistoryStore, PersistenceError
from ..pipeline import ListingPipeline
from ..schemas import OptimizeRequest, ProcessRequest, SaveRequest

logger = get_logger(__name__)

EXTENSION_KEY = "listingflux"

# Create blueprint
api_bp = Blueprint('api', __name__, url_prefix='/api')


def _acquirer() -> ListingAcquirer:
    return current_app.extensions[EXTENSION_KEY]["acquirer"]


def _optimizer() -> ListingOptimizer:
    return current_app.extensions[EXTENSION_KEY]["optimizer"]


def _history() -> Optional[HistoryStore]:
    return current_app.extensions[EXTENSION_KEY]["history"]


def _acquisition_error_response(identifier: str, error: Exception) -> tuple[Any, int]:
    """Map acquisition errors to HTTP responses."""
    if isinstance(error, InvalidIdentifierError):
        return jsonify({'error': str(error)}), 400

    if isinstance(error, ListingNotFoundError):
        return jsonify({'error': 'Invalid ASIN or blocked'}), 404

    cause = getattr(error, 'cause', None)
    logger.error(f"Scraping failed for {identifier}: {error}", exc_info=cause)
    return jsonify({
        'error': 'Scraping failed (source unavailable or browser error). Try again later.'
    }), 500


@api_bp.route('/fetch/<identifier>', methods=['GET'])
def fetch_listing(identifier: str) -> tuple[Any, int]:
    """
    Scrape the listing for an identifier.

    Returns:
    {
        "success": true,
        "data": {"title": "...", "bullets": [...], "description": "..."}
    }
    """
    try:
        listing = _acquirer().acquire(identifier)
    except (InvalidIdentifierError, ListingNotFoundError, AcquisitionError) as e:
        return _acquisition_error_response(identifier, e)

    return jsonify({'success': True, 'data': listing.to_dict()}), 200


@api_bp.route('/optimize', methods=['POST'])
def optimize_listing() -> tuple[Any, int]:
    """
    Rewrite a scraped listing.

    Expected JSON:
    {
        "asin": "B08N5WRWNW",
        "data": {"title": "...", "bullets": [...], "description": "..."}
    }

    Returns:
    {
        "success": true,
        "optimized": {"title": "...", "bullets": [...], "description": "...", "keywords": [...]},
        "ai_used": "gpt-4o-mini" | "fallback"
    }
    """
    try:
        payload = OptimizeRequest.model_validate(request.get_json(silent=True) or {})
    except ValidationError:
        return jsonify({'error': 'Missing product data'}), 400

    logger.info(f"Optimizing listing for {payload.asin or '(no identifier)'}")

    result = _optimizer().optimize(payload.data.to_listing())

    return jsonify({'success': True, **result.to_dict()}), 200


@api_bp.route('/save', methods=['POST'])
def save_optimization() -> tuple[Any, int]:
    """
    Persist an original/optimized pair.

    Expected JSON:
    {
        "asin": "...",
        "original": {...},
        "optimized": {...},
        "ai_used": "..."
    }
    """
    history = _history()
    if history is None:
        return jsonify({
            'success': False,
            'error': 'Database is unavailable. Cannot save history.'
        }), 503

    try:
        payload = SaveRequest.model_validate(request.get_json(silent=True) or {})
    except ValidationError as e:
        return jsonify({'success': False, 'error': f'Invalid save request: {e.error_count()} error(s)'}), 400

    try:
        record = history.save(
            payload.asin,
            payload.original.to_listing(),
            payload.optimized.to_listing(),
            payload.ai_used,
        )
    except PersistenceError as e:
        logger.error(f"Failed to save history: {e}", exc_info=True)
        return jsonify({'error': 'Failed to save optimization record'}), 500

    return jsonify({'success': True, 'record': record.to_dict()}), 201


@api_bp.route('/history', methods=['GET'])
def list_history() -> tuple[Any, int]:
    """Most recent saved optimizations, newest first."""
    history = _history()
    if history is None:
        return jsonify({
            'warning': 'Database is unavailable. Showing no history.',
            'data': []
        }), 200

    try:
        records = history.list_recent(Config.HISTORY_LIMIT)
    except PersistenceError as e:
        logger.error(f"Failed to fetch history: {e}", exc_info=True)
        return jsonify({'error': 'Failed to fetch optimization history'}), 500

    return jsonify([record.to_dict() for record in records]), 200


@api_bp.route('/process/<identifier>', methods=['POST'])
def process_listing(identifier: str) -> tuple[Any, int]:
    """
    Scrape, rewrite and optionally save in one call.

    Expected JSON (optional):
    {
        "save": true
    }
    """
    body = request.get_json(silent=True)
    try:
        payload = ProcessRequest.model_validate({} if body is None else body)
    except ValidationError as e:
        return jsonify({'error': f'Invalid process request: {e.error_count()} error(s)'}), 400

    pipeline = ListingPipeline(_acquirer(), _optimizer(), _history())

    try:
        outcome = pipeline.run(identifier, save=payload.save)
    except (InvalidIdentifierError, ListingNotFoundError, AcquisitionError) as e:
        return _acquisition_error_response(identifier, e)

    return jsonify({'success': True, **outcome.to_dict()}), 200
