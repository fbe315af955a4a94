"""
Champollion - Translate Blueprint

HTTP access to the collocation translator.

Endpoints:
    - GET|POST /translate: translate one collocation (co, tf, td, containment)
    - GET /index/stats: sentence and term counts of the loaded index

Error Responses:
    - 400: invalid thresholds or collocation
    - 503: corpus index missing or failing
    - 504: translation exceeded its deadline
"""

# =============================================================================
# IMPORTS
# =============================================================================
from flask import Blueprint, jsonify, request

from champollion.base import (
    IndexUnavailable, InvalidConfiguration, Side, TranslationRequest, TranslationTimeout
)
from champollion.closed_class import ClosedClassFilter
from champollion.logging_config import get_logger
from champollion.translator import translate_collocation

logger = get_logger('translate')


# =============================================================================
# BLUEPRINT SETUP
# =============================================================================
translate_bp = Blueprint('translate', __name__)

# Module-level references to shared components (injected via init_translate_blueprint)
_index = None          # CorpusIndex: sentence lookups for both corpus sides
_app_config = None     # AppConfig: thresholds, closed-class list, performance
_closed_class = None   # ClosedClassFilter built once from _app_config


def init_translate_blueprint(index, app_config):
    """
    Initialize blueprint with required dependencies.

    Called from app.py during startup. index may be None when no index has
    been built yet; translation requests then answer 503.
    """
    global _index, _app_config, _closed_class
    _index = index
    _app_config = app_config
    _closed_class = ClosedClassFilter.from_config(app_config.closed_class)


# =============================================================================
# ERROR HANDLERS
# =============================================================================

@translate_bp.errorhandler(InvalidConfiguration)
def handle_invalid_configuration(e):
    return jsonify({'error': str(e)}), 400


@translate_bp.errorhandler(IndexUnavailable)
def handle_index_unavailable(e):
    logger.error(f"Index unavailable: {e}")
    return jsonify({'error': f'Index unavailable: {e}'}), 503


@translate_bp.errorhandler(TranslationTimeout)
def handle_timeout(e):
    logger.warning(str(e))
    return jsonify({'error': str(e)}), 504


# =============================================================================
# ROUTES
# =============================================================================

@translate_bp.route('/translate', methods=['GET', 'POST'])
def translate():
    """Translate a collocation and report how often it occurs in the source corpus"""
    if request.method == 'POST':
        data = request.get_json(silent=True) or {}
    else:
        data = request.args.to_dict()

    translation_request = TranslationRequest.from_dict(data, defaults=_app_config.get_translation_settings())

    if _index is None:
        raise IndexUnavailable('No corpus index loaded')

    result = translate_collocation(
        translation_request.collocation,
        _index,
        tf=translation_request.tf,
        td=translation_request.td,
        config=_app_config,
        closed_class=_closed_class,
        containment=translation_request.containment
    )
    return jsonify(result.to_dict())


@translate_bp.route('/index/stats')
def index_stats():
    """Get statistics about the loaded index"""
    if _index is None:
        raise IndexUnavailable('No corpus index loaded')

    stats = {}
    for side in Side:
        if hasattr(_index, 'get_index_stats'):
            stats[side.value] = _index.get_index_stats(side)
        else:
            stats[side.value] = {'sentences': _index.sentence_count(side)}
    return jsonify(stats)
