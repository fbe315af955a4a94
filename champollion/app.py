"""
Champollion - Flask API Server

HTTP front end for the collocation translator. Loads the sentence index
built by scripts/build_inverted_index.py (or `champollion --index`) and
serves translation requests against it.

See champollion/blueprints/translate.py for the endpoints.
"""
# =============================================================================
# IMPORTS
# =============================================================================
from flask import Flask, jsonify
from flask_cors import CORS

from champollion.base import IndexUnavailable
from champollion.blueprints import translate_bp, init_translate_blueprint
from champollion.config import AppConfig
from champollion.inverted_index import SqliteCorpusIndex, is_index_available
from champollion.logging_config import setup_logging, get_logger

API_PREFIX = "/api"


def create_app(app_config=None, index=None):
    """
    Build the Flask application.

    Args:
        app_config: AppConfig; loaded from the environment when omitted
        index: CorpusIndex to serve; opened from app_config.index.index_dir
            when omitted and the index files exist
    """
    app_config = app_config or AppConfig.load()
    setup_logging(verbose=app_config.debug_mode)
    app_logger = get_logger('app')

    if index is None:
        if is_index_available(app_config.index.index_dir):
            try:
                index = SqliteCorpusIndex(app_config.index.index_dir, app_config.performance.max_cache_size)
                app_logger.info(f"Loaded corpus index from {app_config.index.index_dir}")
            except IndexUnavailable as e:
                app_logger.error(f"Could not open corpus index: {e}")
        else:
            app_logger.warning(
                f"No corpus index at {app_config.index.index_dir}; translation requests will fail until it is built"
            )

    app = Flask(__name__)
    CORS(app)

    init_translate_blueprint(index, app_config)
    app.register_blueprint(translate_bp, url_prefix=API_PREFIX)

    @app.route('/health')
    def health():
        """Basic health check endpoint"""
        return jsonify({"status": "ok", "index_loaded": index is not None})

    @app.errorhandler(404)
    def page_not_found(e):
        return jsonify({'error': 'Not found'}), 404

    return app
