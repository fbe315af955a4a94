"""
Champollion - Main entry point
Starts the translation API server
"""
import os
import sys

from champollion.app import create_app
from champollion.logging_config import get_logger

logger = get_logger('main')

if __name__ == '__main__':
    port = int(os.environ.get('PORT', '5000'))
    debug_mode = os.environ.get('FLASK_DEBUG', 'false').lower() == 'true'

    app = create_app()

    logger.info(f"Starting Flask server on 0.0.0.0:{port}...")
    sys.stdout.flush()

    app.run(host='0.0.0.0', port=port, debug=debug_mode, threaded=True)
