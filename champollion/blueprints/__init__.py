"""
Champollion - Flask Blueprints
Route organization for the translation API
"""
from champollion.blueprints.translate import translate_bp, init_translate_blueprint

__all__ = ['translate_bp', 'init_translate_blueprint']
