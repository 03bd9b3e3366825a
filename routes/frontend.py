"""
Frontend Routes Module
Serves the single page map frontend
"""

from pathlib import Path

from flask import Blueprint, current_app, send_from_directory

frontend_bp = Blueprint('frontend', __name__)


@frontend_bp.route('/', defaults={'path': ''})
@frontend_bp.route('/<path:path>')
def index(path):
    """
    Static assets, falling back to index.html for client-side routes
    """
    static_dir = Path(current_app.config['STATIC_DIR'])

    if path and (static_dir / path).is_file():
        return send_from_directory(static_dir, path)

    return send_from_directory(static_dir, 'index.html')
