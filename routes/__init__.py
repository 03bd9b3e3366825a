"""
Routes package
Flask blueprint routes
"""

from .api import api_bp, health_bp
from .frontend import frontend_bp

__all__ = ['api_bp', 'health_bp', 'frontend_bp']
