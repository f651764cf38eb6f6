"""
API module for collector metrics and monitoring
"""

from .main_api import CollectorAPI
from .metrics_routes import create_metrics_routes
from .system_routes import create_system_routes

__all__ = ['CollectorAPI', 'create_metrics_routes', 'create_system_routes']
