"""
Main FastAPI application setup
Local HTTP API exposing the latest poll cycle's metrics and collector health
"""

from fastapi import FastAPI
from typing import Dict
import logging

from config_loader import DESCRIPTION
from .metrics_routes import create_metrics_routes
from .system_routes import create_system_routes

logger = logging.getLogger(__name__)

class CollectorAPI:
    """Local HTTP API for collected bridge metrics"""
    
    def __init__(self, metrics_store, poller, config: Dict):
        self.store = metrics_store
        self.poller = poller
        self.config = config
        self.app = FastAPI(
            title="Hue Bridge Collector",
            description=DESCRIPTION,
            version="1.0.0"
        )
        self._setup_routes()
    
    def _setup_routes(self):
        """Setup FastAPI routes using route factories"""
        metrics_router = create_metrics_routes(self.store)
        system_router = create_system_routes(self.store, self.poller, self.config)
        
        self.app.include_router(metrics_router)
        self.app.include_router(system_router)
