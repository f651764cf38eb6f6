"""
System health and monitoring API routes
"""

from fastapi import APIRouter
from pydantic import BaseModel
from typing import List, Optional
from datetime import datetime, timezone
import logging

logger = logging.getLogger(__name__)

# Response models
class ErrorsResponse(BaseModel):
    cycle_finished: Optional[datetime]
    config_error: Optional[str]
    errors: List[str]

def create_system_routes(metrics_store, poller, config):
    """Create system monitoring routes"""
    router = APIRouter(prefix="/api/system", tags=["system"])
    
    @router.get("/health")
    async def system_health():
        """Collector health check"""
        status = metrics_store.get_status()
        
        if status['cycle_count'] == 0:
            health = "starting"
        elif status['last_config_error']:
            health = "misconfigured"
        elif status['last_cycle_errors'] > 0:
            health = "degraded"
        else:
            health = "healthy"
        
        return {
            "status": health,
            "bridges": poller.get_bridge_urls(),
            "poll_interval_seconds": config['polling']['interval_seconds'],
            "timeout_seconds": poller.timeout,
            "collector": status,
            "timestamp": datetime.now(timezone.utc)
        }
    
    @router.get("/errors", response_model=ErrorsResponse)
    async def get_errors():
        """Aggregated errors of the latest cycle"""
        report = metrics_store.latest
        if report is None:
            return ErrorsResponse(cycle_finished=None, config_error=None, errors=[])
        
        return ErrorsResponse(
            cycle_finished=report.finished,
            config_error=report.config_error,
            errors=report.errors
        )
    
    return router
