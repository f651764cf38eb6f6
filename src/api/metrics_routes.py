"""
Metric API routes - latest cycle records as JSON or line protocol
"""

from fastapi import APIRouter, HTTPException
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel
from typing import Any, Dict, List, Optional
from datetime import datetime
import logging

logger = logging.getLogger(__name__)

# Response models
class MetricResponse(BaseModel):
    measurement: str
    tags: Dict[str, str]
    fields: Dict[str, Any]
    timestamp: datetime

class MetricsResponse(BaseModel):
    cycle_finished: datetime
    count: int
    metrics: List[MetricResponse]

def _latest_report(metrics_store):
    report = metrics_store.latest
    if report is None:
        raise HTTPException(status_code=503, detail="No poll cycle completed yet")
    return report

def create_metrics_routes(metrics_store):
    """Create metric routes"""
    router = APIRouter(tags=["metrics"])
    
    @router.get("/api/metrics", response_model=MetricsResponse)
    async def get_metrics(measurement: Optional[str] = None):
        """Records of the latest cycle, optionally filtered by measurement"""
        report = _latest_report(metrics_store)
        records = report.records
        if measurement:
            records = [record for record in records if record.measurement == measurement]
        
        return MetricsResponse(
            cycle_finished=report.finished,
            count=len(records),
            metrics=[
                MetricResponse(
                    measurement=record.measurement,
                    tags=record.tags,
                    fields=record.fields,
                    timestamp=record.timestamp
                )
                for record in records
            ]
        )
    
    @router.get("/metrics", response_class=PlainTextResponse)
    async def get_line_protocol():
        """Records of the latest cycle in InfluxDB line protocol"""
        report = _latest_report(metrics_store)
        lines = [record.to_line_protocol() for record in report.records]
        return PlainTextResponse("\n".join(lines) + ("\n" if lines else ""))
    
    return router
