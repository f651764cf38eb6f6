"""
In-memory store of the most recent cycle report
"""

import logging
from datetime import datetime
from typing import Optional

from .models import CycleReport

logger = logging.getLogger(__name__)

class MetricsStore:
    """Keeps the latest report plus running counters; nothing is persisted"""
    
    def __init__(self):
        self.latest: Optional[CycleReport] = None
        self.cycle_count = 0
        self.failed_cycle_count = 0
        self.error_count = 0
        self.started_at = datetime.now().astimezone()
    
    def update(self, report: CycleReport):
        self.latest = report
        self.cycle_count += 1
        self.error_count += len(report.errors)
        if not report.succeeded:
            self.failed_cycle_count += 1
    
    def get_status(self) -> dict:
        """Store status for the health endpoint"""
        latest = self.latest
        return {
            "cycle_count": self.cycle_count,
            "failed_cycle_count": self.failed_cycle_count,
            "error_count": self.error_count,
            "started_at": self.started_at.isoformat(),
            "last_cycle_started": latest.started.isoformat() if latest else None,
            "last_cycle_finished": latest.finished.isoformat() if latest else None,
            "last_cycle_duration_seconds": round(latest.duration_seconds, 3) if latest else None,
            "last_cycle_records": len(latest.records) if latest else 0,
            "last_cycle_errors": len(latest.errors) if latest else 0,
            "last_config_error": latest.config_error if latest else None,
        }
