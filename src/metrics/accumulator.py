"""
Metric accumulator - collects the records and non-fatal errors of one poll cycle
"""

import logging
from typing import Any, Dict, List, Optional

from .models import MetricRecord

logger = logging.getLogger(__name__)

class MetricAccumulator:
    """Sink for counter records and aggregated errors"""
    
    def __init__(self):
        self.records: List[MetricRecord] = []
        self.errors: List[Exception] = []
    
    def add_counter(self, measurement: str, fields: Dict[str, Any], tags: Dict[str, str]):
        self.records.append(MetricRecord(measurement, dict(tags), dict(fields)))
    
    def add_error(self, error: Optional[Exception]):
        """Record a non-fatal error; None is ignored"""
        if error is None:
            return
        logger.debug(f"Aggregated error: {error}")
        self.errors.append(error)
    
    def has_measurement(self, measurement: str) -> bool:
        return any(record.measurement == measurement for record in self.records)
    
    def records_for(self, measurement: str) -> List[MetricRecord]:
        return [record for record in self.records if record.measurement == measurement]
