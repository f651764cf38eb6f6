"""
Metric records, accumulation and correlation
"""

from .models import MetricRecord, CycleReport
from .accumulator import MetricAccumulator
from .correlator import ResourceCorrelator, light_level_to_lux, UNDEFINED_DEVICE, UNASSIGNED_ROOM
from .store import MetricsStore

__all__ = [
    'MetricRecord', 'CycleReport', 'MetricAccumulator', 'ResourceCorrelator',
    'light_level_to_lux', 'UNDEFINED_DEVICE', 'UNASSIGNED_ROOM', 'MetricsStore'
]
