"""
Metric records and per-cycle reports
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

def _escape(value: str, chars: str) -> str:
    for ch in chars:
        value = value.replace(ch, "\\" + ch)
    return value

def _format_field(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return f"{value}i"
    if isinstance(value, float):
        return repr(value)
    return '"' + _escape(str(value), '\\"') + '"'

@dataclass
class MetricRecord:
    """One emitted measurement - timestamp is assigned by the sink"""
    measurement: str
    tags: Dict[str, str]
    fields: Dict[str, Any]
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_line_protocol(self) -> str:
        """Render as an InfluxDB line protocol line (tags sorted, ns timestamp)"""
        parts = [_escape(self.measurement, ", ")]
        for key in sorted(self.tags):
            parts.append(f"{_escape(key, ',= ')}={_escape(self.tags[key], ',= ')}")
        head = ",".join(parts)
        body = ",".join(
            f"{_escape(key, ',= ')}={_format_field(value)}"
            for key, value in sorted(self.fields.items())
        )
        ts = int(self.timestamp.timestamp()) * 1_000_000_000 + self.timestamp.microsecond * 1000
        return f"{head} {body} {ts}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "measurement": self.measurement,
            "tags": dict(self.tags),
            "fields": dict(self.fields),
            "timestamp": self.timestamp.isoformat(),
        }

@dataclass
class CycleReport:
    """Outcome of one poll cycle across all bridges"""
    started: datetime
    finished: datetime
    records: List[MetricRecord]
    errors: List[str]
    config_error: Optional[str] = None

    @property
    def duration_seconds(self) -> float:
        return (self.finished - self.started).total_seconds()

    @property
    def succeeded(self) -> bool:
        return self.config_error is None
