"""
Manual room assignments that take precedence over bridge-reported rooms
"""

import logging
from typing import List, Optional, Sequence

logger = logging.getLogger(__name__)

class RoomAssignments:
    """
    Ordered list of rules, each shaped [room name, device name, device name, ...].
    The first rule listing the device wins.
    """
    
    def __init__(self, rules: Optional[Sequence[Sequence[str]]] = None):
        self.rules: List[List[str]] = [list(rule) for rule in (rules or [])]
        for rule in self.rules:
            if len(rule) < 2:
                logger.warning(f"Room assignment {rule} lists no devices and will never match")
    
    def resolve(self, device_name: str) -> Optional[str]:
        """Return the assigned room name for a device, or None if no rule matches"""
        for rule in self.rules:
            # Index 0 is the room name slot; only the first occurrence counts
            if device_name in rule and rule.index(device_name) > 0:
                return rule[0]
        return None
    
    def __bool__(self) -> bool:
        return bool(self.rules)
