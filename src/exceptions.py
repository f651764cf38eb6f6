"""
Exception hierarchy for Hue bridge polling
"""

from typing import Optional


class HueBridgeError(Exception):
    """Base class for all bridge polling errors"""


class BridgeConfigError(HueBridgeError):
    """Bridge list is empty or contains a malformed entry - aborts the whole cycle"""


class BridgeFetchError(HueBridgeError):
    """A single resource fetch failed (transport, malformed URL or HTTP status)"""

    def __init__(self, message: str, url: Optional[str] = None):
        super().__init__(message)
        self.url = url


class BridgeDecodeError(BridgeFetchError):
    """Response body is not valid JSON or does not match the resource shape"""
