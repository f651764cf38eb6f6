"""
Poll orchestration services
"""

from .hue_bridge_poller import HueBridgePoller, READING_KINDS

__all__ = ['HueBridgePoller', 'READING_KINDS']
