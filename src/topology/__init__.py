"""
Device/room topology lookups
"""

from .index import TopologyIndex
from .assignments import RoomAssignments

__all__ = ['TopologyIndex', 'RoomAssignments']
