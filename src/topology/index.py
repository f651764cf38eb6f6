"""
Per-cycle topology index over the device and room lists of one bridge
"""

from typing import Dict, List, Optional

from resources.models import Device, Room

class TopologyIndex:
    """
    Answers "which device is this" and "which room contains this device".
    Built fresh for every bridge pass. Duplicate ids resolve to the first
    entry in list order (rooms first, then children).
    """
    
    def __init__(self, devices: List[Device], rooms: List[Room]):
        self._devices: Dict[str, Device] = {}
        for device in devices:
            self._devices.setdefault(device.id, device)
        
        self._rooms_by_device: Dict[str, Room] = {}
        for room in rooms:
            for child in room.children:
                if child.is_device:
                    self._rooms_by_device.setdefault(child.rid, room)
    
    def find_device(self, device_id: str) -> Optional[Device]:
        return self._devices.get(device_id)
    
    def find_room_containing(self, device_id: str) -> Optional[Room]:
        return self._rooms_by_device.get(device_id)
    
    def __len__(self) -> int:
        return len(self._devices)
