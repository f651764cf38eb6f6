"""
Correlates bridge readings with devices and rooms and emits one counter record per reading
"""

import logging
import math
from typing import List, Tuple

from resources.models import (
    DevicePower, Light, LightLevel, Motion, ResourceLink, Temperature
)
from topology import RoomAssignments, TopologyIndex
from .accumulator import MetricAccumulator

logger = logging.getLogger(__name__)

UNDEFINED_DEVICE = "<undefined>"
UNASSIGNED_ROOM = "<unassigned>"

MEASUREMENT_LIGHT = "huebridge_light"
MEASUREMENT_TEMPERATURE = "huebridge_temperature"
MEASUREMENT_LIGHT_LEVEL = "huebridge_light_level"
MEASUREMENT_MOTION = "huebridge_motion"
MEASUREMENT_DEVICE_POWER = "huebridge_device_power"

def light_level_to_lux(light_level: int) -> float:
    """Hue light levels are 10000 * log10(lux) + 1"""
    return math.pow(10.0, (light_level - 1.0) / 10000.0)

class ResourceCorrelator:
    """Emits the readings of one bridge pass, tagged with device and room names"""
    
    def __init__(self, bridge_url: str, topology: TopologyIndex,
                 assignments: RoomAssignments, accumulator: MetricAccumulator):
        self.bridge_url = bridge_url
        self.topology = topology
        self.assignments = assignments
        self.accumulator = accumulator
    
    # ================== NAME RESOLUTION ==================
    
    def device_name(self, owner: ResourceLink) -> str:
        if owner.is_device:
            device = self.topology.find_device(owner.rid)
            if device is not None:
                return device.name
        return UNDEFINED_DEVICE
    
    def device_and_room_name(self, owner: ResourceLink) -> Tuple[str, str]:
        """
        Resolve (device name, room name) for an owner reference
        Manual room assignments win over the rooms reported by the bridge
        """
        if not owner.is_device:
            return UNDEFINED_DEVICE, UNASSIGNED_ROOM
        
        device = self.topology.find_device(owner.rid)
        if device is None:
            return UNDEFINED_DEVICE, UNASSIGNED_ROOM
        
        room_name = self.assignments.resolve(device.name)
        if room_name is None:
            room = self.topology.find_room_containing(device.id)
            room_name = room.name if room is not None else UNASSIGNED_ROOM
        return device.name, room_name
    
    def _room_tags(self, owner: ResourceLink) -> dict:
        device_name, room_name = self.device_and_room_name(owner)
        return {
            "huebridge_url": self.bridge_url,
            "huebridge_room": room_name,
            "huebridge_device": device_name,
        }
    
    # ================== EMITTERS ==================
    
    def eval_lights(self, lights: List[Light]):
        for light in lights:
            fields = {"on": 1 if light.on.on else 0}
            self.accumulator.add_counter(MEASUREMENT_LIGHT, fields, self._room_tags(light.owner))
    
    def eval_temperatures(self, temperatures: List[Temperature]):
        for temperature in temperatures:
            if not (temperature.enabled and temperature.temperature.temperature_valid):
                continue
            fields = {"temperature": temperature.temperature.temperature}
            self.accumulator.add_counter(MEASUREMENT_TEMPERATURE, fields, self._room_tags(temperature.owner))
    
    def eval_light_levels(self, light_levels: List[LightLevel]):
        for light_level in light_levels:
            if not (light_level.enabled and light_level.light.light_level_valid):
                continue
            level = light_level.light.light_level
            fields = {
                "light_level": level,
                "light_level_lux": light_level_to_lux(level),
            }
            self.accumulator.add_counter(MEASUREMENT_LIGHT_LEVEL, fields, self._room_tags(light_level.owner))
    
    def eval_motions(self, motions: List[Motion]):
        for motion in motions:
            if not (motion.enabled and motion.motion.motion_valid):
                continue
            fields = {"motion": 1 if motion.motion.motion else 0}
            self.accumulator.add_counter(MEASUREMENT_MOTION, fields, self._room_tags(motion.owner))
    
    def eval_device_powers(self, device_powers: List[DevicePower]):
        # No room tag for power readings
        for device_power in device_powers:
            tags = {
                "huebridge_url": self.bridge_url,
                "huebridge_device": self.device_name(device_power.owner),
            }
            fields = {"battery_level": device_power.power_state.battery_level}
            self.accumulator.add_counter(MEASUREMENT_DEVICE_POWER, fields, tags)
