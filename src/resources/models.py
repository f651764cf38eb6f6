"""
Hue bridge CLIP v2 resource models
Only the fields read by the correlators are declared; everything else is ignored.
Missing or null fields fall back to zero values so incomplete readings fail their flag checks.
"""

from typing import Any, Generic, List, TypeVar
from pydantic import BaseModel, Field, field_validator, model_validator

DEVICE_RTYPE = "device"

def _nulls_to_empty(items: Any) -> Any:
    """Null list items decode like empty objects"""
    if isinstance(items, list):
        return [{} if item is None else item for item in items]
    return items

class HueModel(BaseModel):
    """Base for bridge resources: a JSON null decodes like a missing field"""

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data

class ResourceLink(HueModel):
    """Reference to another resource by id and type (owner, room children)"""
    rid: str = ""
    rtype: str = ""

    @property
    def is_device(self) -> bool:
        return self.rtype == DEVICE_RTYPE

class ResourceMetadata(HueModel):
    archetype: str = ""
    name: str = ""

class Device(HueModel):
    id: str = ""
    metadata: ResourceMetadata = Field(default_factory=ResourceMetadata)

    @property
    def name(self) -> str:
        return self.metadata.name

class Room(HueModel):
    id: str = ""
    metadata: ResourceMetadata = Field(default_factory=ResourceMetadata)
    children: List[ResourceLink] = Field(default_factory=list)

    @field_validator("children", mode="before")
    @classmethod
    def null_children(cls, value: Any) -> Any:
        return _nulls_to_empty(value)

    @property
    def name(self) -> str:
        return self.metadata.name

# Light

class LightOn(HueModel):
    on: bool = False

class Light(HueModel):
    on: LightOn = Field(default_factory=LightOn)
    owner: ResourceLink = Field(default_factory=ResourceLink)

# Temperature sensor

class TemperatureValue(HueModel):
    temperature: float = 0.0
    temperature_valid: bool = False

class Temperature(HueModel):
    enabled: bool = False
    temperature: TemperatureValue = Field(default_factory=TemperatureValue)
    owner: ResourceLink = Field(default_factory=ResourceLink)

# Light level sensor

class LightLevelValue(HueModel):
    light_level: int = 0
    light_level_valid: bool = False

class LightLevel(HueModel):
    enabled: bool = False
    light: LightLevelValue = Field(default_factory=LightLevelValue)
    owner: ResourceLink = Field(default_factory=ResourceLink)

# Motion sensor

class MotionValue(HueModel):
    motion: bool = False
    motion_valid: bool = False

class Motion(HueModel):
    enabled: bool = False
    motion: MotionValue = Field(default_factory=MotionValue)
    owner: ResourceLink = Field(default_factory=ResourceLink)

# Device power

class PowerState(HueModel):
    battery_state: str = ""
    battery_level: int = 0

class DevicePower(HueModel):
    power_state: PowerState = Field(default_factory=PowerState)
    owner: ResourceLink = Field(default_factory=ResourceLink)

T = TypeVar("T")

class ResourceList(HueModel, Generic[T]):
    """Response envelope shared by all resource endpoints - only data is consumed"""
    errors: List[Any] = Field(default_factory=list)
    data: List[T] = Field(default_factory=list)

    @field_validator("data", mode="before")
    @classmethod
    def null_items(cls, value: Any) -> Any:
        return _nulls_to_empty(value)

# Resource kind -> decoded model, in fetch order
RESOURCE_MODELS = {
    "device": ResourceList[Device],
    "room": ResourceList[Room],
    "light": ResourceList[Light],
    "temperature": ResourceList[Temperature],
    "light_level": ResourceList[LightLevel],
    "motion": ResourceList[Motion],
    "device_power": ResourceList[DevicePower],
}
