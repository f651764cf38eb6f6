"""
Hue bridge resource models and fetcher
"""

from .fetcher import ResourceFetcher, resolve_resource_url
from .models import (
    Device, DevicePower, Light, LightLevel, Motion, ResourceLink, ResourceList,
    Room, Temperature, RESOURCE_MODELS
)

__all__ = [
    'ResourceFetcher', 'resolve_resource_url', 'Device', 'DevicePower', 'Light',
    'LightLevel', 'Motion', 'ResourceLink', 'ResourceList', 'Room', 'Temperature',
    'RESOURCE_MODELS'
]
