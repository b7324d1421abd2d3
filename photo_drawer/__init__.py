"""
Drawer

Pick a photo, draw over it, save the flattened result to the photo library.
"""

__version__ = "1.0.0"

from .config import Config
from .events.event_bus import EventBus, get_event_bus

__all__ = [
    'Config',
    'EventBus',
    'get_event_bus',
]
