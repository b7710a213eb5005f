from .config import ChannelThreshold, DetectionConfig
from .errors import InvalidInput
from .frame_data import Hit, LaserColor, Roi

__all__ = ["ChannelThreshold", "DetectionConfig", "InvalidInput", "Hit", "LaserColor", "Roi"]
