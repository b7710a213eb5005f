from .api import ChannelThreshold, DetectionConfig, Hit, InvalidInput, LaserColor, Roi
from .detect.classifier import classify
from .detect.laser_detector import LaserDetector
from .detect.scanner import scan

__all__ = [
    "ChannelThreshold", "DetectionConfig", "Hit", "InvalidInput", "LaserColor", "Roi",
    "classify", "scan", "LaserDetector",
]
