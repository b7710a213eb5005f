from __future__ import annotations
from pathlib import Path

import yaml

from dryfire.api.config import DetectionConfig
from dryfire.api.errors import InvalidInput


def load_detection_config(path: Path | str) -> DetectionConfig:
    """
    Load a detection profile (YAML). Keys mirror DetectionConfig fields;
    anything omitted keeps its default. An empty file yields the defaults.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Missing detection profile {path}")
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise InvalidInput(f"{path} is not valid YAML: {e}") from None
    if data is None:
        return DetectionConfig()
    if not isinstance(data, dict):
        raise InvalidInput(f"{path} must contain a mapping of detection settings")
    return DetectionConfig.from_dict(data)
