"""Engine configuration: loads tunable settings from config/engine.yaml.

Provides a single ``EngineConfig`` dataclass that is loaded once at startup
and then passed wherever the distance engine or the REST app needs it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from hexreach.models.options import DistanceOptions
from hexreach.util.constants import DEFAULT_MAX_DISTANCE

log = logging.getLogger(__name__)

DEFAULT_ENGINE_CONFIG_PATH = "config/engine.yaml"


@dataclass
class EngineConfig:
    """All tunable engine settings.

    Loaded from ``config/engine.yaml``.  Every field has a sensible default
    so the engine can run even without the file.
    """

    # -- Search ------------------------------------------------------
    max_distance: int = DEFAULT_MAX_DISTANCE
    options: DistanceOptions = field(default_factory=DistanceOptions)

    # -- Validation --------------------------------------------------
    strict: bool = False

    # -- Network -----------------------------------------------------
    host: str = "127.0.0.1"
    rest_port: int = 8080


def load_engine_config(path: str | Path = DEFAULT_ENGINE_CONFIG_PATH) -> EngineConfig:
    """Load engine configuration from a YAML file.

    Missing keys fall back to dataclass defaults.  If the file does not
    exist, a warning is logged and pure defaults are returned.
    """
    p = Path(path)
    if not p.exists():
        log.warning("Engine config not found at %s, using defaults", p)
        return EngineConfig()

    with p.open() as f:
        raw = yaml.safe_load(f) or {}

    log.info("Loaded engine config from %s (%d keys)", p, len(raw))

    # Handle nested movement options
    options_raw = raw.pop("options", None)
    options = DistanceOptions.from_mapping(options_raw if isinstance(options_raw, dict) else None)

    return EngineConfig(options=options, **{
        k: v for k, v in raw.items()
        if k in EngineConfig.__dataclass_fields__
    })
