"""Toggles for the movement rules applied by the distance engine."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Mapping, Optional


@dataclass(frozen=True)
class DistanceOptions:
    """Which optional movement rules are active.  All default to on."""

    use_custom_links: bool = True
    use_border_anomalies: bool = True
    use_supernova: bool = True
    use_rift: bool = True
    use_nebula: bool = True
    use_asteroid: bool = True

    @classmethod
    def from_mapping(cls, raw: Optional[Mapping[str, Any]]) -> DistanceOptions:
        """Build options from a mapping, ignoring unknown keys."""
        if not raw:
            return cls()
        names = {f.name for f in fields(cls)}
        return cls(**{k: bool(v) for k, v in raw.items() if k in names})
