"""Effect and border anomaly keys.

String keys used in a hex's effect set and in its per-side border
anomaly map.
"""

# -- Hex effects ---------------------------------------------------------
NEBULA = "nebula"
RIFT = "rift"
SUPERNOVA = "supernova"
ASTEROID = "asteroid"

# -- Border anomalies ----------------------------------------------------
SPATIAL_TEAR = "SPATIALTEAR"
GRAVITY_WAVE = "GRAVITYWAVE"


def normalize_anomaly(type_name: str) -> str:
    """Map display names ("Spatial Tear") and ids ("SPATIALTEAR") to one key."""
    return "".join(type_name.split()).upper()
