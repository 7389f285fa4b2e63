"""Map constants: base types, planet traits, search defaults.

Base type strings are the values the map editor stores on each hex.
"""

# -- Base types ----------------------------------------------------------

BASE_UNASSIGNED = ""
BASE_VOID = "void"
BASE_HOMESYSTEM = "homesystem"

# Legacy base types that some older maps use instead of an effect
BASE_SUPERNOVA = "supernova"
BASE_ASTEROID = "asteroid"

# -- Planets -------------------------------------------------------------

PLANET_TYPES: tuple[str, ...] = ("INDUSTRIAL", "CULTURAL", "HAZARDOUS")

# -- Search --------------------------------------------------------------

DEFAULT_MAX_DISTANCE: int = 3
"""Movement range used when the caller does not give one."""
