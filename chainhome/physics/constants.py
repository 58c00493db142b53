"""
Station Constants for the Chain Home Simulator

Default operating figures for an east-coast Chain Home RDF station.
Distances are in statute miles, altitudes in feet, angles in compass
degrees (clockwise from north).

References:
    - Bowen, E.G. (1987). "Radar Days", Adam Hilger
    - Neale, B.T. (1985). "CH - the first operational radar", GEC Journal of Research
"""

from typing import Final

# =============================================================================
# SCAN SECTOR
# =============================================================================

SECTOR_CENTRE_DEG: Final[float] = 160.0
"""Centre of the station's scan sector [deg]"""

SECTOR_HALF_WIDTH_DEG: Final[float] = 50.0
"""Half-width of the scan sector [deg] - goniometer travels 110°..210°"""

# =============================================================================
# ALTITUDE LIMITS
# =============================================================================

MIN_ALTITUDE_FT: Final[float] = 1000.0
"""Lowest altitude the signal model interpolates from [ft]"""

MAX_ALTITUDE_FT: Final[float] = 30000.0
"""Highest altitude the signal model interpolates to [ft]"""

# =============================================================================
# RANGE
# =============================================================================

BASE_DETECTION_RANGE_MI: Final[float] = 100.0
"""Maximum detection range for a contact at MAX_ALTITUDE_FT [mi]"""

DETECTION_FLOOR_FRACTION: Final[float] = 0.4
"""Fraction of BASE_DETECTION_RANGE_MI reached at MIN_ALTITUDE_FT"""

MAX_SIMULATED_RANGE_MI: Final[float] = 100.0
"""Furthest range at which new contacts appear [mi]"""

MIN_CONTACT_RANGE_MI: Final[float] = 5.0
"""Contacts closer than this have crossed the coast and are retired [mi]"""

# =============================================================================
# POPULATION
# =============================================================================

POPULATION_FLOOR: Final[int] = 2
"""Live contact count below which a replacement is spawned"""

ESCORT_PROBABILITY: Final[float] = 0.3
"""Probability that a spawned raid is a fighter escort"""

# =============================================================================
# SWEEP
# =============================================================================

SWEEP_WIDTH: Final[int] = 1200
"""Horizontal extent of one A-scope sweep [samples]"""

SWEEP_DURATION_S: Final[float] = 2.0
"""Wall-clock duration of one sweep [s]"""

RANGE_BEAM_WIDTH_MI: Final[float] = 2.0
"""Half-width of the range window a contact echoes into [mi]"""

TRACE_HISTORY_CAP: Final[int] = 3
"""Number of finalised traces kept for the persistence overlay"""

SECONDS_PER_HOUR: Final[float] = 3600.0
