"""Physical constants used across the library."""

GRAVITY: float = 9.81
STANDARD_AIR_DENSITY: float = 1.225

TIRE_MASS: float = 10.0
TIRE_SPECIFIC_HEAT: float = 1000.0
TIRE_HEAT_TRANSFER_COEFFICIENT: float = 20.0
TIRE_COUNT: int = 4
AMBIENT_TEMPERATURE: float = 25.0
