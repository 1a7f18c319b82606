"""Custom exceptions for lap time simulation."""


class LapSimError(Exception):
    """Base exception for simulation errors."""


class ConfigurationError(LapSimError):
    """Raised when model or solver configuration is invalid."""


class TrackDataError(LapSimError):
    """Raised when track data cannot be parsed or validated."""


class SimulationError(LapSimError):
    """Raised when a lap simulation cannot be completed."""


class NonFiniteStateError(SimulationError):
    """Raised when integration produces NaN, infinite or diverging state values."""


class SimulationStallError(SimulationError):
    """Raised when a lap does not finish within the step limit."""
