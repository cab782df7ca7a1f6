"""Exceptions raised by legend construction and selection."""


class LegendError(Exception):
    """Base class for legend errors."""


class ConfigurationError(LegendError, ValueError):
    """A legend was configured with an invalid range or tick count."""


class DataIntegrityError(LegendError, ValueError):
    """A color table is missing channels or has inconsistent lengths."""
