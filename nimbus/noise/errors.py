"""Exceptions raised by the noise volume subsystem."""


class NoiseVolumeError(Exception):
    """Base class for noise volume errors."""


class InvalidParameterError(NoiseVolumeError, ValueError):
    """Generation parameters that cannot produce a volume.

    Raised before a bake starts, never from inside the sampling loop.
    """


class BakeCancelledError(NoiseVolumeError):
    """A bake was abandoned because its cancellation hook fired."""
