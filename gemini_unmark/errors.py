class WatermarkError(Exception):
    """Base class for everything the engine raises on purpose."""


class InitializationFailure(WatermarkError, OSError):
    """A reference capture could not be fetched, decoded or validated."""


class InvalidDimensions(WatermarkError, ValueError):
    pass


class InvalidPixelBuffer(WatermarkError, ValueError):
    pass


class InvalidRectangle(WatermarkError, ValueError):
    pass
