# escapetime/errors.py


class EscapeTimeError(Exception):
    """Base class for every error raised by escapetime."""


class ComplexConversionError(EscapeTimeError, ValueError):
    """A Complex with a non-zero imaginary part was narrowed to a real number."""

    def __init__(self, message: str = "Complex has unconvertible imaginary part."):
        super().__init__(message)


class ConfigurationError(EscapeTimeError, ValueError):
    """Invalid fractal parameters, option names, config files or pixel buffers."""


class NoImageError(EscapeTimeError, RuntimeError):
    """The pixel buffer was requested before anything was drawn."""

    def __init__(self, message: str = "No image found."):
        super().__init__(message)
