"""
earlydecoder errors.

Decoding itself reports problems as diagnostics; these exceptions are only
raised by the outer loading and configuration layers.
"""

class EarlyDecoderError(Exception):
    """Base exception for all earlydecoder errors."""
    pass

class ModuleLoadError(EarlyDecoderError):
    """A module directory could not be read."""
    pass

class ConfigurationError(EarlyDecoderError):
    """Errors in configuration."""
    pass
