"""Custom exceptions for SPLASHKEY.

Exception hierarchy:
    SplashError (base)
    ├── InvalidInputError - Malformed spectrum arrays or SPLASH strings
    ├── DegenerateSpectrumError - Empty or all-zero spectra
    ├── IndexOverflowError - Histogram value outside the intensity alphabet
    ├── ConfigurationError - Invalid configuration
    └── DataError - Spectrum file loading/parsing issues
"""


class SplashError(Exception):
    """Base exception for SPLASHKEY."""

    pass


class InvalidInputError(SplashError):
    """Raised when spectrum input or a SPLASH string is malformed."""

    pass


class DegenerateSpectrumError(SplashError):
    """Raised when a spectrum has no ions or no non-zero intensity."""

    pass


class IndexOverflowError(SplashError):
    """Raised when a histogram bin maps past the end of the intensity alphabet."""

    pass


class ConfigurationError(SplashError):
    """Raised when configuration is invalid or missing."""

    pass


class DataError(SplashError):
    """Raised when spectrum file loading or parsing fails."""

    pass
