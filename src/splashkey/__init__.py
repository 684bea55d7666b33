"""SPLASHKEY: Spectral Hash Keys for mass spectra.

Maps a mass spectrum to a reproducible identifier such as
``splash10-0z00000000-f5bf6f6a4a1520a35d4f`` that is identical across
independent SPLASH implementations.
"""

from splashkey.core.exceptions import (
    ConfigurationError,
    DataError,
    DegenerateSpectrumError,
    IndexOverflowError,
    InvalidInputError,
    SplashError,
)
from splashkey.domain.key import SplashKey, is_valid_splash, parse_splash
from splashkey.domain.spectrum import Ion, Spectrum, SpectrumLike, normalize_intensity
from splashkey.domain.splash import (
    calculate_splash,
    calculate_splash_for_spectrum,
    splash_for_peaks,
)

__version__ = "0.1.0"
__all__ = [
    "calculate_splash",
    "calculate_splash_for_spectrum",
    "splash_for_peaks",
    "normalize_intensity",
    "Ion",
    "Spectrum",
    "SpectrumLike",
    "SplashKey",
    "parse_splash",
    "is_valid_splash",
    "SplashError",
    "InvalidInputError",
    "DegenerateSpectrumError",
    "IndexOverflowError",
    "ConfigurationError",
    "DataError",
]
