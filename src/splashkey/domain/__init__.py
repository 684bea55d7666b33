"""Spectrum containers and the SPLASH algorithm."""

from splashkey.domain.key import SplashKey, is_valid_splash, parse_splash
from splashkey.domain.spectrum import Ion, Spectrum, SpectrumLike, normalize_intensity
from splashkey.domain.splash import (
    calculate_splash,
    calculate_splash_for_spectrum,
    splash_for_peaks,
)

__all__ = [
    "Ion",
    "Spectrum",
    "SpectrumLike",
    "normalize_intensity",
    "calculate_splash",
    "calculate_splash_for_spectrum",
    "splash_for_peaks",
    "SplashKey",
    "parse_splash",
    "is_valid_splash",
]
