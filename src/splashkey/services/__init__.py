"""Service layer for hashing spectral libraries."""

from splashkey.services.data_loader import SpectrumLoader, SpectrumRecord
from splashkey.services.hashing import SplashResult, SplashService

__all__ = [
    "SpectrumLoader",
    "SpectrumRecord",
    "SplashService",
    "SplashResult",
]
