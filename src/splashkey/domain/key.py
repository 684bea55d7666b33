"""Parsing and validation of SPLASH strings."""

import re
from dataclasses import dataclass

from splashkey.core.constants import (
    BINS,
    BLOCK_SEPARATOR,
    INTENSITY_MAP,
    MAX_CHARS_SPECTRUM_BLOCK,
    SPLASH_PREFIX,
)
from splashkey.core.exceptions import InvalidInputError

_SPLASH_PATTERN = re.compile(
    rf"{SPLASH_PREFIX}(?P<format_version>[0-9a-z])(?P<algorithm_version>[0-9a-z])"
    rf"{re.escape(BLOCK_SEPARATOR)}(?P<histogram>[{INTENSITY_MAP}]{{{BINS}}})"
    rf"{re.escape(BLOCK_SEPARATOR)}(?P<digest>[0-9a-f]{{{MAX_CHARS_SPECTRUM_BLOCK}}})"
)


@dataclass(frozen=True)
class SplashKey:
    """The three blocks of a SPLASH.

    Attributes:
        format_version: First version digit of the prefix block
        algorithm_version: Second version digit of the prefix block
        histogram: Histogram block
        digest: Truncated SHA-256 of the encoded spectrum
    """

    format_version: str
    algorithm_version: str
    histogram: str
    digest: str

    @property
    def prefix(self) -> str:
        return SPLASH_PREFIX + self.format_version + self.algorithm_version

    def __str__(self) -> str:
        return BLOCK_SEPARATOR.join([self.prefix, self.histogram, self.digest])


def parse_splash(text: str) -> SplashKey:
    """Split a SPLASH string into its blocks.

    Args:
        text: SPLASH string

    Returns:
        Parsed SplashKey

    Raises:
        InvalidInputError: If text is not a well-formed SPLASH

    Example:
        >>> parse_splash("splash10-0z00000000-f5bf6f6a4a1520a35d4f").histogram
        '0z00000000'
    """
    if not isinstance(text, str):
        raise InvalidInputError(f"SPLASH must be a string, got {type(text).__name__}")

    match = _SPLASH_PATTERN.fullmatch(text)
    if match is None:
        raise InvalidInputError(f"Not a valid SPLASH: {text!r}")
    return SplashKey(**match.groupdict())


def is_valid_splash(text: str) -> bool:
    try:
        parse_splash(text)
    except InvalidInputError:
        return False
    return True
