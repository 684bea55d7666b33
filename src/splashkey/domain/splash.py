"""Reference calculation of the Spectral Hash Key (SPLASH).

A SPLASH has three blocks joined by ``-``:

    splash10-0z00000000-f5bf6f6a4a1520a35d4f
    |        |          |
    |        |          first 20 hex chars of SHA-256 over the spectrum text
    |        10-bin histogram of relative intensity over m/z
    format and algorithm version

The functions here are pure: they never log and never mutate their inputs.
"""

import hashlib
from typing import List, Sequence, Tuple

import numpy as np

from splashkey.core.constants import (
    ALGORITHM_VERSION,
    BIN_SIZE,
    BINS,
    BLOCK_SEPARATOR,
    EPS_CORRECTION,
    FINAL_SCALE_FACTOR,
    FORMAT_VERSION,
    INTENSITY_MAP,
    INTENSITY_PRECISION_FACTOR,
    ION_SEPARATOR,
    MAX_CHARS_SPECTRUM_BLOCK,
    MZ_INTENSITY_SEPARATOR,
    MZ_PRECISION_FACTOR,
    RELATIVE_INTENSITY_SCALE,
    SPLASH_PREFIX,
)
from splashkey.core.exceptions import (
    DegenerateSpectrumError,
    IndexOverflowError,
    InvalidInputError,
)
from splashkey.domain.spectrum import Spectrum, SpectrumLike, normalize_intensity


def format_mz(value: float) -> str:
    """Format an m/z value as a fixed-point integer with 6 implied decimals.

    The value is truncated, not rounded, after adding EPS_CORRECTION.

    Example:
        >>> format_mz(100.0)
        '100000000'
    """
    return str(int((float(value) + EPS_CORRECTION) * MZ_PRECISION_FACTOR))


def format_intensity(value: float) -> str:
    """Format a relative intensity as a truncated whole number."""
    return str(int((float(value) + EPS_CORRECTION) * INTENSITY_PRECISION_FACTOR))


def build_prefix_block() -> str:
    return SPLASH_PREFIX + FORMAT_VERSION + ALGORITHM_VERSION


def histogram_bin(mz: float) -> int:
    """Histogram bin of an m/z value; windows of BIN_SIZE wrap every BINS bins."""
    return int(float(mz) / BIN_SIZE) % BINS


def calculate_histogram_block(
    mz_values: Sequence[float], relative_intensities: Sequence[float], count: int
) -> str:
    """Summarise the intensity distribution over m/z as BINS characters.

    1. Sum relative intensities into BINS windows of BIN_SIZE m/z, wrapping
       m/z values past BINS * BIN_SIZE back onto the first bins
    2. Rescale the bins so the largest becomes FINAL_SCALE_FACTOR
    3. Truncate each bin and map it onto INTENSITY_MAP

    Args:
        mz_values: m/z values
        relative_intensities: Intensities already normalized to 0-100
        count: Number of ions to use

    Returns:
        Histogram block, one character per bin

    Raises:
        DegenerateSpectrumError: If every bin is zero
        IndexOverflowError: If a bin maps past the end of INTENSITY_MAP
    """
    binned_ions = np.zeros(BINS, dtype=np.float64)

    for i in range(count):
        binned_ions[histogram_bin(mz_values[i])] += float(relative_intensities[i])

    max_intensity = binned_ions.max()
    if max_intensity == 0:
        raise DegenerateSpectrumError("Cannot build a histogram of a spectrum without intensity")

    binned_ions = EPS_CORRECTION + FINAL_SCALE_FACTOR * binned_ions / max_intensity

    result = []
    for value in binned_ions:
        index = int(EPS_CORRECTION + value)
        if index >= len(INTENSITY_MAP):
            raise IndexOverflowError(
                f"Histogram value {value!r} maps to index {index}, "
                f"alphabet has {len(INTENSITY_MAP)} symbols"
            )
        result.append(INTENSITY_MAP[index])

    return "".join(result)


def encode_spectrum(
    mz_values: Sequence[float], relative_intensities: Sequence[float], count: int
) -> str:
    """Canonical text form of a spectrum, ions kept in input order.

    Example:
        >>> encode_spectrum([100.0, 101.0], [50.0, 100.0], 2)
        '100000000:50 101000000:100'
    """
    return ION_SEPARATOR.join(
        format_mz(mz_values[i]) + MZ_INTENSITY_SEPARATOR + format_intensity(relative_intensities[i])
        for i in range(count)
    )


def calculate_spectrum_hash_block(
    mz_values: Sequence[float], relative_intensities: Sequence[float], count: int
) -> str:
    block = encode_spectrum(mz_values, relative_intensities, count)
    digest = hashlib.sha256(block.encode("utf-8")).hexdigest()
    return digest[:MAX_CHARS_SPECTRUM_BLOCK]


def _validate_input(
    mz_values: Sequence[float], intensity_values: Sequence[float], count: int
) -> Tuple[np.ndarray, np.ndarray]:
    if mz_values is None or intensity_values is None:
        raise InvalidInputError("m/z and intensity values must not be None")
    if count is None:
        raise InvalidInputError("count must not be None")
    if isinstance(count, bool) or not isinstance(count, (int, np.integer)):
        raise InvalidInputError(f"count must be an integer, got {type(count).__name__}")
    if count < 0:
        raise InvalidInputError(f"count must not be negative, got {count}")

    spectrum = Spectrum(mz_values, intensity_values)
    if count > spectrum.point_count():
        raise InvalidInputError(
            f"count {count} exceeds the {spectrum.point_count()} ions supplied"
        )

    mz = spectrum.mz[:count]
    intensity = spectrum.intensity[:count]
    if not (np.all(np.isfinite(mz)) and np.all(mz >= 0)):
        raise InvalidInputError("m/z values must be finite and non-negative")
    if not (np.all(np.isfinite(intensity)) and np.all(intensity >= 0)):
        raise InvalidInputError("intensity values must be finite and non-negative")
    return mz, intensity


def calculate_splash(
    mz_values: Sequence[float], intensity_values: Sequence[float], count: int
) -> str:
    """Calculate the SPLASH of a spectrum.

    Args:
        mz_values: m/z values, in the order the ions should be hashed
        intensity_values: Intensities, same length as mz_values
        count: Number of ions to hash; must not exceed the array lengths

    Returns:
        SPLASH string, e.g. ``splash10-0z00000000-f5bf6f6a4a1520a35d4f``

    Raises:
        InvalidInputError: On missing, mismatched or non-finite input
        DegenerateSpectrumError: If there are no ions or all intensities are zero
        IndexOverflowError: If the histogram cannot be encoded

    Example:
        >>> calculate_splash([100.0, 101.0, 102.0], [1.0, 2.0, 3.0], 3)
        'splash10-0z00000000-f5bf6f6a4a1520a35d4f'
    """
    mz, intensity = _validate_input(mz_values, intensity_values, count)
    if count == 0:
        raise DegenerateSpectrumError("Cannot calculate a SPLASH for an empty spectrum")

    relative_intensities = normalize_intensity(intensity, count, RELATIVE_INTENSITY_SCALE)
    if not relative_intensities.any():
        raise DegenerateSpectrumError("Cannot calculate a SPLASH when all intensities are zero")

    return BLOCK_SEPARATOR.join(
        [
            build_prefix_block(),
            calculate_histogram_block(mz, relative_intensities, count),
            calculate_spectrum_hash_block(mz, relative_intensities, count),
        ]
    )


def calculate_splash_for_spectrum(spectrum: SpectrumLike) -> str:
    """Calculate the SPLASH of any object exposing mz_values/intensity_values/point_count."""
    return calculate_splash(
        spectrum.mz_values(), spectrum.intensity_values(), spectrum.point_count()
    )


def splash_for_peaks(peaks: List[Tuple[float, float]]) -> str:
    """Generate a SPLASH identifier from a list of (mz, intensity)."""
    return calculate_splash_for_spectrum(Spectrum.from_peaks(peaks))
