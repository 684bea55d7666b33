"""Spectrum containers and intensity normalization.

m/z values are held as float64 and intensities as float32, the widths the
SPLASH reference implementation hashes.
"""

from dataclasses import dataclass
from typing import Iterable, Iterator, List, Protocol, Sequence, Tuple, runtime_checkable

import numpy as np

from splashkey.core.constants import RELATIVE_INTENSITY_SCALE
from splashkey.core.exceptions import InvalidInputError


@runtime_checkable
class SpectrumLike(Protocol):
    """Anything that can hand over m/z values, intensities and a point count."""

    def mz_values(self) -> Sequence[float]: ...

    def intensity_values(self) -> Sequence[float]: ...

    def point_count(self) -> int: ...


@dataclass(frozen=True)
class Ion:
    """A single ion in a mass spectrum."""

    mz: float
    intensity: float


class Spectrum:
    """An ordered list of ions backed by numpy arrays.

    Attributes:
        mz: m/z values (float64)
        intensity: Intensity values (float32)
    """

    def __init__(self, mz: Sequence[float], intensity: Sequence[float]):
        mz_array = _as_array(mz, np.float64, "m/z values")
        intensity_array = _as_array(intensity, np.float32, "intensity values")
        if mz_array.shape != intensity_array.shape:
            raise InvalidInputError(
                f"m/z and intensity lengths differ: {mz_array.size} != {intensity_array.size}"
            )
        mz_array.flags.writeable = False
        intensity_array.flags.writeable = False
        self.mz = mz_array
        self.intensity = intensity_array

    @classmethod
    def from_peaks(cls, peaks: Iterable[Sequence[float]]) -> "Spectrum":
        """Build a spectrum from (m/z, intensity) pairs, keeping their order.

        Args:
            peaks: Iterable of (m/z, intensity) pairs

        Returns:
            Spectrum with the peaks in input order

        Example:
            >>> Spectrum.from_peaks([(100.0, 1.0), (101.0, 2.0)]).point_count()
            2
        """
        mz: List[float] = []
        intensity: List[float] = []
        for peak in peaks:
            try:
                is_pair = len(peak) == 2
            except TypeError:
                is_pair = False
            if not is_pair:
                raise InvalidInputError(f"Peak must be an (m/z, intensity) pair: {peak!r}")
            mz.append(peak[0])
            intensity.append(peak[1])
        return cls(mz, intensity)

    @classmethod
    def from_ions(cls, ions: Iterable[Ion]) -> "Spectrum":
        return cls.from_peaks((ion.mz, ion.intensity) for ion in ions)

    def mz_values(self) -> np.ndarray:
        return self.mz

    def intensity_values(self) -> np.ndarray:
        return self.intensity

    def point_count(self) -> int:
        return int(self.mz.size)

    def ions(self) -> Iterator[Ion]:
        for mz, intensity in zip(self.mz, self.intensity):
            yield Ion(float(mz), float(intensity))

    def peaks(self) -> List[Tuple[float, float]]:
        return [(ion.mz, ion.intensity) for ion in self.ions()]

    def __len__(self) -> int:
        return self.point_count()

    def __repr__(self) -> str:
        return f"Spectrum(n_ions={self.point_count()})"


def _as_array(values: Sequence[float], dtype, label: str) -> np.ndarray:
    if values is None:
        raise InvalidInputError(f"{label} must not be None")
    try:
        array = np.array(values, dtype=dtype, copy=True)
    except (TypeError, ValueError) as e:
        raise InvalidInputError(f"{label} must be numeric: {e}") from e
    if array.ndim != 1:
        raise InvalidInputError(f"{label} must be one-dimensional, got shape {array.shape}")
    return array


def normalize_intensity(
    values: Sequence[float], count: int, scale: float = RELATIVE_INTENSITY_SCALE
) -> np.ndarray:
    """Scale intensities so that the largest becomes ``scale``.

    Works on a float32 copy; ``values`` is left untouched.

    Args:
        values: Intensity values
        count: Number of leading values to normalize
        scale: Value the maximum intensity is mapped to

    Returns:
        float32 array of length ``count``. All zeros when ``count`` is 0 or
        every intensity is 0.

    Raises:
        InvalidInputError: If count is negative or exceeds len(values)

    Example:
        >>> normalize_intensity([1.0, 2.0, 4.0], 3)
        array([ 25.,  50., 100.], dtype=float32)
    """
    if count < 0 or count > len(values):
        raise InvalidInputError(f"count {count} outside 0..{len(values)}")

    relative = np.array(values[:count], dtype=np.float32, copy=True)
    if relative.size == 0:
        return relative

    max_intensity = relative.max()
    if max_intensity == 0:
        return np.zeros_like(relative)

    # Divide first: multiplying near-max float32 values by scale overflows
    return relative / max_intensity * np.float32(scale)
