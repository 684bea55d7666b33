import hashlib

import numpy as np
import pytest

from splashkey.core.constants import SPLASH_LENGTH
from splashkey.core.exceptions import DegenerateSpectrumError, IndexOverflowError, InvalidInputError
from splashkey.domain import splash as splash_module
from splashkey.domain.spectrum import Spectrum, normalize_intensity
from splashkey.domain.splash import (
    build_prefix_block,
    calculate_histogram_block,
    calculate_spectrum_hash_block,
    calculate_splash,
    calculate_splash_for_spectrum,
    encode_spectrum,
    format_intensity,
    format_mz,
    histogram_bin,
    splash_for_peaks,
)

from conftest import KNOWN_INTENSITY, KNOWN_MZ, KNOWN_SPLASH


def test_known_vector():
    assert calculate_splash(KNOWN_MZ, KNOWN_INTENSITY, 3) == KNOWN_SPLASH
    assert len(KNOWN_SPLASH) == SPLASH_LENGTH == 40


def test_known_vector_from_numpy_arrays(known_arrays):
    mz, intensity = known_arrays
    assert calculate_splash(mz, intensity, len(mz)) == KNOWN_SPLASH


def test_known_vector_encoding_and_digest():
    relative = normalize_intensity(KNOWN_INTENSITY, 3)
    block = encode_spectrum(KNOWN_MZ, relative, 3)

    assert block == "100000000:33 101000000:66 102000000:100"
    assert hashlib.sha256(block.encode("utf-8")).hexdigest()[:20] == "f5bf6f6a4a1520a35d4f"
    assert calculate_spectrum_hash_block(KNOWN_MZ, relative, 3) == "f5bf6f6a4a1520a35d4f"


def test_prefix_block():
    assert build_prefix_block() == "splash10"


def test_deterministic():
    mz = [55.1, 210.34, 399.999, 1021.5]
    intensity = [12.0, 300.5, 7.25, 88.0]
    assert calculate_splash(mz, intensity, 4) == calculate_splash(list(mz), list(intensity), 4)


def test_output_format():
    result = calculate_splash([89.2, 145.9, 900.0, 2000.3], [5.0, 50.0, 500.0, 1.0], 4)
    prefix, histogram, digest = result.split("-")

    assert len(result) == SPLASH_LENGTH
    assert prefix == "splash10"
    assert len(histogram) == 10
    assert len(digest) == 20
    assert all(c in "0123456789abcdef" for c in digest)


def test_order_changes_digest_but_not_histogram():
    forward = calculate_splash([100.0, 200.0, 300.0], [1.0, 2.0, 3.0], 3)
    backward = calculate_splash([300.0, 200.0, 100.0], [3.0, 2.0, 1.0], 3)

    assert forward.split("-")[:2] == backward.split("-")[:2]
    assert forward.split("-")[2] != backward.split("-")[2]


def test_intensity_scale_invariance():
    mz = [100.0, 101.0, 102.0]
    assert calculate_splash(mz, [10.0, 20.0, 30.0], 3) == KNOWN_SPLASH
    assert calculate_splash(mz, [1000.0, 2000.0, 3000.0], 3) == KNOWN_SPLASH


def test_near_float32_max_intensities():
    result = calculate_splash([100.0, 200.0], [3.0e38, 1.0e38], 2)

    assert result == calculate_splash([100.0, 200.0], [3.0, 1.0], 2)
    assert result.split("-")[1] == "0zb0000000"


def test_histogram_bins_wrap_every_thousand():
    assert histogram_bin(150.0) == histogram_bin(1150.0) == 1
    assert histogram_bin(0.0) == 0
    assert histogram_bin(999.99) == 9
    assert histogram_bin(1000.0) == 0


def test_histogram_block_wraparound():
    relative = normalize_intensity([1.0, 1.0], 2)
    assert calculate_histogram_block([150.0, 1150.0], relative, 2) == "0z00000000"


def test_histogram_block_relative_heights():
    relative = normalize_intensity([2.0, 1.0], 2)
    # 35 and 17.5 -> 'z' and 'h'
    assert calculate_histogram_block([50.0, 150.0], relative, 2) == "zh00000000"

    relative = normalize_intensity([1.0, 1.0], 2)
    assert calculate_histogram_block([50.0, 250.0], relative, 2) == "z0z0000000"


def test_histogram_block_all_zero_is_degenerate():
    with pytest.raises(DegenerateSpectrumError):
        calculate_histogram_block([100.0], [0.0], 1)


def test_histogram_index_overflow_is_reported(monkeypatch):
    monkeypatch.setattr(splash_module, "FINAL_SCALE_FACTOR", 40)
    with pytest.raises(IndexOverflowError):
        calculate_histogram_block([100.0], [100.0], 1)


def test_format_mz_truncates_after_correction():
    assert format_mz(100.0) == "100000000"
    assert format_mz(123.4567894) == "123456789"
    assert format_mz(0.0) == "0"


def test_format_intensity_truncates_after_correction():
    assert format_intensity(66.9) == "66"
    assert format_intensity(32.99999999) == "33"
    assert format_intensity(100.0) == "100"


def test_count_limits_ions_hashed():
    mz = KNOWN_MZ + [500.0]
    intensity = KNOWN_INTENSITY + [1.0]
    assert calculate_splash(mz, intensity, 3) == KNOWN_SPLASH


def test_inputs_are_not_mutated(known_arrays):
    mz, intensity = known_arrays
    calculate_splash(mz, intensity, 3)

    np.testing.assert_array_equal(mz, KNOWN_MZ)
    np.testing.assert_array_equal(intensity, KNOWN_INTENSITY)


def test_spectrum_like_collaborator():
    class Record:
        def mz_values(self):
            return KNOWN_MZ

        def intensity_values(self):
            return KNOWN_INTENSITY

        def point_count(self):
            return 3

    assert calculate_splash_for_spectrum(Record()) == KNOWN_SPLASH
    assert calculate_splash_for_spectrum(Spectrum(KNOWN_MZ, KNOWN_INTENSITY)) == KNOWN_SPLASH


def test_splash_for_peaks():
    assert splash_for_peaks(list(zip(KNOWN_MZ, KNOWN_INTENSITY))) == KNOWN_SPLASH


@pytest.mark.parametrize(
    "mz, intensity, count",
    [
        (None, [1.0], 1),
        ([100.0], None, 1),
        ([100.0], [1.0], None),
        ([100.0], [1.0], 2),
        ([100.0], [1.0], -1),
        ([100.0], [1.0], True),
        ([100.0], [1.0], 1.0),
        ([100.0, 101.0], [1.0], 1),
        ([-1.0], [1.0], 1),
        ([float("nan")], [1.0], 1),
        ([100.0], [float("inf")], 1),
        ([100.0], [-5.0], 1),
        (["abc"], [1.0], 1),
    ],
)
def test_invalid_input(mz, intensity, count):
    with pytest.raises(InvalidInputError):
        calculate_splash(mz, intensity, count)


@pytest.mark.parametrize(
    "mz, intensity, count",
    [
        ([], [], 0),
        ([100.0], [1.0], 0),
        ([100.0, 200.0], [0.0, 0.0], 2),
    ],
)
def test_degenerate_spectrum(mz, intensity, count):
    with pytest.raises(DegenerateSpectrumError):
        calculate_splash(mz, intensity, count)
