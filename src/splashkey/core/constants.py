"""Numeric contract of the SPLASH algorithm.

Every value here is part of the identifier format: changing one changes the
hash of every spectrum, so a change must come with a new ALGORITHM_VERSION.
"""

# Prefix block
SPLASH_PREFIX = "splash"
FORMAT_VERSION = "1"
ALGORITHM_VERSION = "0"
BLOCK_SEPARATOR = "-"

# Relative intensity
RELATIVE_INTENSITY_SCALE = 100.0

# Histogram block
BINS = 10
BIN_SIZE = 100
FINAL_SCALE_FACTOR = 35
INTENSITY_MAP = "0123456789abcdefghijklmnopqrstuvwxyz"

# Spectrum block
ION_SEPARATOR = " "
MZ_INTENSITY_SEPARATOR = ":"
FIXED_PRECISION_OF_MASSES = 6
FIXED_PRECISION_OF_INTENSITIES = 0
MZ_PRECISION_FACTOR = 10 ** FIXED_PRECISION_OF_MASSES
INTENSITY_PRECISION_FACTOR = 10 ** FIXED_PRECISION_OF_INTENSITIES
MAX_CHARS_SPECTRUM_BLOCK = 20

# Added before truncation to even out floating point differences between
# implementations and processor architectures
EPS_CORRECTION = 1.0e-7

SPLASH_LENGTH = (
    len(SPLASH_PREFIX)
    + len(FORMAT_VERSION)
    + len(ALGORITHM_VERSION)
    + len(BLOCK_SEPARATOR)
    + BINS
    + len(BLOCK_SEPARATOR)
    + MAX_CHARS_SPECTRUM_BLOCK
)
