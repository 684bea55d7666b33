"""Spectrum file loading.

Reads spectral libraries in JSONL or MSP form into SpectrumRecord objects.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from splashkey.core.exceptions import DataError, InvalidInputError
from splashkey.domain.spectrum import Spectrum

logger = logging.getLogger(__name__)

JSONL_SUFFIXES = (".jsonl", ".json")
MSP_SUFFIXES = (".msp",)


@dataclass
class SpectrumRecord:
    """A spectrum read from a library file.

    Attributes:
        identifier: Record id from the file, or its 1-based position
        name: Compound name, if the file has one
        spectrum: Peaks in file order
        metadata: Remaining fields of the record
    """

    identifier: str
    spectrum: Spectrum
    name: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)


class SpectrumLoader:
    """Load spectra from JSONL or MSP files."""

    def __init__(self, input_format: str = "auto"):
        """Initialize loader.

        Args:
            input_format: "jsonl", "msp", or "auto" to decide by file suffix
        """
        self.input_format = input_format

    def resolve_format(self, filepath: Path) -> str:
        if self.input_format != "auto":
            return self.input_format

        suffix = Path(filepath).suffix.lower()
        if suffix in JSONL_SUFFIXES:
            return "jsonl"
        if suffix in MSP_SUFFIXES:
            return "msp"
        raise DataError(f"Cannot infer spectrum format from file name: {filepath}")

    def load(self, filepath: Path) -> List[SpectrumRecord]:
        """Load every record from a spectrum file.

        Args:
            filepath: Path to JSONL or MSP file

        Returns:
            Records in file order

        Raises:
            DataError: If the file is missing or cannot be parsed
        """
        filepath = Path(filepath)
        if not filepath.exists():
            raise DataError(f"File not found: {filepath}")

        fmt = self.resolve_format(filepath)
        with open(filepath, "r", encoding="utf-8") as f:
            lines = f.readlines()

        if fmt == "jsonl":
            records = self.parse_jsonl(lines)
        elif fmt == "msp":
            records = self.parse_msp(lines)
        else:
            raise DataError(f"Unknown spectrum format: {fmt}")

        logger.info("Loaded %d spectra from %s", len(records), filepath)
        return records

    @staticmethod
    def parse_jsonl(lines: List[str]) -> List[SpectrumRecord]:
        """Parse JSONL lines, one object with a 'peaks' field per line."""
        records = []
        for line_num, line in enumerate(lines, 1):
            if not line.strip():
                continue
            try:
                entry = json.loads(line)
            except json.JSONDecodeError as e:
                raise DataError(f"JSON parsing error at line {line_num}: {e}") from e
            if not isinstance(entry, dict) or not isinstance(entry.get("peaks"), list):
                raise DataError(f"Line {line_num} has no 'peaks' list")

            try:
                spectrum = Spectrum.from_peaks(entry.pop("peaks"))
            except InvalidInputError as e:
                raise DataError(f"Invalid peaks at line {line_num}: {e}") from e

            identifier = entry.pop("id", None)
            records.append(
                SpectrumRecord(
                    identifier=str(identifier) if identifier is not None else str(len(records) + 1),
                    spectrum=spectrum,
                    name=entry.pop("name", None),
                    metadata=entry,
                )
            )
        return records

    @staticmethod
    def parse_msp(lines: List[str]) -> List[SpectrumRecord]:
        """Parse MSP lines into records.

        A record is a block of ``Key: value`` lines followed by peak lines.
        Records end at a blank line or at the next ``Name:`` line.
        """
        records = []
        fields: Dict[str, str] = {}
        peaks: List[Tuple[float, float]] = []
        start_line = 1

        def flush_record():
            nonlocal fields, peaks
            if fields or peaks:
                records.append(_msp_record(fields, peaks, len(records) + 1, start_line))
            fields = {}
            peaks = []

        for line_num, line in enumerate(lines, 1):
            stripped = line.strip()
            if not stripped:
                flush_record()
                continue
            if not fields and not peaks:
                start_line = line_num

            if ":" in stripped and not _looks_like_peaks(stripped):
                key, value = map(str.strip, stripped.split(":", 1))
                key = key.replace(" ", "_").upper()
                if key == "NAME" and (fields or peaks):
                    flush_record()
                    start_line = line_num
                fields[key] = value
                continue

            try:
                peaks.extend(_parse_peak_line(stripped))
            except ValueError as e:
                raise DataError(f"Invalid peak line {line_num}: {stripped!r}") from e

        # Don't forget the last record
        flush_record()
        return records


def _looks_like_peaks(line: str) -> bool:
    head = line.split(":", 1)[0].strip()
    try:
        float(head)
    except ValueError:
        return False
    return True


def _parse_peak_line(line: str) -> List[Tuple[float, float]]:
    """Parse 'mz intensity' or 'mz:intensity; mz:intensity;' peak lines."""
    peaks = []
    for pair in line.replace(";", "\n").splitlines():
        tokens = pair.replace(":", " ").split()
        if not tokens:
            continue
        if len(tokens) < 2:
            raise ValueError(f"Incomplete peak: {pair!r}")
        # Annotation columns after the intensity are ignored
        peaks.append((float(tokens[0]), float(tokens[1])))
    return peaks


def _msp_record(
    fields: Dict[str, str], peaks: List[Tuple[float, float]], position: int, line_num: int
) -> SpectrumRecord:
    fields = dict(fields)
    name = fields.pop("NAME", None)
    identifier = fields.pop("ID", None) or fields.pop("DB#", None) or str(position)

    expected = fields.get("NUM_PEAKS")
    if expected is not None and expected.isdigit() and int(expected) != len(peaks):
        logger.warning(
            "Record %s (line %d) declares %s peaks but has %d",
            identifier, line_num, expected, len(peaks),
        )

    try:
        spectrum = Spectrum.from_peaks(peaks)
    except InvalidInputError as e:
        raise DataError(f"Invalid peaks in record starting at line {line_num}: {e}") from e
    return SpectrumRecord(identifier=identifier, spectrum=spectrum, name=name, metadata=fields)
