"""Batch SPLASH calculation for spectral libraries."""

import csv
import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Iterable, List, Optional

from tqdm import tqdm

from splashkey.core.config import HashingConfig, OUTPUT_FORMATS
from splashkey.core.exceptions import ConfigurationError, DegenerateSpectrumError, SplashError
from splashkey.domain.splash import calculate_splash_for_spectrum
from splashkey.services.data_loader import SpectrumRecord

logger = logging.getLogger(__name__)

RESULT_COLUMNS = ("id", "name", "splash", "error")


@dataclass
class SplashResult:
    """Outcome of hashing one record; exactly one of splash/error is set."""

    identifier: str
    name: Optional[str] = None
    splash: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict:
        data = asdict(self)
        data["id"] = data.pop("identifier")
        return {key: data[key] for key in RESULT_COLUMNS}


class SplashService:
    """Calculate SPLASH keys for many spectra.

    Example:
        service = SplashService(HashingConfig(on_error="skip"))
        results = service.hash_records(SpectrumLoader().load("library.msp"))
        service.write_results(results, Path("splashes.tsv"))
    """

    def __init__(self, config: Optional[HashingConfig] = None):
        self.config = config or HashingConfig()

    def hash_record(self, record: SpectrumRecord) -> SplashResult:
        """Hash one record.

        Raises:
            SplashError: If the spectrum cannot be hashed and on_error is "raise"
        """
        try:
            if record.spectrum.point_count() < self.config.min_peaks:
                raise DegenerateSpectrumError(
                    f"{record.spectrum.point_count()} peaks, "
                    f"at least {self.config.min_peaks} required"
                )
            splash = calculate_splash_for_spectrum(record.spectrum)
        except SplashError as e:
            if self.config.on_error == "raise":
                raise
            logger.warning("Skipping record %s: %s", record.identifier, e)
            return SplashResult(identifier=record.identifier, name=record.name, error=str(e))

        return SplashResult(identifier=record.identifier, name=record.name, splash=splash)

    def hash_records(
        self, records: Iterable[SpectrumRecord], show_progress: bool = False
    ) -> List[SplashResult]:
        """Hash records in order, optionally with a progress bar."""
        records = list(records)
        iterator = tqdm(records, desc="Hashing", unit="spectrum") if show_progress else records

        results = [self.hash_record(record) for record in iterator]

        n_failed = sum(1 for r in results if not r.ok)
        logger.info("Hashed %d spectra, %d failed", len(results) - n_failed, n_failed)
        return results

    @staticmethod
    def write_results(results: List[SplashResult], filepath: Path, fmt: str = "tsv") -> None:
        """Save results as TSV or JSONL.

        Args:
            results: Results to save
            filepath: Output path
            fmt: "tsv" or "jsonl"
        """
        if fmt not in OUTPUT_FORMATS:
            raise ConfigurationError(f"Output format must be one of {OUTPUT_FORMATS}, got {fmt!r}")

        filepath = Path(filepath)
        filepath.parent.mkdir(parents=True, exist_ok=True)

        with open(filepath, "w", newline="", encoding="utf-8") as f:
            if fmt == "jsonl":
                for result in results:
                    f.write(json.dumps(result.to_dict()) + "\n")
            else:
                writer = csv.DictWriter(f, fieldnames=RESULT_COLUMNS, delimiter="\t")
                writer.writeheader()
                for result in results:
                    writer.writerow(
                        {k: "" if v is None else v for k, v in result.to_dict().items()}
                    )

        logger.info("Wrote %d results to %s", len(results), filepath)
