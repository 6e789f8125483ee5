"""
Result writers for saving rumble results to files.

New output formats plug in as further ResultWriter subclasses.
"""

import json
import logging
from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from typing import Dict, TextIO

from rumble.core.models import RumbleResult


class ResultWriter(ABC):
    """Abstract base class for result writers (Strategy Pattern)."""

    @abstractmethod
    def write(self, results: Dict[Path, RumbleResult], output_path: Path) -> None:
        """Write results to the specified path."""
        pass


class TextResultWriter(ResultWriter):
    """Writes results as a human-readable report."""

    def __init__(self, include_timestamp: bool = True):
        """
        Args:
            include_timestamp: Whether to include timestamp in output
        """
        self.include_timestamp = include_timestamp
        self.logger = logging.getLogger("result_writer.text")

    def write(self, results: Dict[Path, RumbleResult], output_path: Path) -> None:
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, 'w', encoding='utf-8') as f:
            f.write("=" * 70 + "\n")
            f.write("RUMBLE FLAVOUR MATCH RESULTS\n")
            f.write("=" * 70 + "\n")

            if self.include_timestamp:
                f.write(f"Generated: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}\n")

            f.write(f"Total Files Analyzed: {len(results)}\n")
            f.write("=" * 70 + "\n\n")

            for file_path, result in results.items():
                self._write_single_result(f, file_path, result)

            f.write("=" * 70 + "\n")
            f.write("END OF REPORT\n")
            f.write("=" * 70 + "\n")

        self.logger.info(f"Results written to: {output_path}")

    def _write_single_result(self, f: TextIO, file_path: Path, result: RumbleResult) -> None:
        a = result.analysis
        flavour = result.flavour

        f.write("-" * 70 + "\n")
        f.write(f"FILE: {file_path.name}\n")
        f.write(f"PATH: {file_path}\n")
        f.write("-" * 70 + "\n")
        f.write(f"Processing Time: {result.processing_time:.3f}s\n")

        f.write(f"\nFlavour: {flavour.display_name} ({flavour.id})\n")
        f.write(f"  {flavour.narrative_text}\n")
        f.write(f"  {flavour.description}\n")

        f.write("\nAudio Analysis:\n")
        f.write(f"  Average Volume: {a.average_volume:.4f} RMS\n")
        f.write(f"  Dominant Pitch: {a.dominant_pitch:.1f} Hz\n")
        f.write(f"  Duration: {a.duration:.3f}s\n")
        f.write(f"  Grid Position: pitch {a.pitch_coordinate:.2f}, volume {a.volume_coordinate:.2f}\n")
        f.write("\n")


class JSONResultWriter(ResultWriter):
    """Writes results to a JSON file."""

    def __init__(self, indent: int = 2):
        self.indent = indent
        self.logger = logging.getLogger("result_writer.json")

    def write(self, results: Dict[Path, RumbleResult], output_path: Path) -> None:
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        output_data = {
            "generated": datetime.now().isoformat(),
            "total_files": len(results),
            "results": {
                str(path): result.to_dict()
                for path, result in results.items()
            }
        }

        with open(output_path, 'w', encoding='utf-8') as f:
            json.dump(output_data, f, indent=self.indent, default=str)

        self.logger.info(f"Results written to: {output_path}")


def create_result_writer(format: str = "text", **kwargs) -> ResultWriter:
    """
    Factory function to create appropriate result writer.

    Args:
        format: Output format ("text", "txt" or "json")
        **kwargs: Additional arguments for the writer

    Raises:
        ValueError: For an unknown format
    """
    writers = {
        "text": TextResultWriter,
        "txt": TextResultWriter,
        "json": JSONResultWriter,
    }

    writer_class = writers.get(format.lower())
    if writer_class is None:
        raise ValueError(f"Unknown format: {format}. Supported: {list(writers.keys())}")

    return writer_class(**kwargs)
