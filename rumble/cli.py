"""
Rumble - stomach rumble flavour matcher CLI

Example usage:
    rumble path/to/rumble.wav
    rumble --waveform path/to/rumble.wav
    rumble --output results.json path/to/rumble.wav
    rumble first.wav second.mp3 --output-txt results.txt
"""

import argparse
import sys
from pathlib import Path
from typing import Dict, List, Optional

from rumble import __version__
from rumble.core.engine import RumbleEngine, create_engine
from rumble.core.models import RumbleResult
from rumble.core.result_writer import JSONResultWriter, TextResultWriter
from rumble.core.session import AppState, RumbleSession
from rumble.utils.config import load_config
from rumble.utils.errors import ConfigurationError
from rumble.utils.logging import setup_logging
from rumble.visualization.waveform import render_ascii


def print_result_card(file_path: Path, result: RumbleResult, show_waveform: bool = False) -> None:
    """Print the flavour match for one file to the console."""
    a = result.analysis
    flavour = result.flavour

    print("\n" + "=" * 60)
    print("YOUR RUMBLE FLAVOUR")
    print("=" * 60)
    print(f"File: {file_path.name}")
    print("-" * 60)
    print(f"  {flavour.display_name.upper()}")
    print(f"  {flavour.narrative_text}")
    print(f"\n  {flavour.description}")
    print("-" * 60)
    print("Audio Analysis:")
    print(f"  Average Volume: {a.average_volume:.4f} RMS")
    print(f"  Dominant Pitch: {a.dominant_pitch:.1f} Hz")
    print(f"  Duration: {a.duration:.2f}s")
    print(f"  Grid Position: pitch {a.pitch_coordinate:.2f}, volume {a.volume_coordinate:.2f}")

    if show_waveform:
        print("\nWaveform:")
        print(render_ascii(result.waveform))

    print("-" * 60)


def save_results(
    results: Dict[Path, RumbleResult],
    output_json: Optional[Path],
    output_txt: Optional[Path],
) -> None:
    if output_json:
        JSONResultWriter().write(results, output_json)
        print(f"\nJSON results saved to: {output_json}")
    if output_txt:
        TextResultWriter().write(results, output_txt)
        print(f"Text results saved to: {output_txt}")


def analyze_single_file(
    engine: RumbleEngine,
    audio_file: Path,
    output_json: Optional[Path] = None,
    output_txt: Optional[Path] = None,
    show_waveform: bool = False,
) -> int:
    """
    Run one file through the upload session.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    session = RumbleSession(engine)
    print(f"Analyzing your rumble: {audio_file}")

    if session.submit(audio_file) is AppState.ERROR:
        print(f"\nOops! Something went wrong: {session.error}")
        return 1

    print_result_card(audio_file, session.result, show_waveform)
    save_results({audio_file: session.result}, output_json, output_txt)
    return 0


def analyze_batch(
    engine: RumbleEngine,
    inputs: List[Path],
    output_json: Optional[Path] = None,
    output_txt: Optional[Path] = None,
    show_waveform: bool = False,
) -> int:
    """
    Analyze several files; failures are reported and skipped.

    Returns:
        Exit code (0 when every file succeeded, 1 otherwise)
    """
    results = engine.analyze_batch(inputs)

    successful: Dict[Path, RumbleResult] = {}
    failed: List[Path] = []
    for path, result in zip(inputs, results):
        if result is None:
            failed.append(path)
        else:
            successful[path] = result
            print_result_card(path, result, show_waveform)

    print("\n" + "=" * 60)
    print("BATCH COMPLETE")
    print("=" * 60)
    print(f"Total Files: {len(inputs)}")
    print(f"Successful: {len(successful)}")
    print(f"Failed: {len(failed)}")
    for path in failed:
        print(f"  {path.name}")

    if successful:
        save_results(successful, output_json, output_txt)

    return 0 if not failed else 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rumble",
        description="Match a stomach rumble recording to a crisp flavour",
    )
    parser.add_argument(
        "inputs",
        type=Path,
        nargs="+",
        help="Audio file(s) to analyze"
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to configuration file"
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Path to save JSON results"
    )
    parser.add_argument(
        "--output-txt",
        type=Path,
        default=None,
        help="Path to save a text report"
    )
    parser.add_argument(
        "--waveform",
        action="store_true",
        help="Print the waveform envelope under each result"
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging"
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"rumble {__version__}"
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the rumble CLI."""
    args = build_parser().parse_args(argv)

    try:
        config = load_config(str(args.config) if args.config else None)
    except ConfigurationError as e:
        print(f"Error: {e}")
        return 1

    logging_config = config.get("logging", {})
    setup_logging(
        level="DEBUG" if args.verbose else logging_config.get("level", "INFO"),
        log_format=logging_config.get("format", "text"),
        log_file=logging_config.get("file"),
    )

    try:
        engine = create_engine(config)
    except ConfigurationError as e:
        print(f"Error: {e}")
        return 1

    with engine:
        if len(args.inputs) > 1:
            return analyze_batch(
                engine,
                args.inputs,
                output_json=args.output,
                output_txt=args.output_txt,
                show_waveform=args.waveform,
            )
        return analyze_single_file(
            engine,
            args.inputs[0],
            output_json=args.output,
            output_txt=args.output_txt,
            show_waveform=args.waveform,
        )


if __name__ == "__main__":
    sys.exit(main())
