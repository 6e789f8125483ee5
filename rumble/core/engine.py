"""
Analysis engine for the Rumble flavour matcher.

Orchestrates decoding, feature extraction, classification and the
display waveform for one clip at a time.
"""

import logging
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Any, Dict, List, Optional

import numpy as np

from rumble.core.classifier import FlavourClassifier, create_classifier
from rumble.core.features import FeatureExtractor, Samples
from rumble.core.loader import AudioLoader, create_audio_loader
from rumble.core.models import RumbleResult
from rumble.utils.config import CONFIG_SCHEMA, ConfigManager
from rumble.visualization.waveform import DEFAULT_POINTS, downsample


class RumbleEngine:
    """
    Main analysis engine - wires the loader, extractor and classifier.

    Each analysis is independent and shares no mutable state; the
    thread pool only serves analyze_batch().
    """

    def __init__(
        self,
        loader: AudioLoader,
        extractor: FeatureExtractor,
        classifier: FlavourClassifier,
        waveform_points: int = DEFAULT_POINTS,
        max_workers: int = 4,
    ):
        """
        Initialize analysis engine.

        Args:
            loader: AudioLoader instance
            extractor: FeatureExtractor instance
            classifier: FlavourClassifier bound to a catalog
            waveform_points: Number of bars in the display waveform
            max_workers: Max parallel workers for batch analysis
        """
        self.loader = loader
        self.extractor = extractor
        self.classifier = classifier
        self.waveform_points = waveform_points
        self.executor = ThreadPoolExecutor(max_workers=max_workers)
        self.logger = logging.getLogger('engine')

    def analyze(self, file_path: Path, media_type: Optional[str] = None) -> RumbleResult:
        """
        Analyze an uploaded audio file.

        Args:
            file_path: Path to audio file
            media_type: Declared media type, if the upload carried one

        Returns:
            RumbleResult: Features, matched flavour and waveform
        """
        file_path = Path(file_path)
        start_time = time.time()

        self.logger.info(f"Loading audio: {file_path}")
        audio = self.loader.load(file_path, media_type=media_type)

        result = self._analyze(
            audio.samples,
            audio.sample_rate,
            audio.duration,
            start_time,
            file_path=file_path,
            audio_hash=audio.file_hash,
        )
        self.logger.info(
            f"{file_path.name} -> {result.flavour.id} in {result.processing_time:.3f}s"
        )
        return result

    def analyze_samples(
        self,
        samples: Samples,
        sample_rate: int,
        duration: Optional[float] = None,
    ) -> RumbleResult:
        """
        Analyze samples the caller has already decoded.

        Args:
            samples: Mono amplitudes in [-1, 1]
            sample_rate: Samples per second
            duration: Optional known duration in seconds

        Returns:
            RumbleResult: Result without file path or hash
        """
        return self._analyze(samples, sample_rate, duration, time.time())

    def _analyze(
        self,
        samples: Samples,
        sample_rate: int,
        duration: Optional[float],
        start_time: float,
        file_path: Optional[Path] = None,
        audio_hash: Optional[str] = None,
    ) -> RumbleResult:
        analysis = self.extractor.extract(samples, sample_rate, duration)
        flavour = self.classifier.classify(analysis)

        # Clips shorter than the bar count get one bar per sample
        samples = np.asarray(samples, dtype=np.float64)
        points = min(self.waveform_points, samples.shape[0])
        if points < self.waveform_points:
            self.logger.debug(
                f"Clip has {samples.shape[0]} samples; waveform reduced to {points} bars"
            )
        waveform = downsample(samples, points)

        return RumbleResult(
            analysis=analysis,
            flavour=flavour,
            waveform=waveform,
            processing_time=time.time() - start_time,
            file_path=file_path,
            audio_hash=audio_hash,
        )

    def analyze_batch(self, file_paths: List[Path]) -> List[Optional[RumbleResult]]:
        """
        Analyze multiple files.

        Args:
            file_paths: List of file paths

        Returns:
            List of results in input order; None where a file failed
        """
        self.logger.info(f"Analyzing batch of {len(file_paths)} files")

        futures = {
            self.executor.submit(self.analyze, path): index
            for index, path in enumerate(file_paths)
        }

        results: List[Optional[RumbleResult]] = [None] * len(file_paths)
        for future in as_completed(futures):
            index = futures[future]
            try:
                results[index] = future.result()
            except Exception as e:
                self.logger.error(f"Failed to analyze {file_paths[index]}: {e}")

        return results

    def shutdown(self) -> None:
        """Shutdown thread pool gracefully."""
        self.logger.debug("Shutting down analysis engine")
        self.executor.shutdown(wait=True)

    def __enter__(self) -> "RumbleEngine":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.shutdown()


def create_engine(config: Dict[str, Any]) -> RumbleEngine:
    """
    Factory function to create a fully configured engine.

    Args:
        config: Configuration dict (see get_default_config())

    Returns:
        RumbleEngine: Configured engine

    Raises:
        ConfigurationError: If a value is out of range
    """
    ConfigManager(config).validate(CONFIG_SCHEMA)

    loader = create_audio_loader(config.get('upload', {}))
    classifier = create_classifier(config)

    waveform_points = config.get('waveform', {}).get('points', DEFAULT_POINTS)
    max_workers = config.get('performance', {}).get('max_workers', 4)

    return RumbleEngine(
        loader=loader,
        extractor=FeatureExtractor(),
        classifier=classifier,
        waveform_points=waveform_points,
        max_workers=max_workers,
    )
