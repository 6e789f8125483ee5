"""
Audio loader for the Rumble flavour matcher.

Validates an uploaded file and decodes it to mono float PCM.
"""

import hashlib
import logging
import mimetypes
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import librosa
import numpy as np
import soundfile as sf

from rumble.core.models import DecodedAudio
from rumble.utils.errors import AudioLoadError, FileTooLargeError, UnsupportedFormatError


# Constants
MAX_FILE_SIZE: int = 52428800  # 50 MB
AUDIO_MEDIA_PREFIX: str = "audio/"

logger = logging.getLogger(__name__)


class AudioLoader:
    """
    Loads uploaded audio files and creates DecodedAudio instances.

    Stateless - can be used concurrently.
    """

    def __init__(
        self,
        max_file_size: int = MAX_FILE_SIZE,
        target_sr: Optional[int] = None,
    ):
        """
        Initialize loader with configuration.

        Args:
            max_file_size: Maximum file size in bytes
            target_sr: Resample to this rate; None keeps the file's own rate
        """
        self.max_file_size = max_file_size
        self.target_sr = target_sr

    def load(self, file_path: Path, media_type: Optional[str] = None) -> DecodedAudio:
        """
        Load audio file and create DecodedAudio.

        Args:
            file_path: Path to audio file
            media_type: Declared media type of the upload; guessed from
                        the file name when omitted

        Returns:
            DecodedAudio: Mono samples and metadata

        Raises:
            FileNotFoundError: File doesn't exist
            UnsupportedFormatError: Media type is not audio/*
            FileTooLargeError: File exceeds size limit
            AudioLoadError: Decoding failed or produced no samples
        """
        file_path = Path(file_path)

        # Step 1: Validate upload
        media_type = self._validate_file(file_path, media_type)

        # Step 2: Container metadata
        metadata = self._load_metadata(file_path)

        # Step 3: Decode to mono
        samples, sample_rate = self._load_audio_data(file_path)

        # Step 4: Validate samples
        samples = self._validate_audio_data(samples, file_path)

        return DecodedAudio(
            file_path=file_path,
            file_hash=self._compute_file_hash(file_path),
            media_type=media_type,
            samples=samples,
            sample_rate=int(sample_rate),
            duration=samples.shape[0] / sample_rate,
            original_format=metadata.get('format'),
            original_subtype=metadata.get('subtype'),
        )

    def _validate_file(self, file_path: Path, media_type: Optional[str]) -> str:
        """Check existence, media type and size. Returns the media type."""
        if not file_path.exists():
            raise FileNotFoundError(f"Audio file not found: {file_path}")

        if media_type is None:
            media_type, _ = mimetypes.guess_type(file_path.name)

        if not media_type or not media_type.startswith(AUDIO_MEDIA_PREFIX):
            raise UnsupportedFormatError(
                f"Please upload an audio file (.wav, .mp3, .m4a, etc.), "
                f"got {media_type or 'unknown type'}",
                media_type=media_type,
            )

        file_size = file_path.stat().st_size
        if file_size > self.max_file_size:
            raise FileTooLargeError(
                f"File too large: {file_size / 1024 / 1024:.1f} MB. "
                f"Maximum: {self.max_file_size / 1024 / 1024:.1f} MB",
                file_size=file_size,
                max_size=self.max_file_size,
            )

        return media_type

    def _load_metadata(self, file_path: Path) -> Dict[str, Any]:
        """Read container metadata; empty for formats soundfile can't open."""
        try:
            info = sf.info(str(file_path))
        except (RuntimeError, sf.SoundFileError) as e:
            # MP3/M4A without libsndfile support are still decodable by librosa
            logger.warning(f"Could not read metadata with soundfile: {e}")
            return {}

        logger.info(
            f"Loading audio: {info.samplerate} Hz, {info.channels} ch, {info.subtype}"
        )
        return {
            'format': info.format,
            'subtype': info.subtype,
            'sample_rate': info.samplerate,
            'channels': info.channels,
        }

    def _load_audio_data(self, file_path: Path) -> Tuple[np.ndarray, int]:
        """Decode and downmix to mono."""
        try:
            samples, sample_rate = librosa.load(
                str(file_path),
                sr=self.target_sr,
                mono=True,
                dtype=np.float32,
            )
        except Exception as e:
            raise AudioLoadError(
                f"Failed to decode audio from {file_path}: {e}",
                file_path=str(file_path),
            ) from e

        return samples, sample_rate

    def _validate_audio_data(self, samples: np.ndarray, file_path: Path) -> np.ndarray:
        """Reject empty audio, warn on silence and rescale clipped audio."""
        if samples.size == 0:
            raise AudioLoadError(f"Audio file is empty: {file_path}", file_path=str(file_path))

        rms = np.sqrt(np.mean(samples ** 2))
        if rms < 1e-6:
            logger.warning(f"Audio appears to be silent: {file_path}")

        max_abs = np.max(np.abs(samples))
        if max_abs > 1.0:
            logger.warning(
                f"Audio contains clipping (max: {max_abs:.2f}), normalizing: {file_path}"
            )
            samples = samples / max_abs

        return samples

    def _compute_file_hash(self, file_path: Path) -> str:
        """Compute SHA-256 hash of file content."""
        sha256 = hashlib.sha256()

        with open(file_path, 'rb') as f:
            for chunk in iter(lambda: f.read(8192), b''):
                sha256.update(chunk)

        return sha256.hexdigest()


def create_audio_loader(config: Optional[Dict[str, Any]] = None) -> AudioLoader:
    """
    Factory function to create AudioLoader from the `upload` config section.
    """
    if config is None:
        config = {}

    return AudioLoader(
        max_file_size=config.get('max_file_size', MAX_FILE_SIZE),
        target_sr=config.get('target_sample_rate'),
    )
