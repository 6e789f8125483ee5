"""Tests for upload validation and decoding."""

import hashlib

import numpy as np
import pytest

from conftest import SAMPLE_RATE, sine, write_wav
from rumble.core.loader import AudioLoader, create_audio_loader
from rumble.core.models import DecodedAudio
from rumble.utils.errors import AudioLoadError, FileTooLargeError, UnsupportedFormatError


class TestAudioLoader:
    def test_load_mono_wav(self, silent_wav):
        audio = AudioLoader().load(silent_wav)

        assert isinstance(audio, DecodedAudio)
        assert audio.samples.ndim == 1
        assert audio.num_samples == 1000
        assert audio.sample_rate == SAMPLE_RATE
        assert audio.duration == pytest.approx(0.125)
        assert audio.media_type.startswith("audio/")
        assert audio.original_subtype == "PCM_16"

    def test_stereo_downmixed_to_mono(self, tmp_path):
        left = sine(200, amplitude=0.4, seconds=0.5)
        stereo = np.stack([left, -left], axis=1)
        path = write_wav(tmp_path / "stereo.wav", stereo, subtype="FLOAT")

        audio = AudioLoader().load(path)

        assert audio.samples.ndim == 1
        assert audio.num_samples == left.shape[0]
        assert np.allclose(audio.samples, 0.0, atol=1e-6)

    def test_resamples_when_target_rate_set(self, tmp_path):
        path = write_wav(tmp_path / "tone.wav", sine(100, seconds=1.0))
        audio = AudioLoader(target_sr=4000).load(path)
        assert audio.sample_rate == 4000
        assert audio.duration == pytest.approx(1.0, abs=0.01)

    def test_file_hash(self, silent_wav):
        audio = AudioLoader().load(silent_wav)
        assert audio.file_hash == hashlib.sha256(silent_wav.read_bytes()).hexdigest()

    def test_clipped_audio_normalized(self, tmp_path):
        path = write_wav(tmp_path / "hot.wav", sine(100, amplitude=2.0), subtype="FLOAT")
        audio = AudioLoader().load(path)
        assert np.max(np.abs(audio.samples)) == pytest.approx(1.0)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            AudioLoader().load(tmp_path / "nope.wav")

    def test_non_audio_extension_rejected(self, tmp_path):
        path = tmp_path / "notes.txt"
        path.write_text("not audio")
        with pytest.raises(UnsupportedFormatError) as exc_info:
            AudioLoader().load(path)
        assert exc_info.value.media_type == "text/plain"

    def test_declared_media_type_wins(self, silent_wav):
        with pytest.raises(UnsupportedFormatError):
            AudioLoader().load(silent_wav, media_type="application/octet-stream")

        audio = AudioLoader().load(silent_wav, media_type="audio/wav")
        assert audio.media_type == "audio/wav"

    def test_file_too_large(self, silent_wav):
        with pytest.raises(FileTooLargeError) as exc_info:
            AudioLoader(max_file_size=100).load(silent_wav)
        assert exc_info.value.max_size == 100
        assert exc_info.value.file_size == silent_wav.stat().st_size

    def test_corrupt_file(self, tmp_path):
        path = tmp_path / "broken.wav"
        path.write_bytes(b"RIFF\x00\x00garbage" * 10)
        with pytest.raises(AudioLoadError):
            AudioLoader().load(path)


class TestCreateAudioLoader:
    def test_defaults(self):
        loader = create_audio_loader()
        assert loader.max_file_size == 50 * 1024 * 1024
        assert loader.target_sr is None

    def test_from_config(self):
        loader = create_audio_loader({"max_file_size": 1024, "target_sample_rate": 16000})
        assert loader.max_file_size == 1024
        assert loader.target_sr == 16000
