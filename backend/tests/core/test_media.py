import io
import wave

import pytest

from app.core.media import extension_for_mime, parse_data_uri, pcm_to_wav, to_data_uri


class TestDataUri:
    def test_encode(self):
        assert to_data_uri(b"abc", "image/png") == "data:image/png;base64,YWJj"

    def test_parse(self):
        assert parse_data_uri("data:audio/wav;base64,YWJj") == ("audio/wav", b"abc")

    @pytest.mark.parametrize("value", ["", "error", "http://example.com/a.png", "data:image/png,raw"])
    def test_parse_rejects_non_data_uri(self, value):
        with pytest.raises(ValueError):
            parse_data_uri(value)


class TestPcmToWav:
    def test_header_matches_tts_format(self):
        pcm = b"\x10\x00" * 480
        data = pcm_to_wav(pcm)

        assert data[:4] == b"RIFF"
        with wave.open(io.BytesIO(data), "rb") as wf:
            assert wf.getnchannels() == 1
            assert wf.getsampwidth() == 2
            assert wf.getframerate() == 24000
            assert wf.getnframes() == 480

    def test_custom_rate(self):
        with wave.open(io.BytesIO(pcm_to_wav(b"\x00\x00" * 10, rate=16000)), "rb") as wf:
            assert wf.getframerate() == 16000


def test_extension_for_mime():
    assert extension_for_mime("image/png") == ".png"
    assert extension_for_mime("audio/wav") == ".wav"
    assert extension_for_mime("application/x-unknown") == ".bin"
