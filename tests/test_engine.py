"""Tests for the engine module."""

import base64
import io
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import numpy as np
import openai
import pytest
import soundfile as sf

from ai_podcast.engine import (
    BaseSynthesizer,
    SpeechSynthesizer,
    list_synthesizers,
    load_synthesizer,
)
from ai_podcast.engine.backends import MockSynthesizer, OpenAISpeechSynthesizer
from ai_podcast.engine.backends.openai import speech_instructions
from ai_podcast.errors import ConfigurationError, SynthesisBackendError
from ai_podcast.testing import ScriptedSynthesizer


def chat_audio_response(data: bytes):
    encoded = base64.b64encode(data).decode()
    message = SimpleNamespace(audio=SimpleNamespace(data=encoded))
    return SimpleNamespace(choices=[SimpleNamespace(message=message)])


class TestMockSynthesizer:
    """Tests for MockSynthesizer."""

    def test_properties(self):
        synth = MockSynthesizer()
        assert synth.name == "mock"
        assert synth.file_extension == "wav"
        assert synth.sample_rate == 24000

    def test_synthesize_returns_wav(self):
        synth = MockSynthesizer()

        audio = synth.synthesize("Привет всем слушателям", "nova")
        data, sample_rate = sf.read(io.BytesIO(audio))

        assert audio[:4] == b"RIFF"
        assert sample_rate == 24000
        assert len(data) == int(3 * 0.15 * 24000)

    def test_silence(self):
        samples = MockSynthesizer(generate_silence=True).render("Hello", "nova")
        assert np.all(samples == 0)

    def test_tone(self):
        samples = MockSynthesizer(generate_silence=False).render("Hello", "onyx")
        assert np.any(samples != 0)

    def test_speed_shortens_audio(self):
        synth = MockSynthesizer()
        normal = synth.render("one two three four", "nova", speed=1.0)
        fast = synth.render("one two three four", "nova", speed=1.2)
        assert len(fast) < len(normal)

    def test_supports_any_voice(self):
        assert MockSynthesizer().supports_voice("anything")

    def test_satisfies_protocol(self):
        assert isinstance(MockSynthesizer(), SpeechSynthesizer)
        assert isinstance(MockSynthesizer(), BaseSynthesizer)
        assert isinstance(ScriptedSynthesizer(), SpeechSynthesizer)


class TestOpenAISpeechSynthesizer:
    """Tests for the OpenAI backend with a mocked SDK client."""

    @pytest.fixture
    def client(self):
        with patch("ai_podcast.engine.backends.openai.OpenAI") as factory:
            client = MagicMock()
            factory.return_value = client
            client.factory = factory
            yield client

    def test_requires_api_key(self, monkeypatch):
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)
        with pytest.raises(ConfigurationError):
            OpenAISpeechSynthesizer()

    def test_chat_audio_model(self, client):
        client.chat.completions.create.return_value = chat_audio_response(b"mp3-bytes")
        synth = OpenAISpeechSynthesizer(api_key="sk-test")

        audio = synth.synthesize("Привет!", "onyx")

        assert audio == b"mp3-bytes"
        kwargs = client.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "gpt-4o-audio-preview"
        assert kwargs["modalities"] == ["text", "audio"]
        assert kwargs["audio"] == {"voice": "onyx", "format": "mp3"}
        assert kwargs["messages"][0]["content"] == speech_instructions("onyx")
        assert "техно-оптимист" in kwargs["messages"][0]["content"]
        assert kwargs["messages"][1] == {"role": "user", "content": "Привет!"}

    def test_speech_endpoint_clamps_speed(self, client):
        client.audio.speech.create.return_value = SimpleNamespace(content=b"abc")
        synth = OpenAISpeechSynthesizer(api_key="sk-test", model="tts-1")

        assert synth.synthesize("Hello", "nova", speed=10.0) == b"abc"

        kwargs = client.audio.speech.create.call_args.kwargs
        assert kwargs["speed"] == 4.0
        assert kwargs["voice"] == "nova"
        assert kwargs["response_format"] == "mp3"
        assert "instructions" not in kwargs

    def test_instructions_for_gpt4o_tts(self, client):
        client.audio.speech.create.return_value = SimpleNamespace(content=b"abc")
        synth = OpenAISpeechSynthesizer(api_key="sk-test", model="gpt-4o-mini-tts")

        synth.synthesize("Hello", "echo", speed=0.9)

        kwargs = client.audio.speech.create.call_args.kwargs
        assert kwargs["speed"] == 0.9
        assert "скептик" in kwargs["instructions"]

    def test_credential_selects_client(self, client):
        client.chat.completions.create.return_value = chat_audio_response(b"x")
        synth = OpenAISpeechSynthesizer(api_key="sk-default")

        synth.synthesize("one", "nova")
        synth.synthesize("two", "nova")
        synth.synthesize("three", "nova", credential="sk-other")

        keys = [c.kwargs["api_key"] for c in client.factory.call_args_list]
        assert keys == ["sk-default", "sk-other"]

    def test_sdk_error_wrapped(self, client):
        client.chat.completions.create.side_effect = openai.OpenAIError("boom")
        synth = OpenAISpeechSynthesizer(api_key="sk-test")

        with pytest.raises(SynthesisBackendError) as excinfo:
            synth.synthesize("Hello", "nova")

        assert excinfo.value.backend == "openai"
        assert excinfo.value.voice == "nova"
        assert isinstance(excinfo.value.__cause__, openai.OpenAIError)

    def test_no_choices(self, client):
        client.chat.completions.create.return_value = SimpleNamespace(choices=[])
        synth = OpenAISpeechSynthesizer(api_key="sk-test")

        with pytest.raises(SynthesisBackendError, match="no TTS response"):
            synth.synthesize("Hello", "nova")

    def test_invalid_base64(self, client):
        message = SimpleNamespace(audio=SimpleNamespace(data="not base64!!"))
        client.chat.completions.create.return_value = SimpleNamespace(
            choices=[SimpleNamespace(message=message)]
        )
        synth = OpenAISpeechSynthesizer(api_key="sk-test")

        with pytest.raises(SynthesisBackendError, match="decode"):
            synth.synthesize("Hello", "nova")

    def test_empty_text_rejected(self, client):
        synth = OpenAISpeechSynthesizer(api_key="sk-test")
        with pytest.raises(SynthesisBackendError):
            synth.synthesize("   ", "nova")
        client.chat.completions.create.assert_not_called()

    def test_voices(self, client):
        synth = OpenAISpeechSynthesizer(api_key="sk-test")
        assert {"onyx", "nova", "echo"} <= set(synth.get_voices())
        assert synth.supports_voice("nova")
        assert not synth.supports_voice("af_bella")

    def test_unknown_voice_gets_generic_instructions(self):
        assert "участник подкаста" in speech_instructions("alloy")


class TestLoadSynthesizer:
    """Tests for backend loading."""

    def test_load_mock(self):
        assert isinstance(load_synthesizer("mock"), MockSynthesizer)

    def test_load_openai(self, monkeypatch):
        with patch("ai_podcast.engine.backends.openai.OpenAI"):
            synth = load_synthesizer("openai", api_key="sk-test", model="tts-1")
        assert isinstance(synth, OpenAISpeechSynthesizer)
        assert synth.model == "tts-1"

    def test_auto_without_key_uses_mock(self, monkeypatch):
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)
        assert isinstance(load_synthesizer("auto"), MockSynthesizer)

    def test_auto_with_key_uses_openai(self):
        synth = load_synthesizer("auto", api_key="sk-test")
        assert isinstance(synth, OpenAISpeechSynthesizer)

    def test_unknown_backend(self):
        with pytest.raises(ValueError):
            load_synthesizer("kokoro")

    def test_list_synthesizers(self, monkeypatch):
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)
        assert list_synthesizers() == ["mock"]
        monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
        assert list_synthesizers() == ["mock", "openai"]
