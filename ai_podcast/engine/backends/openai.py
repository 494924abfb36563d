"""
OpenAI Speech Backend - Cloud text-to-speech for podcast hosts.

Two API paths, chosen by model name:
    - "*-audio-preview" models: chat completions with the audio modality.
      The host's speaking style goes in the system prompt, audio comes
      back base64-encoded.
    - TTS models ("tts-1", "tts-1-hd", "gpt-4o-mini-tts"): the speech
      endpoint, which also honors the speed factor.

Voices:
    - alloy, ash, ballad, coral, echo, fable, nova, onyx, sage, shimmer

Requires:
    - OPENAI_API_KEY environment variable (or api_key / per-call credential)
"""

from __future__ import annotations

import base64
import binascii
import logging
import os
import threading

import openai
from openai import OpenAI

from ai_podcast.engine.base import BaseSynthesizer
from ai_podcast.errors import ConfigurationError, SynthesisBackendError

logger = logging.getLogger(__name__)


OPENAI_VOICES = {
    "alloy": "Neutral, balanced tone",
    "ash": "Clear, articulate",
    "ballad": "Soft, melodic",
    "coral": "Warm, friendly",
    "echo": "Slightly deeper voice",
    "fable": "Expressive, British accent",
    "nova": "Warm, friendly",
    "onyx": "Deep, authoritative",
    "sage": "Calm, thoughtful",
    "shimmer": "Clear, energetic",
}

# Speaking style per voice of the default hosts
SPEAKING_STYLES = {
    "onyx": "молодой техно-оптимист",
    "nova": "аналитик, любит данные",
    "echo": "скептик, видел всякое",
}


def speaking_style(voice: str) -> str:
    """Get the speaking style for a voice ("" if none is defined)."""
    return SPEAKING_STYLES.get(voice, "")


def speech_instructions(voice: str) -> str:
    """Build the system prompt that sets a host's delivery."""
    style = speaking_style(voice)
    if not style:
        return (
            "Ты участник подкаста о технологиях. "
            "Говори естественно по-русски, как обычный человек."
        )
    return (
        f"Ты {style} в подкасте о технологиях. "
        "Говори естественно по-русски, как обычный человек."
    )


class OpenAISpeechSynthesizer(BaseSynthesizer):
    """Speech synthesis through the OpenAI API.

    Example:
        synth = OpenAISpeechSynthesizer(model="tts-1")
        audio = synth.synthesize("Привет!", "nova", speed=1.1)
    """

    def __init__(
        self,
        *,
        api_key: str | None = None,
        model: str = "gpt-4o-audio-preview",
        response_format: str = "mp3",
        timeout: float = 30.0,
        max_retries: int = 2,
    ):
        """Initialize OpenAI speech backend.

        Args:
            api_key: OpenAI API key (defaults to OPENAI_API_KEY env var)
            model: Audio chat model or TTS model
            response_format: Audio format ("mp3", "wav", "opus", "aac", "flac")
            timeout: HTTP timeout per call in seconds
            max_retries: Retries performed by the SDK on transient errors
        """
        self._api_key = api_key or os.environ.get("OPENAI_API_KEY")
        if not self._api_key:
            raise ConfigurationError(
                "OpenAI API key required. Set OPENAI_API_KEY environment variable "
                "or pass api_key parameter."
            )

        self._model = model
        self._response_format = response_format
        self._timeout = timeout
        self._max_retries = max_retries

        # One client per API key; workers may share this backend
        self._clients: dict[str, OpenAI] = {}
        self._clients_lock = threading.Lock()

    @property
    def name(self) -> str:
        return "openai"

    @property
    def file_extension(self) -> str:
        return self._response_format

    @property
    def model(self) -> str:
        return self._model

    @property
    def uses_chat_audio(self) -> bool:
        return "audio-preview" in self._model

    def _get_client(self, credential: str | None = None) -> OpenAI:
        key = credential or self._api_key
        with self._clients_lock:
            client = self._clients.get(key)
            if client is None:
                client = OpenAI(
                    api_key=key,
                    timeout=self._timeout,
                    max_retries=self._max_retries,
                )
                self._clients[key] = client
        return client

    def synthesize(
        self,
        text: str,
        voice: str,
        *,
        speed: float = 1.0,
        credential: str | None = None,
    ) -> bytes:
        """Synthesize one line of dialogue."""
        if not text.strip():
            raise SynthesisBackendError(
                "text to synthesize cannot be empty", backend=self.name, voice=voice
            )

        client = self._get_client(credential)
        logger.debug(
            f"OpenAI speech: {len(text)} chars, voice={voice}, model={self._model}"
        )

        try:
            if self.uses_chat_audio:
                audio = self._chat_audio(client, text, voice)
            else:
                audio = self._speech(client, text, voice, speed)
        except openai.OpenAIError as e:
            raise SynthesisBackendError(
                f"OpenAI speech request failed: {e}",
                backend=self.name,
                voice=voice,
                details={"model": self._model},
            ) from e

        if not audio:
            raise SynthesisBackendError(
                "OpenAI returned empty audio", backend=self.name, voice=voice
            )
        return audio

    def _speech(self, client: OpenAI, text: str, voice: str, speed: float) -> bytes:
        params = {
            "model": self._model,
            "voice": voice,
            "input": text,
            "response_format": self._response_format,
            # Clamp to OpenAI's range
            "speed": max(0.25, min(4.0, speed)),
        }
        if self._model.startswith("gpt-4o"):
            params["instructions"] = speech_instructions(voice)

        response = client.audio.speech.create(**params)
        return response.content

    def _chat_audio(self, client: OpenAI, text: str, voice: str) -> bytes:
        completion = client.chat.completions.create(
            model=self._model,
            modalities=["text", "audio"],
            audio={"voice": voice, "format": self._response_format},
            store=True,
            messages=[
                {"role": "system", "content": speech_instructions(voice)},
                {"role": "user", "content": text},
            ],
        )

        if not completion.choices:
            raise SynthesisBackendError(
                "no TTS response from API", backend=self.name, voice=voice
            )

        audio = completion.choices[0].message.audio
        if audio is None or not audio.data:
            raise SynthesisBackendError(
                "TTS response carried no audio", backend=self.name, voice=voice
            )

        try:
            return base64.b64decode(audio.data, validate=True)
        except (binascii.Error, ValueError) as e:
            raise SynthesisBackendError(
                f"failed to decode audio data: {e}", backend=self.name, voice=voice
            ) from e

    def get_voices(self) -> list[str]:
        """Get available OpenAI voices."""
        return list(OPENAI_VOICES.keys())
