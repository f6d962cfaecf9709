from __future__ import annotations

import re

from twilio.twiml.voice_response import Gather, VoiceResponse

VOICE_LOCALES = {"en": "en-US", "es": "es-ES"}


def voice_locale(language: str) -> str:
    return VOICE_LOCALES.get(language, VOICE_LOCALES["en"])


def format_for_speech(text: str) -> str:
    """Spell out the euro sign for the text-to-speech voice and collapse whitespace."""
    spoken = re.sub(r"\s*€", " euros", text)
    return re.sub(r"\s+", " ", spoken).strip()


class TwimlBuilder:
    """Small wrapper over VoiceResponse that always uses the configured voice and locale."""

    def __init__(self, voice: str = "alice") -> None:
        self._voice = voice

    def say(self, target: VoiceResponse | Gather, text: str, language: str) -> None:
        target.say(format_for_speech(text), voice=self._voice, language=voice_locale(language))

    def gather(self, response: VoiceResponse, action: str, language: str) -> Gather:
        gather = Gather(
            input="speech",
            language=voice_locale(language),
            speech_timeout="auto",
            action=action,
            method="POST",
            enhanced=True,
        )
        response.append(gather)
        return gather

    def prompt(self, text: str, language: str, action: str) -> VoiceResponse:
        """Say text, then listen for the next utterance and post it to action."""
        response = VoiceResponse()
        self.say(response, text, language)
        self.gather(response, action, language)
        return response

    def farewell(self, text: str, language: str, closing: str | None = None) -> VoiceResponse:
        response = VoiceResponse()
        self.say(response, text, language)
        if closing:
            self.say(response, closing, language)
        response.hangup()
        return response
