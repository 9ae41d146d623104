"""
Thin HTTP client and collaborators for the Gemini generative-language API.

The scoreboard uses two calls: text-to-speech for score announcements and
Maps-grounded generation for team venues. Both are blocking ``requests``
calls, run off the event loop with ``asyncio.to_thread``.
"""

from __future__ import annotations

import asyncio
import base64
import binascii
from typing import Any, Dict, List, Optional

import requests

from ..models import VenueInfo
from ..utils.constants import (
    GEMINI_API_BASE,
    LOCATION_MODEL,
    SPEECH_MODEL,
    SPEECH_VOICE,
    VENUE_PROMPT,
)


def get_nested(obj: Any, path: List[Any], default=None):
    """Safely walk dict keys / list indexes by path; return default if missing."""
    cur = obj
    for k in path:
        if isinstance(k, int):
            if not isinstance(cur, list) or not -len(cur) <= k < len(cur):
                return default
            cur = cur[k]
        else:
            if not isinstance(cur, dict):
                return default
            cur = cur.get(k)
    return cur if cur is not None else default


class GeminiClient:
    """A minimal client for ``models/{model}:generateContent``."""

    def __init__(self, api_key: str, base_url: str = GEMINI_API_BASE, timeout: float = 30.0) -> None:
        """Store the credentials and build request headers."""
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._headers = {
            "x-goog-api-key": api_key,
            "Content-Type": "application/json",
            "User-Agent": "handball-scoreboard/1.0",
        }

    def generate_content(self, model: str, body: Dict[str, Any]) -> Dict[str, Any]:
        """
        POST a generateContent request and return the parsed JSON.

        Raises:
            requests.HTTPError on non-2xx responses.
        """
        url = f"{self.base_url}/v1beta/models/{model}:generateContent"
        r = requests.post(url, json=body, headers=self._headers, timeout=self.timeout)
        r.raise_for_status()
        return r.json()


class GeminiSpeechSynthesizer:
    """Text-to-speech; returns raw 16-bit PCM (24 kHz mono) or None."""

    def __init__(self, client: GeminiClient, model: str = SPEECH_MODEL, voice: str = SPEECH_VOICE) -> None:
        self.client = client
        self.model = model
        self.voice = voice

    def build_request(self, text: str) -> Dict[str, Any]:
        return {
            "contents": [{"parts": [{"text": text}]}],
            "generationConfig": {
                "responseModalities": ["AUDIO"],
                "speechConfig": {
                    "voiceConfig": {"prebuiltVoiceConfig": {"voiceName": self.voice}},
                },
            },
        }

    @staticmethod
    def extract_audio(payload: Dict[str, Any]) -> Optional[bytes]:
        encoded = get_nested(payload, ["candidates", 0, "content", "parts", 0, "inlineData", "data"])
        if not isinstance(encoded, str) or not encoded:
            return None
        try:
            return base64.b64decode(encoded, validate=True) or None
        except (binascii.Error, ValueError):
            return None

    def synthesize(self, text: str) -> Optional[bytes]:
        payload = self.client.generate_content(self.model, self.build_request(text))
        return self.extract_audio(payload)

    async def synthesize_speech(self, text: str) -> Optional[bytes]:
        return await asyncio.to_thread(self.synthesize, text)


class GeminiVenueLocator:
    """Finds a team's usual venue through the Google Maps grounding tool."""

    def __init__(self, client: GeminiClient, model: str = LOCATION_MODEL, prompt_template: str = VENUE_PROMPT) -> None:
        self.client = client
        self.model = model
        self.prompt_template = prompt_template

    def build_request(self, team_name: str) -> Dict[str, Any]:
        return {
            "contents": [{"parts": [{"text": self.prompt_template.format(team_name=team_name)}]}],
            "tools": [{"googleMaps": {}}],
        }

    @staticmethod
    def extract_venue(payload: Dict[str, Any], team_name: str) -> Optional[VenueInfo]:
        chunks = get_nested(payload, ["candidates", 0, "groundingMetadata", "groundingChunks"], [])
        if not isinstance(chunks, list):
            return None
        for chunk in chunks:
            maps = chunk.get("maps") if isinstance(chunk, dict) else None
            if not isinstance(maps, dict):
                continue
            uri = maps.get("uri")
            if not uri:
                # Only the first maps chunk is considered
                return None
            return VenueInfo(uri=str(uri), title=str(maps.get("title") or team_name))
        return None

    def lookup(self, team_name: str) -> Optional[VenueInfo]:
        payload = self.client.generate_content(self.model, self.build_request(team_name))
        return self.extract_venue(payload, team_name)

    async def lookup_venue(self, team_name: str) -> Optional[VenueInfo]:
        return await asyncio.to_thread(self.lookup, team_name)
