"""Protocol interfaces for the remote collaborators used by the orchestrators."""

from __future__ import annotations

from typing import Optional, Protocol

from ..models import VenueInfo


class SpeechSynthesizer(Protocol):
    async def synthesize_speech(self, text: str) -> Optional[bytes]: ...


class VenueLocator(Protocol):
    async def lookup_venue(self, team_name: str) -> Optional[VenueInfo]: ...
