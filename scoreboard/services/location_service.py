"""Venue lookup for team names, debounced per team."""

import logging
from dataclasses import dataclass
from typing import Dict, Optional

from ..models import Team, VenueInfo
from ..utils.constants import (
    LOOKUP_DEBOUNCE_SECONDS,
    MIN_LOOKUP_NAME_LENGTH,
    PLACEHOLDER_NAMES,
)
from .interfaces import VenueLocator
from .scheduler import Scheduler, TimerHandle

logger = logging.getLogger(__name__)


def is_lookup_candidate(name: str) -> bool:
    """Placeholders ("Home"/"Away") and names of two characters or fewer are not looked up."""
    trimmed = (name or "").strip()
    if len(trimmed) < MIN_LOOKUP_NAME_LENGTH:
        return False
    return trimmed.lower() not in PLACEHOLDER_NAMES


@dataclass
class _TeamLookup:
    generation: int = 0
    timer: Optional[TimerHandle] = None
    is_fetching: bool = False
    venue: Optional[VenueInfo] = None


class LocationLookupOrchestrator:
    """
    Resolves the venue of each team after its name stops changing.

    Every edit bumps the team's generation and restarts its debounce timer.
    A lookup remembers the generation it was started for; a result that
    comes back after a newer edit is discarded.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        locator: Optional[VenueLocator],
        debounce_s: float = LOOKUP_DEBOUNCE_SECONDS,
    ):
        self.scheduler = scheduler
        self.locator = locator
        self.debounce_s = debounce_s
        self._teams: Dict[Team, _TeamLookup] = {team: _TeamLookup() for team in Team}
        self.requests_issued = 0

    def venue(self, team: Team) -> Optional[VenueInfo]:
        return self._teams[team].venue

    def is_fetching(self, team: Team) -> bool:
        return self._teams[team].is_fetching

    def on_name_changed(self, team: Team, name: str) -> None:
        """Restart the debounce for ``team``; ineligible names clear its venue."""
        lookup = self._teams[team]
        self._cancel_timer(lookup)
        lookup.generation += 1
        lookup.is_fetching = False

        if self.locator is None:
            return
        if not is_lookup_candidate(name):
            lookup.venue = None
            return

        generation = lookup.generation
        lookup.timer = self.scheduler.call_later(
            self.debounce_s, lambda: self._fire(team, name, generation)
        )

    def close(self) -> None:
        """Teardown: cancel pending timers and orphan any outstanding lookup."""
        for lookup in self._teams.values():
            self._cancel_timer(lookup)
            lookup.generation += 1
            lookup.is_fetching = False

    def _fire(self, team: Team, name: str, generation: int) -> None:
        lookup = self._teams[team]
        lookup.timer = None
        if generation != lookup.generation:
            return
        lookup.is_fetching = True
        lookup.venue = None
        self.requests_issued += 1
        logger.debug("Looking up venue for %s team %r", team.value, name)
        self.scheduler.spawn(self._lookup(team, name, generation))

    async def _lookup(self, team: Team, name: str, generation: int) -> None:
        venue: Optional[VenueInfo] = None
        try:
            venue = await self.locator.lookup_venue(name)
        except Exception:
            logger.warning("Venue lookup failed for %r", name, exc_info=True)

        lookup = self._teams[team]
        if generation != lookup.generation:
            logger.debug("Discarding stale venue result for %r", name)
            return
        lookup.venue = venue
        lookup.is_fetching = False

    @staticmethod
    def _cancel_timer(lookup: _TeamLookup) -> None:
        if lookup.timer is not None:
            lookup.timer.cancel()
            lookup.timer = None
