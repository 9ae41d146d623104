"""Tests for spoken score announcements."""

import asyncio

import pytest

from scoreboard.models import MatchState
from scoreboard.services import AnnouncementOrchestrator, AsyncioScheduler
from scoreboard.services.audio_output import NullAudioOutput

from conftest import FakeAudioOutput, FakeSpeech


@pytest.fixture
def state():
    return MatchState(home_name="BM Granollers", away_name="FC Barcelona")


def test_second_request_while_in_flight_is_dropped(state, scheduler, speech, audio):
    announcer = AnnouncementOrchestrator(state, scheduler, speech, audio)

    assert announcer.announce(1, 0)
    assert announcer.is_announcing
    assert not announcer.announce(2, 0)
    assert announcer.dropped == 1

    scheduler.run_all_spawned()

    assert speech.calls == ["Di en castellano: BM Granollers 1, FC Barcelona 0"]
    assert len(audio.buffers) == 1
    assert not announcer.is_announcing


def test_next_request_allowed_after_completion(state, scheduler, speech, audio):
    announcer = AnnouncementOrchestrator(state, scheduler, speech, audio)

    announcer.announce(1, 0)
    scheduler.run_all_spawned()
    assert announcer.announce(1, 1)
    scheduler.run_all_spawned()

    assert len(speech.calls) == 2


def test_failure_is_swallowed_and_releases_token(state, scheduler, audio):
    speech = FakeSpeech(error=ConnectionError("offline"))
    announcer = AnnouncementOrchestrator(state, scheduler, speech, audio)

    announcer.announce(3, 2)
    scheduler.run_all_spawned()

    assert not announcer.is_announcing
    assert audio.buffers == []
    assert announcer.announce(4, 2)


def test_empty_audio_payload_plays_nothing(state, scheduler, audio):
    speech = FakeSpeech(audio=None)
    announcer = AnnouncementOrchestrator(state, scheduler, speech, audio)

    announcer.announce(1, 0)
    scheduler.run_all_spawned()

    assert len(speech.calls) == 1
    assert audio.buffers == []
    assert not announcer.is_announcing


def test_decoded_buffer_matches_tts_format(state, scheduler, audio):
    speech = FakeSpeech(audio=b"\x00\x40" * 2400)
    announcer = AnnouncementOrchestrator(state, scheduler, speech, audio)

    announcer.announce(1, 0)
    scheduler.run_all_spawned()

    buffer = audio.buffers[0]
    assert buffer.sample_rate == 24000
    assert buffer.channels == 1
    assert buffer.frames == 2400
    assert buffer.duration_s == pytest.approx(0.1)


def test_disabled_without_collaborators(state, scheduler, speech):
    announcer = AnnouncementOrchestrator(state, scheduler, speech, None)

    assert not announcer.announce(1, 0)
    assert scheduler.spawned == []


def test_overlapping_requests_on_a_real_loop():
    state = MatchState()

    class SlowSpeech(FakeSpeech):
        async def synthesize_speech(self, text):
            await asyncio.sleep(0.05)
            return await super().synthesize_speech(text)

    async def scenario():
        speech = SlowSpeech()
        output = FakeAudioOutput()
        scheduler = AsyncioScheduler()
        announcer = AnnouncementOrchestrator(state, scheduler, speech, output)

        announcer.announce(1, 0)
        announcer.announce(2, 0)
        announcer.announce(3, 0)
        while scheduler.pending_tasks:
            await asyncio.sleep(0.01)
        return speech, output

    speech, output = asyncio.run(scenario())

    assert speech.calls == ["Di en castellano: Home 1, Away 0"]
    assert len(output.buffers) == 1


def test_muted_output_skips_speech_synthesis(state, scheduler, speech):
    announcer = AnnouncementOrchestrator(state, scheduler, speech, NullAudioOutput())

    assert not announcer.enabled
    assert not announcer.announce(1, 0)
    assert scheduler.spawned == []
    assert speech.calls == []
