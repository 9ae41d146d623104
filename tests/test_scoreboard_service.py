"""Tests for the scoreboard session facade."""

import json
import threading

from scoreboard.models import MatchState, Team
from scoreboard.services import PersistenceService, ScoreboardSession

from conftest import CountingStore, FailingStore


def test_decrement_at_zero_is_rejected_without_side_effects(session, scheduler, store, speech):
    writes_before = len(store.writes)

    assert not session.change_score(Team.HOME, -1)
    scheduler.flush()

    assert session.match_state.home_score == 0
    assert scheduler.spawned == []
    assert len(store.writes) == writes_before
    assert speech.calls == []


def test_accepted_score_change_persists_and_announces(session, scheduler, store, speech):
    assert session.change_score(Team.AWAY, 1)
    assert session.snapshot()["is_announcing"]
    scheduler.run_all_spawned()

    saved = json.loads(store.get("handballScoreboardState"))
    assert saved["visitanteScore"] == 1
    assert speech.calls == ["Di en castellano: Home 0, Away 1"]


def test_rapid_goals_announce_only_the_first_while_in_flight(session, scheduler, speech):
    for _ in range(3):
        session.change_score(Team.HOME, 1)
    scheduler.run_all_spawned()

    assert session.match_state.home_score == 3
    assert speech.calls == ["Di en castellano: Home 1, Away 0"]


def test_increment_is_unbounded(session):
    for _ in range(150):
        session.change_score(Team.HOME, 1)
    assert session.match_state.home_score == 150


def test_mutations_in_one_turn_are_written_once(session, scheduler, store):
    store.writes.clear()

    session.set_team_name(Team.HOME, "Ademar")
    session.set_team_name(Team.AWAY, "Bidasoa")
    session.change_score(Team.HOME, 1)
    scheduler.run_all_spawned()

    assert store.writes == ["handballScoreboardState"]


def test_clock_ticks_are_persisted(session, scheduler, store):
    session.start()
    scheduler.advance(3)
    scheduler.run_all_spawned()

    saved = json.loads(store.get("handballScoreboardState"))
    assert saved["time"] == 1800 - 3


def test_load_restores_state_and_history_and_starts_lookups(scheduler, locator, speech, audio):
    store = CountingStore({
        "handballScoreboardState": json.dumps({
            "localName": "BM Granollers", "visitanteName": "Away",
            "localScore": 5, "visitanteScore": 4, "period": 2, "time": 321, "initialTime": 900,
        }),
        "handballMatchHistory": json.dumps([
            {"id": 1, "localName": "A", "visitanteName": "B", "localScore": 1,
             "visitanteScore": 2, "period": 2, "time": 0, "date": "01/01/2025, 20:00:00"},
        ]),
    })
    session = ScoreboardSession(PersistenceService(store), scheduler, speech, locator, audio)

    session.load()

    assert session.match_state == MatchState("BM Granollers", "Away", 5, 4, 2, 900, 321, False)
    assert [r.id for r in session.history.records] == [1]

    scheduler.advance(0.8)
    scheduler.run_all_spawned()
    assert locator.calls == ["BM Granollers"]
    assert session.snapshot()["teams"]["home"]["location"]["title"] == "Palau d'Esports"


def test_period_change_flow(session, scheduler):
    session.start()
    scheduler.advance(10)

    session.request_period_change(1)
    assert session.snapshot()["pending"] == {"kind": "period_change", "delta": 1}
    assert session.confirm_period_change()

    snap = session.snapshot()
    assert snap["period"] == 2
    assert snap["time"] == 1800
    assert snap["is_active"] is False
    assert snap["pending"] is None


def test_reset_flow(session, scheduler):
    session.change_score(Team.HOME, 2)
    session.adjust_initial_time(-20)
    session.start()
    scheduler.advance(5)

    session.request_reset()
    assert session.confirm_reset()

    snap = session.snapshot()
    assert (snap["teams"]["home"]["score"], snap["teams"]["away"]["score"]) == (0, 0)
    assert snap["period"] == 1
    assert snap["time"] == 600
    assert snap["clock_status"] == "idle"


def test_save_match_puts_newest_first_and_persists(session, scheduler, store):
    session.change_score(Team.HOME, 1)
    first = session.save_match()
    session.change_score(Team.AWAY, 1)
    second = session.save_match()
    scheduler.run_all_spawned()

    assert second.id > first.id
    assert [r.id for r in session.history.records] == [second.id, first.id]
    stored = json.loads(store.get("handballMatchHistory"))
    assert [entry["id"] for entry in stored] == [second.id, first.id]
    assert session.history_snapshot()[0]["time_display"] == "30:00"


def test_clear_history_flow(session, scheduler, store):
    session.save_match()
    session.request_clear_history()
    assert session.confirm_clear_history()
    scheduler.run_all_spawned()

    assert session.history.records == []
    assert json.loads(store.get("handballMatchHistory")) == []


def test_snapshot_shape(session):
    snap = session.snapshot()

    assert snap["teams"]["home"] == {
        "name": "Home", "score": 0, "location": None, "is_fetching_location": False,
    }
    assert snap["time_display"] == "30:00"
    assert snap["initial_time"] == 1800
    assert snap["clock_status"] == "idle"
    assert snap["is_announcing"] is False


def test_close_flushes_and_stops_timers(scheduler, speech, locator, audio):
    store = CountingStore()
    session = ScoreboardSession(PersistenceService(store), scheduler, speech, locator, audio)
    session.load()
    session.start()
    session.set_team_name(Team.HOME, "BM Granollers")

    session.close()

    assert json.loads(store.get("handballScoreboardState"))["localName"] == "BM Granollers"
    assert session.scheduler.pending_timers == []


def test_persistence_failure_does_not_disturb_the_match(scheduler, speech, locator, audio):
    session = ScoreboardSession(PersistenceService(FailingStore()), scheduler, speech, locator, audio)
    session.load()
    session.change_score(Team.HOME, 1)
    scheduler.run_all_spawned()

    assert session.match_state.home_score == 1


def test_renaming_to_the_same_name_keeps_the_venue(session, scheduler, locator):
    assert session.set_team_name(Team.HOME, "BM Granollers")
    scheduler.advance(0.8)
    scheduler.run_all_spawned()

    assert not session.set_team_name(Team.HOME, "BM Granollers")
    scheduler.advance(2)

    assert scheduler.spawned == []
    assert locator.calls == ["BM Granollers"]
    assert session.snapshot()["teams"]["home"]["location"]["title"] == "Palau d'Esports"


def test_writes_run_off_the_loop_thread(session, scheduler):
    writer_threads = []

    class RecordingStore(CountingStore):
        def set(self, key, value):
            writer_threads.append(threading.current_thread())
            super().set(key, value)

    session.persistence.store = RecordingStore()
    session.change_score(Team.HOME, 1)
    scheduler.run_all_spawned()

    assert writer_threads
    assert threading.main_thread() not in writer_threads


def test_clock_ticks_share_one_background_writer(session, scheduler, store):
    store.writes.clear()
    session.start()
    scheduler.advance(5)

    assert len(scheduler.spawned) == 1
    scheduler.run_all_spawned()

    assert store.writes == ["handballScoreboardState"]
    assert json.loads(store.get("handballScoreboardState"))["time"] == 1800 - 5

