"""Tests for the session state machine."""

import dataclasses

import pytest

from typedash.app.state import SessionPhase
from typedash.services.content import leading_whitespace


def snapshot(engine):
    s = engine.state
    return (s.phase, s.current_index, s.current_input, list(s.history),
            list(s.performance), s.started_at, s.ended_at)


class TestLifecycle:
    def test_starts_idle(self, make_engine):
        e = make_engine()
        assert e.phase is SessionPhase.IDLE
        assert e.get_current_state().is_running is False
        assert e.get_current_state().current_index == 0

    def test_start_only_from_idle(self, make_engine, clock):
        e = make_engine()
        assert e.start() is True
        started = e.state.started_at
        clock.advance(3)
        assert e.start() is False
        assert e.state.started_at == started
        assert e.phase is SessionPhase.RUNNING

    def test_plan_exhaustion_is_terminal(self, make_engine):
        e = make_engine(word_length="short")
        e.start()
        for word in e.get_plan():
            e.update_input(word)
            e.commit_current_token()
        assert e.phase is SessionPhase.TERMINAL
        assert e.state.current_index == len(e.get_plan())
        assert e.commit_current_token() is None

    def test_empty_plan_terminates_on_start(self, make_engine):
        e = make_engine(word_mode="code-cobol")
        assert e.get_plan() == []
        e.start()
        assert e.phase is SessionPhase.TERMINAL


class TestInput:
    def test_update_replaces_buffer_verbatim(self, make_engine):
        e = make_engine()
        e.start()
        e.update_input("ab")
        e.update_input("a")
        assert e.get_current_state().current_input == "a"
        assert e.state.history == []

    def test_update_before_start_is_noop(self, make_engine):
        e = make_engine()
        before = snapshot(e)
        assert e.update_input("hello") is False
        assert snapshot(e) == before

    def test_update_after_expiry_is_noop(self, make_engine):
        e = make_engine()
        e.start()
        e.update_input("par")
        e.on_timer_expire()
        before = snapshot(e)
        assert e.update_input("partial") is False
        assert e.commit_current_token() is None
        assert snapshot(e) == before

    def test_autostart_on_first_input(self, make_engine):
        e = make_engine(autostart=True)
        assert e.on_input_change("t") is True
        assert e.phase is SessionPhase.RUNNING

    def test_char_classes_for_active_word(self, make_engine):
        e = make_engine()
        e.start()
        word = e.state.current_word
        e.update_input(word)
        assert len(e.char_classes()) == len(word)
        assert all(c.value == "correct" for c in e.char_classes())


class TestCommit:
    def test_history_tracks_index(self, make_engine, clock):
        e = make_engine()
        e.start()
        plan = e.get_plan()
        for n in range(1, 6):
            clock.advance(1)
            e.update_input(plan[n - 1] if n % 2 else "zzz")
            e.commit_current_token()
            assert len(e.state.history) == n == e.state.current_index
            assert e.get_current_state().current_input == ""

    def test_entry_contents(self, make_engine, clock):
        e = make_engine()
        e.start()
        word = e.state.current_word
        clock.advance(2)
        e.update_input(word)
        entry = e.on_commit()
        assert entry.word == word
        assert entry.typed == word
        assert entry.correct is True
        assert entry.time == pytest.approx(2000.0)
        assert entry.wpm == pytest.approx(30.0)
        snap = e.state.performance[0]
        assert (snap.timestamp, snap.accuracy) == (pytest.approx(2000.0), 100.0)

    def test_entries_are_immutable(self, make_engine):
        e = make_engine()
        e.start()
        e.update_input("nope")
        entry = e.commit_current_token()
        with pytest.raises(dataclasses.FrozenInstanceError):
            entry.correct = True

    def test_incorrect_word(self, make_engine):
        e = make_engine()
        e.start()
        e.update_input(e.state.current_word + "x")
        assert e.commit_current_token().correct is False

    def test_commit_before_start_is_noop(self, make_engine):
        e = make_engine()
        assert e.commit_current_token() is None
        assert e.state.history == []


class TestCodeMode:
    def test_buffer_seeded_with_indentation(self, make_engine):
        e = make_engine(word_mode="code-python")
        e.start()
        assert e.state.current_input == leading_whitespace(e.get_plan()[0])
        e.update_input(e.get_plan()[0])
        e.commit_current_token()
        assert e.state.current_input == leading_whitespace(e.get_plan()[1])

    def test_submitted_newline_not_scored(self, make_engine):
        e = make_engine(word_mode="code-javascript")
        e.start()
        line = e.state.current_word
        e.update_input(line + "\n")
        assert e.commit_current_token().correct is True

    def test_enter_commits_space_does_not(self, make_engine):
        e = make_engine(word_mode="code-java")
        e.start()
        assert e.handle_key("space") is False
        assert e.handle_key("enter") is True
        assert e.state.current_index == 1


class TestTimer:
    def test_expiry_drops_partial_token(self, make_engine, clock):
        e = make_engine()
        e.start()
        e.update_input(e.state.current_word)
        e.commit_current_token()
        e.update_input("half")
        clock.advance(5)
        assert e.on_timer_expire() is True
        assert e.phase is SessionPhase.TERMINAL
        assert len(e.state.history) == 1
        assert e.on_timer_expire() is False

    def test_tick_reaching_duration_expires(self, make_engine, clock):
        e = make_engine(mode="15")
        e.start()
        e.on_timer_tick(14.0)
        assert e.phase is SessionPhase.RUNNING
        assert e.state.last_tick == 14.0
        e.on_timer_tick(15.0)
        assert e.phase is SessionPhase.TERMINAL
        clock.advance(40)
        assert e.get_stats().elapsed_seconds == pytest.approx(15.0)

    def test_elapsed_frozen_after_finish(self, make_engine, clock):
        e = make_engine()
        e.start()
        clock.advance(10)
        e.expire()
        clock.advance(10)
        assert e.elapsed_seconds() == pytest.approx(10.0)


class TestRestart:
    def test_repeated_restart(self, make_engine):
        e = make_engine(word_length="long")
        e.start()
        e.update_input("x")
        e.commit_current_token()
        e.expire()
        pool_size = len(e.get_plan())
        for _ in range(3):
            state = e.on_restart()
            assert state is e.state
            assert e.phase is SessionPhase.IDLE
            assert e.state.history == []
            assert e.state.current_index == 0
            assert len(e.get_plan()) == pool_size
            assert e.start() is True
            e.restart()

    def test_restart_requests_fresh_plan(self, make_engine):
        e = make_engine()
        first = e.state
        e.restart()
        assert e.state is not first

    def test_tab_enter_restarts_in_any_state(self, make_engine):
        e = make_engine()
        e.start()
        e.expire()
        assert e.handle_key("Enter", modifiers=["Tab"]) is True
        assert e.phase is SessionPhase.IDLE

    def test_space_commits_word(self, make_engine):
        e = make_engine()
        e.start()
        e.update_input(e.state.current_word)
        assert e.handle_key(" ") is True
        assert e.state.history[0].correct is True
        assert e.handle_key("a") is False


class TestStats:
    def test_stats_mid_session(self, make_engine, clock):
        e = make_engine()
        e.start()
        plan = e.get_plan()
        clock.advance(30)
        e.update_input(plan[0])
        e.commit_current_token()
        clock.advance(30)
        e.update_input("wrong")
        e.commit_current_token()
        st = e.get_stats()
        assert st.accuracy == 50
        assert st.wpm == pytest.approx(1.0)
        assert st.raw_wpm == pytest.approx(2.0)
        assert len(st.performance_data) == 2

    def test_get_plan_is_a_copy(self, make_engine):
        e = make_engine()
        plan = e.get_plan()
        plan.clear()
        assert e.get_plan()


class TestSeparatorKeys:
    def test_space_in_idle_is_not_consumed(self, make_engine):
        e = make_engine()
        assert e.handle_key(" ") is False
        assert e.state.history == []

    def test_space_after_finish_is_not_consumed(self, make_engine):
        e = make_engine()
        e.start()
        e.expire()
        assert e.handle_key("space") is False


class TestPace:
    def test_snapshot_wpm_is_per_word_pace(self, make_engine, clock):
        e = make_engine()
        e.start()
        plan = e.get_plan()
        for gap, word in ((1.0, plan[0]), (2.0, plan[1]), (1.0, "zzz")):
            clock.advance(gap)
            e.update_input(word)
            e.commit_current_token()
        assert [p.wpm for p in e.state.performance] == [
            pytest.approx(60.0), pytest.approx(30.0), pytest.approx(60.0)
        ]

    def test_steady_pace_is_fully_consistent(self, make_engine, clock):
        e = make_engine()
        e.start()
        for word in e.get_plan()[:6]:
            clock.advance(1.5)
            e.update_input(word)
            e.commit_current_token()
        assert e.get_stats().consistency == pytest.approx(100.0)


class TestGivenPlan:
    def test_initial_plan_is_used_then_replaced_on_restart(self, make_engine, clock):
        from typedash.services.typing_engine import TypingEngine

        source = make_engine()
        twin = TypingEngine(source.config, clock=clock, plan=source.get_plan())
        assert twin.get_plan() == source.get_plan()
        twin.restart()
        assert sorted(twin.get_plan()) == sorted(source.get_plan())


def test_current_errors_for_live_display(make_engine):
    e = make_engine()
    e.start()
    word = e.state.current_word
    e.update_input(word[:-1] + "#" + "!!")
    assert e.current_errors() == 3
    e.update_input(word[:1])
    assert e.current_errors() == 0
