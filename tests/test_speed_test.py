import pytest

from conftest import BACKSPACE, CANCEL, ScriptedTerminal, StepClock, keys_for
from lowkeytype.difficulty import Difficulty
from lowkeytype.profile import UserProfile
from lowkeytype.session import run_typing_session
from lowkeytype.speed_test import run_speed_test

def typed_perfectly(text, terminal, clock):
    terminal.queue(keys_for(text))
    return run_typing_session(text, terminal, clock)

def typed_with_one_slip(text, terminal, clock):
    # one wrong key, corrected straight away
    terminal.queue(keys_for("#") + [BACKSPACE] + keys_for(text))
    return run_typing_session(text, terminal, clock)

def cancelled_midway(text, terminal, clock):
    terminal.queue(keys_for(text[:3]) + [CANCEL])
    return run_typing_session(text, terminal, clock)

def test_finished_test_updates_profile(make_ctx, store):
    ctx = make_ctx(UserProfile(name="fay", tests_completed=4), clock=StepClock(step=30.0))
    run = run_speed_test(ctx, Difficulty.EASY, 20, session_runner=typed_perfectly)

    assert not run.cancelled
    r = run.outcome.result
    assert len(r.text.split(" ")) == 20
    assert ctx.profile.tests_completed == 5
    assert ctx.profile.best_wpm == pytest.approx(r.wpm)
    assert ctx.profile.best_accuracy == 100.0
    assert ctx.profile.total_chars_typed == len(r.text)
    assert ctx.profile.total_correct_chars == len(r.text)
    assert ctx.profile.average_accuracy == pytest.approx(100.0)
    assert run.improved == {"best_wpm": 0.0, "best_accuracy": 0.0}

    saved = store.get("fay")
    assert saved.tests_completed == 5
    assert saved.best_wpm == pytest.approx(r.wpm)

def test_bests_only_move_up(make_ctx):
    profile = UserProfile(name="gus", best_wpm=1000.0, best_accuracy=100.0,
                          total_chars_typed=100, total_correct_chars=100, average_accuracy=100.0)
    ctx = make_ctx(profile)
    run = run_speed_test(ctx, Difficulty.EASY, 15, session_runner=typed_with_one_slip)

    r = run.outcome.result
    assert r.accuracy < 100.0
    assert run.improved == {}
    assert profile.best_wpm == 1000.0
    assert profile.best_accuracy == 100.0
    assert profile.total_chars_typed == 100 + r.total_chars
    assert profile.total_correct_chars == 100 + r.correct_chars
    expected = profile.total_correct_chars / profile.total_chars_typed * 100
    assert profile.average_accuracy == pytest.approx(expected)

def test_cancel_does_not_touch_profile(make_ctx, store):
    ctx = make_ctx(UserProfile(name="hal", tests_completed=3, best_wpm=12.0))
    run = run_speed_test(ctx, Difficulty.EASY, 15, session_runner=cancelled_midway)
    assert run.cancelled
    assert run.outcome.result is None
    assert ctx.profile == UserProfile(name="hal", tests_completed=3, best_wpm=12.0)
    assert store.get("hal") == ctx.profile

@pytest.mark.parametrize("asked,expected", [(5, 15), (15, 15), (33, 33), (50, 40), (80, 40)])
def test_word_count_is_clamped(make_ctx, asked, expected):
    # the easy list in the fixture has 40 words
    ctx = make_ctx()
    run = run_speed_test(ctx, Difficulty.EASY, asked, session_runner=typed_perfectly)
    words = run.outcome.result.text.split(" ")
    assert run.word_count == expected
    assert len(words) == expected
    assert len(set(words)) == expected

def test_small_pool_uses_every_word(make_ctx):
    ctx = make_ctx()
    run = run_speed_test(ctx, Difficulty.MEDIUM, 15, session_runner=typed_perfectly)
    assert run.word_count == 4
    assert sorted(run.outcome.result.text.split(" ")) == ["alpha", "beta", "delta", "gamma"]
    assert "Not enough words in file" in ctx.terminal.text

def test_missing_word_list_is_refused(make_ctx):
    ctx = make_ctx()
    assert run_speed_test(ctx, Difficulty.HARD, 20, session_runner=typed_perfectly) is None
    assert ctx.profile.tests_completed == 0
    assert ctx.terminal.targets == []

def test_target_is_shown_before_typing(make_ctx):
    term = ScriptedTerminal()
    ctx = make_ctx(terminal=term)
    run = run_speed_test(ctx, Difficulty.EASY, 15, session_runner=typed_perfectly)
    assert term.targets == [run.outcome.result.text]

@pytest.mark.parametrize("runner", [typed_perfectly, cancelled_midway])
def test_waits_for_a_key_before_returning(make_ctx, runner):
    ctx = make_ctx()
    run_speed_test(ctx, Difficulty.EASY, 15, session_runner=runner)
    assert ctx.terminal.pauses == 1
