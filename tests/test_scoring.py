import pytest

from lowkeytype.scoring import (
    calculate_accuracy,
    classify_positions,
    keystroke_accuracy,
    words_per_minute,
)

def test_exact_match_is_perfect():
    r = calculate_accuracy("hello", "hello")
    assert r.accuracy == 100.0
    assert (r.correct, r.mistyped, r.missed, r.extra) == (5, 0, 0, 0)

def test_nothing_typed_is_all_missed():
    r = calculate_accuracy("hello", "")
    assert r.missed == 5
    assert r.accuracy == 0.0

def test_empty_target_scores_zero():
    assert calculate_accuracy("", "anything").accuracy == 0.0
    assert calculate_accuracy("", "").accuracy == 0.0

def test_extra_characters():
    r = calculate_accuracy("cat", "cats")
    assert r.correct == 3
    assert r.extra == 1
    assert r.total_errors == 1
    assert r.accuracy == pytest.approx(66.6667, rel=1e-4)

def test_mistyped_and_missed_together():
    r = calculate_accuracy("house", "hoxe")
    assert r.correct == 2
    assert r.mistyped == 2
    assert r.missed == 1
    assert r.accuracy == pytest.approx(40.0)

@pytest.mark.parametrize("target,typed", [
    ("a", "bbbbbbbbbb"),
    ("abc", "xyz"),
    ("abc", ""),
    ("", "abc"),
    ("the quick", "the quick brown fox"),
])
def test_accuracy_stays_in_range(target, typed):
    assert 0.0 <= calculate_accuracy(target, typed).accuracy <= 100.0

def test_positions_past_target_are_wrong():
    assert classify_positions("ab", "abab") == [True, True, False, False]
    assert classify_positions("ab", "xb") == [False, True]

def test_keystroke_accuracy():
    assert keystroke_accuracy(0, 0) == 0.0
    assert keystroke_accuracy(10, 1) == pytest.approx(90.0)

def test_words_per_minute_guards_zero_time():
    assert words_per_minute(50, 0) == 0.0
    assert words_per_minute(50, 60) == pytest.approx(10.0)
