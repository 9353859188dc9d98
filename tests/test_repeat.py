import pytest

from passrepeat.errors import CollaboratorError
from passrepeat.repeat import BaseTokenScorer, find_repeats


class StubScorer(BaseTokenScorer):
    """Records every base token it scores; guesses = 10 per character."""

    def __init__(self):
        self.calls = []
        super().__init__(self._match_all, self._optimize)

    def _match_all(self, text):
        self.calls.append(text)
        return []

    def _optimize(self, text, matches):
        return {"guesses": 10 * len(text), "sequence": []}


def scan(password):
    return find_repeats(password, StubScorer())


def test_empty_password_has_no_repeats():
    assert scan("") == []


def test_no_repeat_structure():
    assert scan("abcdef") == []


def test_two_char_unit_repeated_four_times():
    matches = scan("abababab")
    assert len(matches) == 1
    m = matches[0]
    assert (m.i, m.j) == (0, 7)
    assert m.pattern == "repeat"
    assert m.base_token == "ab"
    assert m.repeat_count == 4
    assert m.repeat_char is None


def test_single_char_run():
    matches = scan("aaa")
    assert len(matches) == 1
    assert matches[0].base_token == "a"
    assert matches[0].repeat_count == 3
    assert matches[0].repeat_char == "a"


def test_consecutive_runs_reported_left_to_right():
    matches = scan("abcabcabcxyzxyzxyz")
    assert [(m.i, m.j, m.base_token) for m in matches] == [(0, 8, "abc"), (9, 17, "xyz")]
    assert all(m.repeat_count == 3 for m in matches)


def test_runs_surrounded_by_other_characters():
    matches = scan("12aaa34bbbb")
    assert [(m.i, m.j, m.token, m.base_token, m.repeat_count) for m in matches] == [
        (2, 4, "aaa", "a", 3),
        (7, 10, "bbbb", "b", 4),
    ]


def test_greedy_run_uses_anchored_unit():
    # lazy alone would stop at "aa"; greedy covers the whole string
    matches = scan("aabaab")
    assert len(matches) == 1
    assert matches[0].token == "aabaab"
    assert matches[0].base_token == "aab"
    assert matches[0].repeat_count == 2


def test_greedy_merges_repeated_compound_unit():
    matches = scan("xyzxyzxyz123xyzxyzxyz123")
    assert len(matches) == 1
    assert (matches[0].i, matches[0].j) == (0, 23)
    assert matches[0].base_token == "xyzxyzxyz123"
    assert matches[0].repeat_count == 2


def test_tie_keeps_smallest_unit():
    # both searches cover all 12 chars; the unit must not widen to "ababab"
    matches = scan("abababababab")
    assert matches[0].base_token == "ab"
    assert matches[0].repeat_count == 6


def test_line_breaks_can_repeat():
    matches = scan("ab\nab\n")
    assert len(matches) == 1
    assert matches[0].base_token == "ab\n"


def test_scorer_sees_each_base_token_once():
    scorer = StubScorer()
    matches = find_repeats("abcabcabcxyzxyzxyz", scorer)
    assert scorer.calls == ["abc", "xyz"]
    assert [m.base_guesses for m in matches] == [30, 30]
    assert [m.base_matches for m in matches] == ["[]", "[]"]


@pytest.mark.parametrize("pw", [
    "aaaa",
    "aabaab",
    "abcabc123123",
    "xyzxyzxyz123xyzxyzxyz123",
    "hello world",
    "11aa11aa!!",
    "zzTopzzTop2020",
])
def test_match_invariants(pw):
    matches = scan(pw)
    last_j = -1
    for m in matches:
        assert 0 <= m.i <= m.j < len(pw)
        assert m.i > last_j
        assert m.token == pw[m.i:m.j + 1]
        assert m.repeat_count >= 2
        assert len(m.token) == m.repeat_count * len(m.base_token)
        assert m.base_token * m.repeat_count == m.token
        last_j = m.j


def test_scan_is_repeatable():
    pw = "abab!!xyzxyz"
    assert scan(pw) == scan(pw)


def test_dispatcher_failure_propagates():
    def broken(text):
        raise RuntimeError("dispatcher down")

    scorer = BaseTokenScorer(broken, lambda text, matches: {"guesses": 1, "sequence": []})
    with pytest.raises(CollaboratorError) as exc_info:
        find_repeats("abab", scorer)
    assert exc_info.value.base_token == "ab"
    assert isinstance(exc_info.value.__cause__, RuntimeError)


def test_missing_guess_count_is_an_error():
    scorer = BaseTokenScorer(lambda text: [], lambda text, matches: {"sequence": []})
    with pytest.raises(CollaboratorError):
        find_repeats("zzzz", scorer)
