"""
passrepeat.scoring

Default guess-sequence optimizer and per-pattern guess estimates.

most_guessable_match_sequence(password, matches) picks the decomposition of
password into adjacent matches (bruteforce filling the gaps) with the lowest
total guess count. A sequence of l matches costs
    l! * product(match guesses) + MIN_GUESSES_BEFORE_GROWING_SEQUENCE ** (l - 1)
so longer sequences only win when their matches are much cheaper.
"""

import math
import re
from typing import Dict, Iterable, List

from .matches import Match

BRUTEFORCE_CARDINALITY = 10
MIN_GUESSES_BEFORE_GROWING_SEQUENCE = 10000
MIN_SUBMATCH_GUESSES_SINGLE_CHAR = 10
MIN_SUBMATCH_GUESSES_MULTI_CHAR = 50

MIN_YEAR_SPACE = 20
REFERENCE_YEAR = 2026

# rough shape of a qwerty keyboard
KEYBOARD_STARTING_POSITIONS = 94
KEYBOARD_AVERAGE_DEGREE = 4.6

START_UPPER = re.compile(r"^[A-Z][^A-Z]+$")
END_UPPER = re.compile(r"^[^A-Z]+[A-Z]$")
ALL_UPPER = re.compile(r"^[^a-z]+$")
ALL_LOWER = re.compile(r"^[^A-Z]+$")


def nCk(n: int, k: int) -> int:
    if k > n:
        return 0
    return math.comb(n, k)


def make_bruteforce_match(password: str, i: int, j: int) -> Match:
    return Match(pattern="bruteforce", i=i, j=j, token=password[i:j + 1])


def most_guessable_match_sequence(password: str, matches: Iterable[Match],
                                  exclude_additive: bool = False) -> Dict:
    """
    Return {"password", "guesses", "guesses_log10", "sequence"} for the
    cheapest decomposition of password.
    """
    n = len(password)
    if n == 0:
        return {"password": password, "guesses": 1, "guesses_log10": 0.0, "sequence": []}

    matches_by_j: List[List[Match]] = [[] for _ in range(n)]
    for m in matches:
        matches_by_j[m.j].append(m)
    for bucket in matches_by_j:
        bucket.sort(key=lambda m: m.i)

    # per end index k, keyed by sequence length l
    best_m: List[Dict[int, Match]] = [{} for _ in range(n)]
    best_pi: List[Dict[int, int]] = [{} for _ in range(n)]
    best_g: List[Dict[int, int]] = [{} for _ in range(n)]

    def update(m: Match, l: int) -> None:
        k = m.j
        pi = estimate_guesses(m, password)
        if l > 1:
            pi *= best_pi[m.i - 1][l - 1]
        g = math.factorial(l) * pi
        if not exclude_additive:
            g += MIN_GUESSES_BEFORE_GROWING_SEQUENCE ** (l - 1)
        for competing_l, competing_g in best_g[k].items():
            if competing_l > l:
                continue
            if competing_g <= g:
                return
        best_g[k][l] = g
        best_m[k][l] = m
        best_pi[k][l] = pi

    def bruteforce_update(k: int) -> None:
        update(make_bruteforce_match(password, 0, k), 1)
        for i in range(1, k + 1):
            m = make_bruteforce_match(password, i, k)
            for l, last_m in list(best_m[i - 1].items()):
                # adjacent bruteforce matches are never better than one longer one
                if last_m.pattern == "bruteforce":
                    continue
                update(m, l + 1)

    for k in range(n):
        for m in matches_by_j[k]:
            if m.i > 0:
                for l in list(best_m[m.i - 1]):
                    update(m, l + 1)
            else:
                update(m, 1)
        bruteforce_update(k)

    # unwind from the end
    k = n - 1
    l = min(best_g[k], key=lambda length: best_g[k][length])
    guesses = best_g[k][l]
    sequence: List[Match] = []
    while k >= 0:
        m = best_m[k][l]
        sequence.insert(0, m)
        k = m.i - 1
        l -= 1

    return {
        "password": password,
        "guesses": guesses,
        "guesses_log10": math.log10(guesses),
        "sequence": sequence,
    }


def estimate_guesses(match: Match, password: str) -> int:
    min_guesses = 1
    if len(match.token) < len(password):
        if len(match.token) == 1:
            min_guesses = MIN_SUBMATCH_GUESSES_SINGLE_CHAR
        else:
            min_guesses = MIN_SUBMATCH_GUESSES_MULTI_CHAR

    estimator = ESTIMATORS.get(match.pattern)
    if estimator is None:
        raise ValueError(f"no guess estimate for pattern {match.pattern!r}")
    return max(estimator(match), min_guesses)


def bruteforce_guesses(match: Match) -> int:
    guesses = BRUTEFORCE_CARDINALITY ** len(match.token)
    # bruteforce must never undercut a real submatch of the same length
    if len(match.token) == 1:
        min_guesses = MIN_SUBMATCH_GUESSES_SINGLE_CHAR + 1
    else:
        min_guesses = MIN_SUBMATCH_GUESSES_MULTI_CHAR + 1
    return max(guesses, min_guesses)


def uppercase_variations(word: str) -> int:
    if ALL_LOWER.match(word) or word.lower() == word:
        return 1
    for regex in (START_UPPER, END_UPPER, ALL_UPPER):
        if regex.match(word):
            return 2
    upper = sum(1 for c in word if c.isupper())
    lower = sum(1 for c in word if c.islower())
    return sum(nCk(upper + lower, i) for i in range(1, min(upper, lower) + 1))


def dictionary_guesses(match: Match) -> int:
    guesses = match.rank * uppercase_variations(match.token)
    if match.l33t:
        guesses *= 2
    return guesses


def sequence_guesses(match: Match) -> int:
    first = match.token[0]
    if first in "aAzZ019":
        base = 4
    elif first.isdigit():
        base = 10
    else:
        base = 26
    if not match.ascending:
        base *= 2
    return base * len(match.token)


def spatial_guesses(match: Match) -> int:
    guesses = KEYBOARD_STARTING_POSITIONS * KEYBOARD_AVERAGE_DEGREE ** (len(match.token) - 1)
    return int(guesses) * uppercase_variations(match.token)


def regex_guesses(match: Match) -> int:
    return max(abs(match.year - REFERENCE_YEAR), MIN_YEAR_SPACE)


def repeat_guesses(match: Match) -> int:
    return match.base_guesses * match.repeat_count


ESTIMATORS = {
    "bruteforce": bruteforce_guesses,
    "dictionary": dictionary_guesses,
    "sequence": sequence_guesses,
    "spatial": spatial_guesses,
    "regex": regex_guesses,
    "repeat": repeat_guesses,
}
