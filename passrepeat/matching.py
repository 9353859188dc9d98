"""
passrepeat.matching

Default dispatcher used to score repeated units:
- dictionary_match: common words, also after undoing simple l33t substitutions
- sequence_match: ascending/descending runs of letters or digits
- spatial_match: common keyboard runs (qwerty, asdf, ...)
- regex_match: 4-digit years between 1900 and 2099
- repeat_match: repeated units, scored by recursing into omnimatch
- omnimatch: all of the above, ordered by position
"""

import logging
import re
from functools import partial
from typing import Dict, Iterable, List, Optional

from .matches import DictionaryMatch, Match, RegexMatch, RepeatMatch, SequenceMatch, SpatialMatch
from .repeat import BaseTokenScorer, find_repeats
from .scoring import most_guessable_match_sequence

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 8

# small built-in dictionary, most common first. Extend with load_wordlist().
COMMON_WORDS = [
    "password", "123456", "qwerty", "letmein", "admin", "welcome", "iloveyou",
    "monkey", "dragon", "sunshine", "princess", "football", "baseball",
    "trustno1", "master", "hello", "freedom", "whatever", "secret", "password1",
    "love", "shadow", "michael", "superman", "batman", "ninja", "pass", "abc",
]

# keyboard runs to flag
KEYBOARD_PATTERNS = {"qwerty", "asdf", "zxcvbn", "yuiop", "hjkl", "zxcv", "1qaz", "qazwsx"}

# inverse substitution (digits/symbols -> letters), same length so indices line up
LEET_MAP = str.maketrans("4@3015$7", "aaeoisst")

YEAR_RX = re.compile(r"19\d{2}|20\d{2}")

MIN_WORD_LEN = 3
MIN_SEQUENCE_LEN = 3


def build_ranked_dict(words: Iterable[str]) -> Dict[str, int]:
    """Map each lowercased word to its 1-based rank; first occurrence wins."""
    ranked: Dict[str, int] = {}
    for word in words:
        word = word.strip().lower()
        if word and word not in ranked:
            ranked[word] = len(ranked) + 1
    return ranked


def load_wordlist(path: Optional[str] = None) -> Dict[str, int]:
    """
    Ranked dictionary of the built-in words followed by the words in the
    newline-delimited file at path (most common first), if given.
    """
    words = list(COMMON_WORDS)
    if path:
        with open(path, "r", encoding="utf-8") as f:
            words.extend(line for line in f if not line.startswith("#"))
    return build_ranked_dict(words)


RANKED_DICTIONARY = build_ranked_dict(COMMON_WORDS)


def _find_all(haystack: str, needle: str) -> Iterable[int]:
    start = haystack.find(needle)
    while start != -1:
        yield start
        start = haystack.find(needle, start + 1)


def _fold(password: str) -> str:
    """Lowercase one character at a time so indices keep pointing into password."""
    return "".join(c if len(c.lower()) != 1 else c.lower() for c in password)


def dictionary_match(password: str, ranked_dictionary: Optional[Dict[str, int]] = None) -> List[Match]:
    """
    Every occurrence of a dictionary word, case-insensitive. Words only
    visible after undoing l33t substitutions are flagged l33t=True.
    """
    ranked = RANKED_DICTIONARY if ranked_dictionary is None else ranked_dictionary
    lower = _fold(password)
    de_leet = lower.translate(LEET_MAP)
    found = []
    for word, rank in ranked.items():
        if len(word) < MIN_WORD_LEN:
            continue
        plain = set(_find_all(lower, word))
        for i in sorted(plain):
            found.append(DictionaryMatch(
                pattern="dictionary", i=i, j=i + len(word) - 1,
                token=password[i:i + len(word)], matched_word=word, rank=rank,
            ))
        if de_leet == lower:
            continue
        for i in _find_all(de_leet, word):
            if i in plain:
                continue
            found.append(DictionaryMatch(
                pattern="dictionary", i=i, j=i + len(word) - 1,
                token=password[i:i + len(word)], matched_word=word, rank=rank, l33t=True,
            ))
    return found


def _sequence_name(c: str) -> str:
    if c.isdigit():
        return "digits"
    if c.isupper():
        return "upper"
    return "lower"


def sequence_match(password: str, min_len: int = MIN_SEQUENCE_LEN) -> List[Match]:
    """
    Ascending or descending runs of letters or digits with a step of one,
    e.g. 'abcd', '4321'.
    """
    n = len(password)
    sequences: List[Match] = []
    i = 0
    while i < n - 1:
        run_start = i
        direction = 0  # +1 ascending, -1 descending
        while i < n - 1 and password[i].isalnum() and password[i + 1].isalnum() \
                and _sequence_name(password[i]) == _sequence_name(password[i + 1]):
            diff = ord(password[i + 1]) - ord(password[i])
            if diff not in (1, -1) or (direction and diff != direction):
                break
            direction = diff
            i += 1
        run_len = i - run_start + 1
        if run_len >= min_len:
            sequences.append(SequenceMatch(
                pattern="sequence", i=run_start, j=i, token=password[run_start:i + 1],
                sequence_name=_sequence_name(password[run_start]), ascending=direction == 1,
            ))
        i = max(i, run_start + 1)
    return sequences


def spatial_match(password: str) -> List[Match]:
    """Every occurrence of a common keyboard run, case-insensitive."""
    lower = _fold(password)
    found = []
    for pattern in sorted(KEYBOARD_PATTERNS):
        for i in _find_all(lower, pattern):
            found.append(SpatialMatch(
                pattern="spatial", i=i, j=i + len(pattern) - 1,
                token=password[i:i + len(pattern)], graph="qwerty",
            ))
    return found


def regex_match(password: str) -> List[Match]:
    """Year-like substrings, even when glued to letters ('born1978')."""
    return [
        RegexMatch(
            pattern="regex", i=m.start(), j=m.end() - 1, token=m.group(0),
            regex_name="recent_year", year=int(m.group(0)),
        )
        for m in YEAR_RX.finditer(password)
    ]


def repeat_match(password: str, ranked_dictionary: Optional[Dict[str, int]] = None,
                 max_depth: int = DEFAULT_MAX_DEPTH, _depth: int = 0) -> List[RepeatMatch]:
    """Repeat runs in password, each unit scored by the default pipeline."""
    match_all = partial(omnimatch, ranked_dictionary=ranked_dictionary,
                        max_depth=max_depth, _depth=_depth + 1)
    scorer = BaseTokenScorer(match_all, most_guessable_match_sequence)
    return find_repeats(password, scorer)


def omnimatch(password: str, ranked_dictionary: Optional[Dict[str, int]] = None,
              max_depth: int = DEFAULT_MAX_DEPTH, _depth: int = 0) -> List[Match]:
    """
    All matches the default detectors find in password, sorted by (i, j).
    Repeat detection recurses on each unit; past max_depth it is skipped.
    """
    matches: List[Match] = []
    matches.extend(dictionary_match(password, ranked_dictionary))
    matches.extend(sequence_match(password))
    matches.extend(spatial_match(password))
    matches.extend(regex_match(password))
    if _depth < max_depth:
        matches.extend(repeat_match(password, ranked_dictionary, max_depth, _depth))
    else:
        logger.debug("repeat matching skipped for %r at depth %d", password, _depth)
    return sorted(matches, key=lambda m: (m.i, m.j))
