"""
passrepeat.matches

Match records shared by the repeat scanner, the default dispatcher and the
default optimizer. Records are frozen: a scan builds them once and hands
them to the caller.
"""

import json
from dataclasses import asdict, dataclass
from typing import Any, Dict, Iterable, Optional


@dataclass(frozen=True)
class Match:
    """A pattern occurrence covering password[i:j + 1]."""
    pattern: str
    i: int
    j: int
    token: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class DictionaryMatch(Match):
    matched_word: str
    rank: int
    l33t: bool = False


@dataclass(frozen=True)
class SequenceMatch(Match):
    sequence_name: str
    ascending: bool


@dataclass(frozen=True)
class SpatialMatch(Match):
    graph: str


@dataclass(frozen=True)
class RegexMatch(Match):
    regex_name: str
    year: int


@dataclass(frozen=True)
class RepeatMatch(Match):
    """
    One repeat run: token == base_token * repeat_count.

    repeat_char is only meaningful for single-character units and is None
    for longer ones. base_matches is the JSON description of the cheapest
    decomposition of base_token.
    """
    repeat_char: Optional[str]
    repeat_count: int
    base_token: str
    base_guesses: int
    base_matches: str


def describe_sequence(matches: Iterable[Match]) -> str:
    """Render a match sequence as compact JSON."""
    return json.dumps([m.to_dict() for m in matches], ensure_ascii=False)
