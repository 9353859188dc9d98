"""
passrepeat.repeat

Repeat detection:
- find_repeats(password, scorer): scan left to right for runs made of a
  unit repeated two or more times, one RepeatMatch per run
- BaseTokenScorer: scores the repeated unit by running it back through a
  dispatcher and a guess-sequence optimizer
"""

import logging
import re
from typing import Any, Callable, List, Mapping, Sequence, Tuple

from .errors import CollaboratorError, PassRepeatError
from .matches import Match, RepeatMatch, describe_sequence

logger = logging.getLogger(__name__)

REPEAT_PATTERN = "repeat"

# greedy grows the run, lazy finds the smallest unit
GREEDY = re.compile(r"(.+)\1+", re.DOTALL)
LAZY = re.compile(r"(.+?)\1+", re.DOTALL)
LAZY_ANCHORED = re.compile(r"^(.+?)\1+$", re.DOTALL)

MatchAll = Callable[[str], Sequence[Match]]
Optimize = Callable[[str, Sequence[Match]], Mapping[str, Any]]


class BaseTokenScorer:
    """
    Score a base token with two injected collaborators:
    - match_all(text) -> matches found inside text
    - optimize(text, matches) -> {"guesses": int, "sequence": [Match, ...]}
    """

    def __init__(self, match_all: MatchAll, optimize: Optimize):
        self.match_all = match_all
        self.optimize = optimize

    def score(self, base_token: str) -> Tuple[int, str]:
        """Return (guesses, JSON description of the chosen decomposition)."""
        try:
            matches = self.match_all(base_token)
            result = self.optimize(base_token, matches)
        except PassRepeatError:
            raise
        except Exception as e:
            raise CollaboratorError(base_token, str(e)) from e

        guesses = result.get("guesses")
        if guesses is None:
            raise CollaboratorError(base_token, "optimizer returned no guess count")
        return guesses, describe_sequence(result.get("sequence", []))


def _next_run(password: str, start: int):
    """Return (regex match of the accepted run, base token) or None."""
    greedy = GREEDY.search(password, start)
    if greedy is None:
        return None
    lazy = LAZY.search(password, start)

    if len(greedy.group(0)) > len(lazy.group(0)):
        # greedy's group only reflects the last repetition; re-derive the unit
        base_token = LAZY_ANCHORED.match(greedy.group(0)).group(1)
        return greedy, base_token
    return lazy, lazy.group(1)


def find_repeats(password: str, scorer: BaseTokenScorer) -> List[RepeatMatch]:
    """
    Find non-overlapping repeat runs in password, in left-to-right order.

    Adjacent copies of the same unit are merged into one run ("abab" ->
    base "ab" x2, never two "ab" runs). Any exception from the scorer
    propagates; no record is emitted without a guess estimate.
    """
    matches: List[RepeatMatch] = []
    last_index = 0

    while last_index < len(password):
        found = _next_run(password, last_index)
        if found is None:
            break
        run, base_token = found
        i, j = run.start(), run.end() - 1
        token = run.group(0)

        base_guesses, base_matches = scorer.score(base_token)
        logger.debug("repeat run %d-%d base=%r guesses=%s", i, j, base_token, base_guesses)

        matches.append(RepeatMatch(
            pattern=REPEAT_PATTERN,
            i=i,
            j=j,
            token=token,
            repeat_char=base_token if len(base_token) == 1 else None,
            repeat_count=len(token) // len(base_token),
            base_token=base_token,
            base_guesses=base_guesses,
            base_matches=base_matches,
        ))
        last_index = j + 1

    return matches
