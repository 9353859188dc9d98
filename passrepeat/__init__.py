"""passrepeat: repeat-run detection for password strength estimation."""

from .errors import CollaboratorError, PassRepeatError, PasswordTooLongError
from .matches import Match, RepeatMatch, describe_sequence
from .matching import omnimatch, repeat_match
from .repeat import BaseTokenScorer, find_repeats
from .scoring import most_guessable_match_sequence

__all__ = [
    "BaseTokenScorer",
    "CollaboratorError",
    "Match",
    "PassRepeatError",
    "PasswordTooLongError",
    "RepeatMatch",
    "describe_sequence",
    "find_repeats",
    "most_guessable_match_sequence",
    "omnimatch",
    "repeat_match",
]
