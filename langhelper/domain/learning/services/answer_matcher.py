"""
Domain service for checking free-text answers with typo tolerance.

This is a pure domain service with no infrastructure dependencies.
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass

# Canonical answers up to this many characters tolerate a single edit,
# longer ones tolerate two.
SHORT_ANSWER_LENGTH = 8


def normalize_answer(text: str) -> str:
    return text.strip().casefold()


def typo_tolerance(answer_length: int) -> int:
    """
    Maximum edit distance accepted for a canonical answer of the given length.

    0 for an empty answer, 1 for answers of 1-8 characters, 2 beyond that.
    """
    if answer_length <= 0:
        return 0
    if answer_length <= SHORT_ANSWER_LENGTH:
        return 1
    return 2


def damerau_levenshtein(source: str, target: str) -> int:
    """
    Unrestricted Damerau-Levenshtein distance.

    Insertions, deletions, substitutions and transpositions of adjacent
    characters each cost 1.
    """
    if source == target:
        return 0
    if not source:
        return len(target)
    if not target:
        return len(source)

    max_dist = len(source) + len(target)
    last_row_of: dict[str, int] = {}

    # Table is offset by one extra row/column holding max_dist sentinels.
    rows = len(source) + 2
    cols = len(target) + 2
    table = [[0] * cols for _ in range(rows)]
    table[0][0] = max_dist
    for i in range(len(source) + 1):
        table[i + 1][0] = max_dist
        table[i + 1][1] = i
    for j in range(len(target) + 1):
        table[0][j + 1] = max_dist
        table[1][j + 1] = j

    for i in range(1, len(source) + 1):
        last_match_col = 0
        for j in range(1, len(target) + 1):
            prev_row = last_row_of.get(target[j - 1], 0)
            prev_col = last_match_col
            if source[i - 1] == target[j - 1]:
                cost = 0
                last_match_col = j
            else:
                cost = 1
            table[i + 1][j + 1] = min(
                table[i][j] + cost,
                table[i + 1][j] + 1,
                table[i][j + 1] + 1,
                table[prev_row][prev_col] + (i - prev_row - 1) + 1 + (j - prev_col - 1),
            )
        last_row_of[source[i - 1]] = i

    return table[len(source) + 1][len(target) + 1]


@dataclass(frozen=True)
class AnswerMatch:
    """Best candidate for an input and how far it was from it."""

    answer: str
    distance: int
    tolerance: int

    @property
    def is_accepted(self) -> bool:
        return self.distance <= self.tolerance


class AnswerMatcher:
    """
    Stateless domain service that grades typed answers.

    Input and candidates are compared case-insensitively after trimming.
    An answer that was already provided for the card cannot be matched
    again, so one input never satisfies two required answers.
    """

    def __init__(self, tolerance: Callable[[int], int] = typo_tolerance) -> None:
        self.tolerance = tolerance

    def best_match(self, user_input: str, candidates: Sequence[str]) -> AnswerMatch | None:
        """
        Find the candidate closest to the input.

        Candidates within their tolerance win over those outside it; among
        equals the smaller distance wins, then the earlier candidate.
        Returns None when there is nothing to compare against or the input
        is blank.
        """
        normalized_input = normalize_answer(user_input)
        if not normalized_input:
            return None

        matches: list[AnswerMatch] = []
        for candidate in candidates:
            normalized_candidate = normalize_answer(candidate)
            if not normalized_candidate:
                continue
            matches.append(
                AnswerMatch(
                    answer=candidate,
                    distance=damerau_levenshtein(normalized_input, normalized_candidate),
                    tolerance=self.tolerance(len(normalized_candidate)),
                )
            )

        if not matches:
            return None
        # min() keeps the first of equal keys
        return min(matches, key=lambda m: (not m.is_accepted, m.distance))

    def check(
        self,
        user_input: str,
        acceptable_answers: Sequence[str],
        provided_answers: Sequence[str] = (),
    ) -> tuple[bool, str]:
        """
        Grade an input against the answers that are still open.

        Args:
            user_input: What the learner typed
            acceptable_answers: Canonical answers of the card
            provided_answers: Canonical answers already consumed for the card

        Returns:
            (True, canonical answer) on a match, (False, "") otherwise
        """
        remaining = list(acceptable_answers)
        for answer in provided_answers:
            if answer in remaining:
                remaining.remove(answer)

        match = self.best_match(user_input, remaining)
        if match is None or not match.is_accepted:
            return False, ""
        return True, match.answer
