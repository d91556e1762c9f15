import pytest

from langhelper.domain.learning.services import StreakMode, StreakPolicy


@pytest.mark.parametrize(
    ("current", "is_correct", "mode", "expected"),
    [
        (0, True, StreakMode.TEST, 1),
        (4, True, StreakMode.TEST, 5),
        (4, False, StreakMode.TEST, 0),
        (5, True, StreakMode.REPEAT, 5),
        (9, False, StreakMode.REPEAT, 0),
        (0, False, StreakMode.REPEAT, 0),
    ],
)
def test_next_streak(current: int, is_correct: bool, mode: StreakMode, expected: int) -> None:
    assert StreakPolicy.next_streak(current, is_correct, mode) == expected
