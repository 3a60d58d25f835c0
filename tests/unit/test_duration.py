import pytest

from zuhri.services.progress import reaches_completion
from zuhri.utils.duration import normalize_lesson_duration


@pytest.mark.parametrize("stored,expected", [
    (None, None),
    (0, 0),
    (-5, 0),
    (1, 60),
    (45, 2700),
    (59, 3540),
    (60, 60),
    (754, 754),
])
def test_normalize_lesson_duration(stored, expected):
    assert normalize_lesson_duration(stored) == expected


def test_completion_needs_ninety_percent():
    assert reaches_completion(540, 600) is True
    assert reaches_completion(539, 600) is False


def test_completion_ignores_client_flag_when_length_is_known():
    assert reaches_completion(10, 600, client_flag=True) is False


def test_completion_falls_back_to_client_flag_without_length():
    assert reaches_completion(10, None, client_flag=True) is True
    assert reaches_completion(10, 0, client_flag=False) is False
