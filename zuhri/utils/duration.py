from typing import Optional

# Older rows stored lesson length in minutes; anything shorter than this
# many units is read as minutes rather than seconds.
LEGACY_MINUTES_CUTOFF = 60


def normalize_lesson_duration(value: Optional[int]) -> Optional[int]:
    """Convert a stored lesson duration of unknown unit into seconds.

    Used by the duration data migration only. Runtime code treats
    ``Lesson.duration`` as seconds.
    """
    if value is None:
        return None
    if value <= 0:
        return 0
    if value >= LEGACY_MINUTES_CUTOFF:
        return value
    return value * 60
