"""
Filter predicates over trainings.

Each ``filter_*`` factory returns a one-argument predicate usable with
``filter()`` or a comprehension; the ``get_*`` helpers apply them and
return a new list.
"""

from datetime import date, datetime, tzinfo
from typing import Callable, List, Optional, Sequence, Union

from .config import EPOCH
from .models.training import Training


TrainingPredicate = Callable[[Training], bool]
DateLike = Union[date, datetime]


def _to_datetime(value: DateLike, tz: Optional[tzinfo] = None) -> datetime:
    """Datetimes pass through; calendar dates become midnight in ``tz``."""
    if isinstance(value, datetime):
        return value
    return datetime(value.year, value.month, value.day, tzinfo=tz)


def filter_trainings_by_date_range(start_date: DateLike, end_date: DateLike) -> TrainingPredicate:
    """
    Select trainings strictly between two bounds.

    Both bounds are exclusive: a training dated exactly on ``start_date``
    or ``end_date`` is not selected. A training's date counts as midnight
    at the start of that day.
    """
    start = _to_datetime(start_date)
    end = _to_datetime(end_date)

    def predicate(training: Training) -> bool:
        return (
            _to_datetime(training.date, start.tzinfo) > start
            and _to_datetime(training.date, end.tzinfo) < end
        )

    return predicate


def get_trainings_between_dates(
    trainings: Sequence[Training],
    start_date: DateLike,
    end_date: DateLike,
) -> List[Training]:
    predicate = filter_trainings_by_date_range(start_date, end_date)
    return [t for t in trainings if predicate(t)]


def get_only_past_trainings(
    trainings: Sequence[Training],
    anchor_date: Optional[DateLike] = None,
    epoch: DateLike = EPOCH,
) -> List[Training]:
    """
    Trainings after ``epoch`` and before ``anchor_date`` (default: now).

    Same exclusive bounds as filter_trainings_by_date_range.
    """
    end = anchor_date if anchor_date is not None else datetime.now()
    predicate = filter_trainings_by_date_range(epoch, end)
    return [t for t in trainings if predicate(t)]


def filter_trainings_with_fit_file() -> TrainingPredicate:
    """Trainings whose FIT status is known (not None)."""
    def predicate(training: Training) -> bool:
        return training.fit_processed is not None

    return predicate


def filter_trainings_with_heart_rate_data() -> TrainingPredicate:
    """Trainings that recorded an average heart rate; 0 counts as recorded."""
    def predicate(training: Training) -> bool:
        return training.avg_heart_rate_bpm is not None

    return predicate


def filter_trainings_with_speed_data() -> TrainingPredicate:
    """Trainings that recorded an average speed; 0 counts as recorded."""
    def predicate(training: Training) -> bool:
        return training.avg_speed_kmh is not None

    return predicate


def get_only_trainings_with_fit_file(trainings: Sequence[Training]) -> List[Training]:
    return list(filter(filter_trainings_with_fit_file(), trainings))
