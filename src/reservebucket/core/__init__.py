from reservebucket.core.errors import InvalidSource, MissingPeriod, NoReserveData, ScheduleError
from reservebucket.core.models import Bucket, Person, ReserveStatus, ScheduleDocument

__all__ = [
    "Bucket",
    "InvalidSource",
    "MissingPeriod",
    "NoReserveData",
    "Person",
    "ReserveStatus",
    "ScheduleDocument",
    "ScheduleError",
]
