from datetime import datetime, timezone


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def to_epoch_millis(moment: datetime) -> int:
    return int(moment.timestamp() * 1000)


def now_millis() -> int:
    return to_epoch_millis(utc_now())
