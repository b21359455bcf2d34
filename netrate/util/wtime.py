import time
from datetime import datetime


def get_human_timestamp() -> str:
    now = int(time.time())
    dt = datetime.fromtimestamp(now)
    return dt.strftime("%Y-%m-%d %H:%M:%S")


def monotonic_time_in_ms() -> int:
    """
    Return a monotonic timestamp in milliseconds.
    """
    return time.monotonic_ns() // 1_000_000
