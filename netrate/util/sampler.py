import logging
import math
import threading
from typing import Callable

from netrate.data.network_rates import NetworkRates, Sample
from netrate.util import procnet, wtime

logger = logging.getLogger(__name__)


def read_counter_source(path: str) -> str:
    with open(path, "r", encoding="utf-8") as fh:
        return fh.read()


def _clamp(rate: float) -> float:
    if not math.isfinite(rate) or rate < 0:
        return 0.0
    return rate


class RateSampler:
    """
    Derive receive/transmit rates from consecutive reads of /proc/net/dev.

    The sampler holds the last successful sample and diffs every new read
    against it. Reads that fail leave the stored sample untouched and report
    zero rates; every successful read replaces it.
    """

    def __init__(
        self,
        source: str = procnet.PROC_NET_DEV,
        reader: Callable[[str], str] | None = None,
        clock: Callable[[], int] | None = None,
    ):
        self.source = source
        self._reader = reader or read_counter_source
        self._clock = clock or wtime.monotonic_time_in_ms
        self._lock = threading.Lock()
        self._last: Sample | None = None

    @property
    def last_sample(self) -> Sample | None:
        return self._last

    def reset(self) -> None:
        with self._lock:
            self._last = None

    def sample_rates(self) -> NetworkRates:
        with self._lock:
            try:
                content = self._reader(self.source)
            except (OSError, UnicodeDecodeError) as e:
                logger.debug(f"[sample_rates] - failed to read {self.source}: {e}")
                return NetworkRates()

            rx_bytes, tx_bytes = procnet.parse_proc_net_dev(content)
            now = self._clock()
            current = Sample(rx_bytes=rx_bytes, tx_bytes=tx_bytes, timestamp=now)

            rx_per_sec = 0.0
            tx_per_sec = 0.0
            prior = self._last
            if prior is not None:
                delta_seconds = (now - prior.timestamp) / 1000
                if delta_seconds > 0:
                    rx_per_sec = _clamp((rx_bytes - prior.rx_bytes) / delta_seconds)
                    tx_per_sec = _clamp((tx_bytes - prior.tx_bytes) / delta_seconds)
                else:
                    logger.debug(
                        f"[sample_rates] - clock did not advance ({delta_seconds}s), reporting zero"
                    )

            self._last = current
            logger.debug(
                f"[sample_rates] - rx={rx_bytes} tx={tx_bytes} rx/s={rx_per_sec:.2f} tx/s={tx_per_sec:.2f}"
            )
            return NetworkRates(rx_per_sec=rx_per_sec, tx_per_sec=tx_per_sec)


_default_sampler = RateSampler()


def sample_rates() -> NetworkRates:
    """
    Sample rates using the process-wide sampler.
    """
    return _default_sampler.sample_rates()
