from __future__ import annotations

import threading

import pytest

from netrate.data.network_rates import NetworkRates, Sample
from netrate.util import sampler as sampler_module
from netrate.util.sampler import RateSampler

HEADER = "Inter-| Receive | Transmit\n face |bytes ...|bytes ...\n"


def _content(rx: int, tx: int) -> str:
    return HEADER + f"  eth0: {rx} 0 0 0 0 0 0 0 {tx} 0 0 0 0 0 0 0\n"


class FakeSource:
    def __init__(self) -> None:
        self.rx = 0
        self.tx = 0
        self.fail = False
        self.now = 0

    def read(self, path: str) -> str:
        if self.fail:
            raise FileNotFoundError(path)
        return _content(self.rx, self.tx)

    def clock(self) -> int:
        return self.now


@pytest.fixture
def source() -> FakeSource:
    return FakeSource()


@pytest.fixture
def rate_sampler(source: FakeSource) -> RateSampler:
    return RateSampler(source="/fake/net/dev", reader=source.read, clock=source.clock)


def test_first_call_reports_zero_and_stores_sample(source: FakeSource, rate_sampler: RateSampler) -> None:
    source.rx, source.tx, source.now = 123456, 654321, 42
    assert rate_sampler.sample_rates() == NetworkRates(0.0, 0.0)
    assert rate_sampler.last_sample == Sample(rx_bytes=123456, tx_bytes=654321, timestamp=42)


def test_worked_example(source: FakeSource, rate_sampler: RateSampler) -> None:
    source.rx, source.tx, source.now = 1000, 500, 0
    rate_sampler.sample_rates()

    source.rx, source.now = 3000, 2000
    rates = rate_sampler.sample_rates()
    assert rates.rx_per_sec == pytest.approx(1000.0)
    assert rates.tx_per_sec == 0.0


def test_rate_is_delta_over_elapsed_seconds(source: FakeSource, rate_sampler: RateSampler) -> None:
    source.rx, source.tx, source.now = 10_000, 20_000, 5_000
    rate_sampler.sample_rates()

    source.rx, source.tx, source.now = 10_750, 23_000, 5_250
    rates = rate_sampler.sample_rates()
    assert rates.rx_per_sec == pytest.approx(3000.0)
    assert rates.tx_per_sec == pytest.approx(12000.0)
    assert isinstance(rates.rx_per_sec, float)


def test_unchanged_counters_report_zero(source: FakeSource, rate_sampler: RateSampler) -> None:
    source.rx, source.tx, source.now = 500, 500, 0
    rate_sampler.sample_rates()
    source.now = 1000
    assert rate_sampler.sample_rates() == NetworkRates(0.0, 0.0)


def test_decreasing_counter_is_clamped(source: FakeSource, rate_sampler: RateSampler) -> None:
    source.rx, source.tx, source.now = 5000, 1000, 0
    rate_sampler.sample_rates()

    source.rx, source.tx, source.now = 100, 3000, 1000
    rates = rate_sampler.sample_rates()
    assert rates.rx_per_sec == 0.0
    assert rates.tx_per_sec == pytest.approx(2000.0)


def test_clock_not_advancing_reports_zero_but_refreshes_state(source: FakeSource, rate_sampler: RateSampler) -> None:
    source.rx, source.tx, source.now = 1000, 1000, 1000
    rate_sampler.sample_rates()

    source.rx, source.tx = 9000, 9000
    assert rate_sampler.sample_rates() == NetworkRates(0.0, 0.0)
    assert rate_sampler.last_sample == Sample(rx_bytes=9000, tx_bytes=9000, timestamp=1000)

    # Backwards clock behaves the same way
    source.rx, source.now = 10_000, 500
    assert rate_sampler.sample_rates() == NetworkRates(0.0, 0.0)
    assert rate_sampler.last_sample == Sample(rx_bytes=10_000, tx_bytes=9000, timestamp=500)

    # Next rate is computed against the refreshed sample
    source.rx, source.now = 11_000, 1500
    assert rate_sampler.sample_rates().rx_per_sec == pytest.approx(1000.0)


def test_read_failure_reports_zero_and_keeps_prior_sample(source: FakeSource, rate_sampler: RateSampler) -> None:
    source.rx, source.tx, source.now = 1000, 500, 0
    rate_sampler.sample_rates()
    prior = rate_sampler.last_sample

    source.fail = True
    source.rx, source.now = 2000, 1000
    assert rate_sampler.sample_rates() == NetworkRates(0.0, 0.0)
    assert rate_sampler.last_sample == prior

    source.fail = False
    source.rx, source.tx, source.now = 5000, 500, 2000
    rates = rate_sampler.sample_rates()
    assert rates.rx_per_sec == pytest.approx(2000.0)
    assert rates.tx_per_sec == 0.0


def test_read_failure_before_first_sample(source: FakeSource, rate_sampler: RateSampler) -> None:
    source.fail = True
    assert rate_sampler.sample_rates() == NetworkRates(0.0, 0.0)
    assert rate_sampler.last_sample is None


def test_permission_error_is_absorbed() -> None:
    def reader(path: str) -> str:
        raise PermissionError(path)

    rate_sampler = RateSampler(reader=reader, clock=lambda: 0)
    assert rate_sampler.sample_rates() == NetworkRates(0.0, 0.0)


def test_reads_real_file(tmp_path) -> None:
    path = tmp_path / "dev"
    path.write_text(_content(100, 200))
    ticks = iter([0, 1000])
    rate_sampler = RateSampler(source=str(path), clock=lambda: next(ticks))

    assert rate_sampler.sample_rates() == NetworkRates(0.0, 0.0)
    path.write_text(_content(400, 200))
    assert rate_sampler.sample_rates().rx_per_sec == pytest.approx(300.0)


def test_missing_file(tmp_path) -> None:
    rate_sampler = RateSampler(source=str(tmp_path / "missing"))
    assert rate_sampler.sample_rates() == NetworkRates(0.0, 0.0)
    assert rate_sampler.last_sample is None


def test_reset(source: FakeSource, rate_sampler: RateSampler) -> None:
    rate_sampler.sample_rates()
    assert rate_sampler.last_sample is not None
    rate_sampler.reset()
    assert rate_sampler.last_sample is None


def test_concurrent_calls_keep_sample_consistent() -> None:
    lock = threading.Lock()
    counter = {"n": 0}

    def reader(path: str) -> str:
        with lock:
            counter["n"] += 1
            n = counter["n"]
        return _content(n * 100, n * 10)

    rate_sampler = RateSampler(reader=reader, clock=lambda: counter["n"] * 1000)
    threads = [threading.Thread(target=rate_sampler.sample_rates) for _ in range(20)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    last = rate_sampler.last_sample
    assert last is not None
    assert last.tx_bytes * 10 == last.rx_bytes


def test_module_level_sample_rates(monkeypatch, source: FakeSource) -> None:
    monkeypatch.setattr(
        sampler_module,
        "_default_sampler",
        RateSampler(reader=source.read, clock=source.clock),
    )
    assert sampler_module.sample_rates() == NetworkRates(0.0, 0.0)
    source.rx, source.now = 1000, 1000
    assert sampler_module.sample_rates().rx_per_sec == pytest.approx(1000.0)
