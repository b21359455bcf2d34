from dataclasses import dataclass, field


@dataclass
class InterfaceCounters:
    interface: str = ""
    r_bytes: int = 0
    r_packets: int = 0
    r_errs: int = 0
    r_drop: int = 0
    r_fifo: int = 0
    r_frame: int = 0
    r_compressed: int = 0
    r_multicast: int = 0
    t_bytes: int = 0
    t_packets: int = 0
    t_errs: int = 0
    t_drop: int = 0
    t_fifo: int = 0
    t_colls: int = 0
    t_carrier: int = 0
    t_compressed: int = 0


@dataclass(frozen=True)
class Sample:
    rx_bytes: int = 0
    tx_bytes: int = 0
    timestamp: int = 0


@dataclass(frozen=True)
class NetworkRates:
    rx_per_sec: float = 0.0
    tx_per_sec: float = 0.0


@dataclass
class WidgetItem:
    icon: str = ""
    subtext: str = ""
    text: str = ""


@dataclass
class NetworkWidget:
    type: str = "three-stats"
    link: str = "?dialog=live-usage"
    refresh: str = "5s"
    items: list[WidgetItem] = field(default_factory=list)
    updated: str | None = None
