"""
Data models and enums for the data center metrics generator.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Metric(Enum):
    """Metrics reported by every simulated host"""

    CPU_USAGE = "CPU_USAGE"
    MEM_USAGE = "MEM_USAGE"
    DISK_IO_READ = "DISK_IO_READ"
    DISK_IO_WRITE = "DISK_IO_WRITE"
    NET_IN = "NET_IN"
    NET_OUT = "NET_OUT"
    CPU_TEMP = "CPU_TEMP"

    @property
    def baseline(self) -> float:
        """Seed value used before the first reading of this metric"""
        return METRIC_BASELINES.get(self, 0.0)

    @property
    def unit(self) -> str:
        return METRIC_UNITS.get(self, "")

    def clamp(self, value: float) -> float:
        """Bound a raw value to the physical range of this metric"""
        low, high = METRIC_BOUNDS.get(self, (0.0, None))
        value = max(low, value)
        if high is not None:
            value = min(high, value)
        return value


class HostStatus(Enum):
    """Operational status of a simulated host"""

    NORMAL = "normal"
    OVERLOADED = "overloaded"


# Fixed catalog shared by all zones
METRIC_CATALOG: tuple[Metric, ...] = tuple(Metric)

_PERCENT = (Metric.CPU_USAGE, Metric.MEM_USAGE)
_RATES = (Metric.DISK_IO_READ, Metric.DISK_IO_WRITE, Metric.NET_IN, Metric.NET_OUT)

METRIC_BASELINES: dict[Metric, float] = {
    **{m: 50.0 for m in _PERCENT},
    **{m: 100.0 for m in _RATES},
    Metric.CPU_TEMP: 60.0,
}

METRIC_UNITS: dict[Metric, str] = {
    **{m: "%" for m in _PERCENT},
    **{m: "MB/s" for m in _RATES},
    Metric.CPU_TEMP: "°C",
}

# (floor, ceiling); None means unbounded above
METRIC_BOUNDS: dict[Metric, tuple[float, float | None]] = {
    **{m: (0.0, 100.0) for m in _PERCENT},
    Metric.CPU_TEMP: (20.0, 100.0),
}


@dataclass
class HostState:
    """Mutable per-host simulation state. Owned by a single ZoneGenerator."""

    last_values: dict[Metric, float] = field(default_factory=dict)
    status: HostStatus = HostStatus.NORMAL
    failure_until: int | None = None  # epoch milliseconds

    def is_failed(self, now_ms: int) -> bool:
        return self.failure_until is not None and now_ms < self.failure_until


@dataclass
class Reading:
    """A single metric reading for one host"""

    event_id: str
    host_id: str
    zone: str
    timestamp: int  # epoch milliseconds
    metric: Metric
    value: float
    unit: str
    tags: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Exchange record representation"""
        return {
            "event_id": self.event_id,
            "host_id": self.host_id,
            "zone": self.zone,
            "timestamp": self.timestamp,
            "metric": self.metric.value,
            "value": self.value,
            "unit": self.unit,
            "tags": dict(self.tags),
        }


OUTPUT_MODES = ("stdout", "kafka")


@dataclass
class GeneratorConfig:
    """Configuration for the metrics generator"""

    # Output settings
    mode: str = "stdout"
    kafka_bootstrap_servers: str = "127.0.0.1:9092"
    kafka_topic: str = "dc_metrics"

    # Datacenter topology
    num_zones: int = 4
    servers_per_zone: int = 10

    # Generation settings
    interval_ms: int = 500
    max_selection_attempts: int = 1000  # re-selections before a tick is skipped
    stats_interval_seconds: float = 10.0

    def __post_init__(self):
        if self.mode not in OUTPUT_MODES:
            raise ValueError(f"mode must be one of {OUTPUT_MODES}, got {self.mode!r}")
        if not 1 <= self.num_zones <= 26:
            raise ValueError(f"num_zones must be between 1 and 26, got {self.num_zones}")
        if self.servers_per_zone < 1:
            raise ValueError(f"servers_per_zone must be positive, got {self.servers_per_zone}")
        if self.interval_ms < 0:
            raise ValueError(f"interval_ms must not be negative, got {self.interval_ms}")
        if self.max_selection_attempts < 1:
            raise ValueError(
                f"max_selection_attempts must be positive, got {self.max_selection_attempts}"
            )

    @property
    def interval_seconds(self) -> float:
        return self.interval_ms / 1000
