"""
Zone generator: drives the simulator over a fixed set of hosts.
"""

import random
from collections.abc import Callable

import structlog

from .formatter import ReadingFormatter, current_millis
from .models import METRIC_CATALOG, HostState, Reading
from .simulator import MetricSimulator

logger = structlog.get_logger(__name__)

SERVERS_PER_RACK = 30


def host_id_for(index: int) -> str:
    """Display identifier of the host at a zero-based position in its zone"""
    server = index + 1
    rack = index // SERVERS_PER_RACK + 1
    return f"srv-{server:02d}-rack-{rack:02d}"


def zone_name_for(index: int) -> str:
    """Display name of the zone at a zero-based position: zone-A, zone-B, ..."""
    return f"zone-{chr(ord('A') + index)}"


class ZoneGenerator:
    """Produces readings for the hosts of a single zone, one per call"""

    def __init__(
        self,
        zone: str,
        servers: int,
        rng: random.Random | None = None,
        clock: Callable[[], int] | None = None,
        max_attempts: int = 1000,
    ):
        if servers < 1:
            raise ValueError(f"A zone needs at least one server, got {servers}")

        self.zone = zone
        self.rng = rng or random.Random()
        self.clock = clock or current_millis
        self.max_attempts = max_attempts

        self.hosts: list[HostState] = [HostState() for _ in range(servers)]
        self.simulator = MetricSimulator(self.rng)
        self.formatter = ReadingFormatter()

        self.produced = 0
        self.skipped = 0

    def generate(self) -> Reading | None:
        """Generate the next reading

        Hosts in an outage are skipped by drawing a new host and metric.

        Returns:
            A Reading, or None when no available host was found within
            max_attempts draws (every host is likely down).
        """
        for _ in range(self.max_attempts):
            host_index = self.rng.randrange(len(self.hosts))
            metric = self.rng.choice(METRIC_CATALOG)
            now_ms = self.clock()

            value = self.simulator.step(self.hosts[host_index], metric, now_ms)
            if value is None:
                continue

            self.produced += 1
            return self.formatter.build(
                zone=self.zone,
                host_id=host_id_for(host_index),
                metric=metric,
                value=value,
                timestamp=now_ms,
            )

        self.skipped += 1
        logger.warning(
            "No available host found, skipping tick",
            zone=self.zone,
            attempts=self.max_attempts,
            failed_hosts=sum(1 for h in self.hosts if h.is_failed(self.clock())),
        )
        return None
