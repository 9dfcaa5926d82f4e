"""
Random-walk simulation of host metrics with overload and outage transitions.
"""

import random

from .models import HostState, HostStatus, Metric

STEP_FRACTION = 0.10
OVERLOAD_AMPLIFICATION = 1.3
OVERLOAD_PROBABILITY = 0.05
OVERLOAD_SURGE_RANGE = (1.2, 1.5)
OUTAGE_PROBABILITY = 0.01
OUTAGE_DURATION_MS = (10_000, 30_000)


class MetricSimulator:
    """Computes the next value of a metric for a host and updates its state"""

    def __init__(self, rng: random.Random | None = None):
        self.rng = rng or random.Random()

    def step(self, host: HostState, metric: Metric, now_ms: int) -> float | None:
        """Advance one metric of one host by a single tick

        Args:
            host: State of the host, mutated in place
            metric: Metric to advance
            now_ms: Current time in epoch milliseconds

        Returns:
            The new clamped value, or None if the host is in an outage.
        """
        if host.failure_until is not None:
            if now_ms < host.failure_until:
                return None
            # Outage is over, host comes back healthy
            host.failure_until = None
            host.status = HostStatus.NORMAL

        previous = host.last_values.get(metric, metric.baseline)
        value = previous * (1.0 + self.rng.uniform(-STEP_FRACTION, STEP_FRACTION))

        if host.status is HostStatus.OVERLOADED:
            value *= OVERLOAD_AMPLIFICATION

        if self.rng.random() < OVERLOAD_PROBABILITY:
            host.status = HostStatus.OVERLOADED
            value *= self.rng.uniform(*OVERLOAD_SURGE_RANGE)

        if self.rng.random() < OUTAGE_PROBABILITY:
            host.failure_until = now_ms + self.rng.randrange(*OUTAGE_DURATION_MS)

        value = metric.clamp(value)
        host.last_values[metric] = value
        return value
