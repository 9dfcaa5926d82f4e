"""
Packaging of simulated values into exchange records.
"""

import json
import time
import uuid

from .models import Metric, Reading


def current_millis() -> int:
    """Wall-clock time in integer milliseconds since the epoch"""
    return time.time_ns() // 1_000_000


class ReadingFormatter:
    """Builds Reading objects and serializes them to JSON lines"""

    def build(
        self,
        zone: str,
        host_id: str,
        metric: Metric,
        value: float,
        timestamp: int | None = None,
    ) -> Reading:
        return Reading(
            event_id=str(uuid.uuid4()),
            host_id=host_id,
            zone=zone,
            timestamp=current_millis() if timestamp is None else timestamp,
            metric=metric,
            value=value,
            unit=metric.unit,
        )

    @staticmethod
    def serialize(reading: Reading) -> str:
        """Render a reading as a single line of JSON"""
        return json.dumps(reading.to_dict(), ensure_ascii=False)
