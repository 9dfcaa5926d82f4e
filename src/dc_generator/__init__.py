"""
Data Center Metrics Generator
Simulates per-server telemetry as bounded random walks with overloads and outages.
"""

from .config import DEFAULT_CONFIG, DEV_CONFIG, LARGE_CONFIG, STRESS_CONFIG
from .emitters import ConsoleEmitter, KafkaEmitter, parse_kafka_brokers
from .formatter import ReadingFormatter
from .generator import DatacenterGenerator
from .models import METRIC_CATALOG, GeneratorConfig, HostState, HostStatus, Metric, Reading
from .simulator import MetricSimulator
from .zone import ZoneGenerator, host_id_for, zone_name_for

__all__ = [
    "Metric",
    "METRIC_CATALOG",
    "HostStatus",
    "HostState",
    "Reading",
    "GeneratorConfig",
    "MetricSimulator",
    "ReadingFormatter",
    "ZoneGenerator",
    "host_id_for",
    "zone_name_for",
    "ConsoleEmitter",
    "KafkaEmitter",
    "parse_kafka_brokers",
    "DatacenterGenerator",
    "DEFAULT_CONFIG",
    "DEV_CONFIG",
    "LARGE_CONFIG",
    "STRESS_CONFIG",
]

__version__ = "1.0.0"
