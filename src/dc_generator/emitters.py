"""
Output sinks for generated readings: console and Kafka.
"""

import json
import sys
from typing import TextIO

import structlog
from kafka import KafkaProducer

from .formatter import ReadingFormatter
from .models import Reading

logger = structlog.get_logger(__name__)


def parse_kafka_brokers(address: str) -> list[str]:
    """Validate a comma-separated list of HOST:PORT broker addresses

    Args:
        address: e.g. "kafka-1:9092,kafka-2:9092"

    Returns:
        The list of normalized "host:port" entries.

    Raises:
        ValueError: if the list is empty or an entry is malformed.
    """
    brokers = []
    for entry in address.strip().split(","):
        entry = entry.strip()
        if not entry:
            continue
        host, sep, port = entry.rpartition(":")
        if not sep or not host:
            raise ValueError(f"Kafka broker address must be in format HOST:PORT, got {entry!r}")
        if not port.isdigit() or not 0 < int(port) < 65536:
            raise ValueError(f"Invalid port number in Kafka broker address {entry!r}")
        brokers.append(f"{host.strip()}:{int(port)}")

    if not brokers:
        raise ValueError("Kafka brokers list must be in format HOST1:PORT,HOST2:PORT,...")
    return brokers


class ConsoleEmitter:
    """Writes one JSON line per reading"""

    def __init__(self, stream: TextIO | None = None):
        self.stream = stream or sys.stdout

    def emit(self, reading: Reading) -> None:
        self.stream.write(ReadingFormatter.serialize(reading) + "\n")
        self.stream.flush()

    def close(self) -> None:
        pass


class KafkaEmitter:
    """Sends readings to a Kafka topic, keyed by host id

    Delivery is fire-and-forget: failures are logged and the reading dropped.
    """

    def __init__(self, bootstrap_servers: str, topic: str, max_block_ms: int = 1000):
        self.topic = topic
        self.delivery_errors = 0

        try:
            self.producer = KafkaProducer(
                bootstrap_servers=parse_kafka_brokers(bootstrap_servers),
                key_serializer=lambda k: k.encode("utf-8"),
                value_serializer=lambda v: json.dumps(v, ensure_ascii=False).encode("utf-8"),
                # Bounds how long send() may block on metadata or a full buffer
                max_block_ms=max_block_ms,
            )
            logger.info(
                "Kafka producer initialized",
                bootstrap_servers=bootstrap_servers,
                topic=topic,
            )
        except Exception as e:
            logger.error("Failed to initialize Kafka producer", error=str(e))
            raise

    def emit(self, reading: Reading) -> None:
        future = self.producer.send(self.topic, key=reading.host_id, value=reading.to_dict())
        future.add_errback(self._on_delivery_error, reading)

    def _on_delivery_error(self, reading: Reading, exc: Exception) -> None:
        self.delivery_errors += 1
        logger.warning(
            "Failed to deliver reading",
            topic=self.topic,
            event_id=reading.event_id,
            host_id=reading.host_id,
            error=str(exc),
        )

    def close(self) -> None:
        try:
            self.producer.flush(timeout=5)
        except Exception as e:
            logger.warning("Failed to flush Kafka producer", error=str(e))
        finally:
            self.producer.close()
            logger.info("Kafka producer closed", delivery_errors=self.delivery_errors)
