"""
Main datacenter generator running one concurrent task per zone.
"""

import asyncio
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Protocol

import structlog

from .models import GeneratorConfig, Reading
from .zone import ZoneGenerator, zone_name_for

logger = structlog.get_logger(__name__)


class Emitter(Protocol):
    def emit(self, reading: Reading) -> None: ...

    def close(self) -> None: ...


class DatacenterGenerator:
    """Orchestrates zone generators and hands their readings to an emitter

    Each zone delivers through its own worker thread, so a sink that blocks
    on one zone's reading never delays the ticks of any zone.
    """

    def __init__(self, config: GeneratorConfig, emitter: Emitter):
        self.config = config
        self.emitter = emitter
        logger.info("Initializing datacenter generator", config=config)

        self.zones: list[ZoneGenerator] = [
            ZoneGenerator(
                zone_name_for(i),
                config.servers_per_zone,
                max_attempts=config.max_selection_attempts,
            )
            for i in range(config.num_zones)
        ]

        self.stats = {
            "emitted": 0,
            "skipped": 0,
            "emit_errors": 0,
        }
        # Delivery workers of different zones update stats concurrently
        self._stats_lock = threading.Lock()

        logger.info(
            "Zones initialized",
            zones=[z.zone for z in self.zones],
            servers_per_zone=config.servers_per_zone,
        )

    def _count(self, key: str):
        with self._stats_lock:
            self.stats[key] += 1

    def _produce(self, zone: ZoneGenerator) -> Reading | None:
        reading = zone.generate()
        if reading is None:
            self._count("skipped")
        return reading

    def _deliver(self, zone_name: str, reading: Reading):
        """Hand a reading to the emitter, logging and dropping it on error"""
        try:
            self.emitter.emit(reading)
            self._count("emitted")
        except Exception as e:
            self._count("emit_errors")
            logger.warning(
                "Failed to emit reading",
                zone=zone_name,
                host_id=reading.host_id,
                event_id=reading.event_id,
                error=str(e),
            )

    def tick(self, zone: ZoneGenerator) -> Reading | None:
        """Produce one reading for a zone and emit it in the calling thread"""
        reading = self._produce(zone)
        if reading is not None:
            self._deliver(zone.zone, reading)
        return reading

    async def _run_zone(self, zone: ZoneGenerator, delivery: ThreadPoolExecutor):
        logger.debug("Zone task started", zone=zone.zone)
        loop = asyncio.get_running_loop()
        deadline = loop.time()
        while True:
            # Fixed schedule: late ticks fire immediately until caught up
            deadline += self.config.interval_seconds
            await asyncio.sleep(max(0.0, deadline - loop.time()))
            reading = self._produce(zone)
            if reading is not None:
                delivery.submit(self._deliver, zone.zone, reading)

    async def _report_stats(self, start_time: float):
        while True:
            await asyncio.sleep(self.config.stats_interval_seconds)
            elapsed = time.time() - start_time
            rate = self.stats["emitted"] / elapsed if elapsed > 0 else 0
            logger.info(
                "Generator stats",
                **self.stats,
                rate_per_sec=round(rate, 1),
                elapsed_sec=round(elapsed, 1),
            )

    async def run_async(self, duration_seconds: float | None = None):
        """Run all zone tasks until the duration elapses or they are cancelled"""
        logger.info(
            "Starting generator",
            mode=self.config.mode,
            zones=len(self.zones),
            interval_ms=self.config.interval_ms,
            duration=duration_seconds if duration_seconds else "indefinite",
        )

        start_time = time.time()
        deliveries = {
            zone.zone: ThreadPoolExecutor(max_workers=1, thread_name_prefix=f"emit-{zone.zone}")
            for zone in self.zones
        }
        tasks = [
            asyncio.create_task(self._run_zone(zone, deliveries[zone.zone]), name=zone.zone)
            for zone in self.zones
        ]
        tasks.append(asyncio.create_task(self._report_stats(start_time), name="stats"))

        try:
            done, _ = await asyncio.wait(
                tasks, timeout=duration_seconds, return_when=asyncio.FIRST_EXCEPTION
            )
            for task in done:
                # Zone loops never return, so a finished task carries an exception
                task.result()
            if duration_seconds:
                logger.info("Duration limit reached", duration_seconds=duration_seconds)
        finally:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            # Queued readings are dropped, only in-flight emits are waited for
            for delivery in deliveries.values():
                delivery.shutdown(wait=True, cancel_futures=True)

    def run(self, duration_seconds: float | None = None):
        """Run the generator continuously or for a specified duration

        Args:
            duration_seconds: Optional duration in seconds. If None, runs indefinitely.
        """
        start_time = time.time()

        try:
            asyncio.run(self.run_async(duration_seconds))

        except KeyboardInterrupt:
            logger.info("Received interrupt signal, stopping generator")

        except Exception as e:
            logger.error("Generator error", error=str(e), exc_info=True)
            raise

        finally:
            elapsed = time.time() - start_time
            rate = self.stats["emitted"] / elapsed if elapsed > 0 else 0

            self.emitter.close()
            logger.info(
                "Generator stopped",
                **self.stats,
                elapsed_sec=round(elapsed, 1),
                avg_rate_per_sec=round(rate, 1),
            )
