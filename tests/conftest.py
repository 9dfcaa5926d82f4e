"""
Pytest configuration and shared fixtures.
"""

import itertools
import random

import pytest

from src.dc_generator.models import GeneratorConfig, Reading


class ScriptedRandom(random.Random):
    """Random source with fixed outcomes for the simulator's probabilistic branches.

    - uniform(-0.1, 0.1) returns `step`, any other uniform() returns `surge`
    - random() alternates between the overload roll and the outage roll
    """

    def __init__(self, step=0.0, overload=False, outage=False, surge=1.25):
        super().__init__(1234)
        self.step = step
        self.surge = surge
        self._rolls = itertools.cycle([0.0 if overload else 0.99, 0.0 if outage else 0.99])

    def uniform(self, a, b):
        return self.step if a < 0 else self.surge

    def random(self):
        return next(self._rolls)

    def getrandbits(self, k):
        # Defined here so random.Random.__init_subclass__ selects the getrandbits-based
        # _randbelow; otherwise randrange()/choice() would consume the scripted rolls
        return super().getrandbits(k)


class FakeClock:
    """Manually driven millisecond clock"""

    def __init__(self, now_ms=1_700_000_000_000, tick_ms=0):
        self.now_ms = now_ms
        self.tick_ms = tick_ms

    def __call__(self):
        now = self.now_ms
        self.now_ms += self.tick_ms
        return now


class RecordingEmitter:
    """Collects emitted readings in memory"""

    def __init__(self, fail=False):
        self.fail = fail
        self.readings: list[Reading] = []
        self.calls = 0
        self.closed = False

    def emit(self, reading):
        self.calls += 1
        if self.fail:
            raise ConnectionError("broker unreachable")
        self.readings.append(reading)

    def close(self):
        self.closed = True


# Generator fixtures
@pytest.fixture
def scripted_random():
    """Factory for ScriptedRandom instances."""
    return ScriptedRandom


@pytest.fixture
def fake_clock():
    """Factory for FakeClock instances."""
    return FakeClock


@pytest.fixture
def recording_emitter():
    """Emitter keeping readings in memory."""
    return RecordingEmitter()


@pytest.fixture
def failing_emitter():
    """Emitter raising on every reading."""
    return RecordingEmitter(fail=True)


@pytest.fixture
def fast_config():
    """Small topology with a short interval for fast tests."""
    return GeneratorConfig(
        num_zones=3,
        servers_per_zone=5,
        interval_ms=5,
        stats_interval_seconds=0.05,
    )


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep CLI defaults independent from the developer's environment."""
    for name in ("DC_MODE", "KAFKA_TOPIC", "KAFKA_BOOTSTRAP_SERVERS", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
