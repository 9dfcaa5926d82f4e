"""
Predefined configurations for different operational scenarios.
"""

from .models import GeneratorConfig

# Matches the CLI defaults
DEFAULT_CONFIG = GeneratorConfig()


# Development/Testing (fast and small)
DEV_CONFIG = GeneratorConfig(num_zones=2, servers_per_zone=5, interval_ms=1000)


# Large datacenter, several racks per zone
LARGE_CONFIG = GeneratorConfig(num_zones=8, servers_per_zone=120, interval_ms=200)


# High rate for downstream load testing
STRESS_CONFIG = GeneratorConfig(num_zones=26, servers_per_zone=300, interval_ms=10)
