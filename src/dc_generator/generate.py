"""
Data Center Metrics Generator - CLI Entry Point
Streams simulated per-server telemetry to stdout or to a Kafka topic
"""

import argparse
import dataclasses
import logging
import os
import sys

import structlog

from src.core.logger import level_from_env, setup_logging
from src.dc_generator import (
    DEFAULT_CONFIG,
    DEV_CONFIG,
    LARGE_CONFIG,
    STRESS_CONFIG,
    ConsoleEmitter,
    DatacenterGenerator,
    GeneratorConfig,
    KafkaEmitter,
    parse_kafka_brokers,
)
from src.dc_generator.models import OUTPUT_MODES

logger = structlog.get_logger(__name__)


# Predefined configurations
CONFIGS = {
    "default": DEFAULT_CONFIG,
    "dev": DEV_CONFIG,
    "large": LARGE_CONFIG,
    "stress": STRESS_CONFIG,
}


def parse_arguments(argv: list[str] | None = None):
    """Parse command-line arguments"""
    parser = argparse.ArgumentParser(
        prog="dc-generator",
        description="Real-time data center metrics traffic generator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
            Examples:
            # Print readings to stdout with default topology
            python -m src.dc_generator.generate --mode stdout

            # Small dev topology, one reading per zone every 100 ms
            python -m src.dc_generator.generate --config dev --timeout 100

            # Send to Kafka
            python -m src.dc_generator.generate --mode kafka --address kafka:9092 --topic dc_metrics

            # Using environment variables
            export DC_MODE=kafka
            export KAFKA_BOOTSTRAP_SERVERS=kafka-1:9092,kafka-2:9092
            python -m src.dc_generator.generate
        """,
    )

    # Output settings
    parser.add_argument(
        "-m",
        "--mode",
        choices=OUTPUT_MODES,
        default=os.getenv("DC_MODE", "stdout"),
        help="Output mode (default: stdout or DC_MODE env var)",
    )
    parser.add_argument(
        "--topic",
        default=os.getenv("KAFKA_TOPIC"),
        help="Kafka topic name (default: dc_metrics or KAFKA_TOPIC env var)",
    )
    parser.add_argument(
        "--address",
        default=os.getenv("KAFKA_BOOTSTRAP_SERVERS"),
        help="Kafka brokers as HOST:PORT[,HOST:PORT...] "
        "(default: 127.0.0.1:9092 or KAFKA_BOOTSTRAP_SERVERS env var)",
    )

    # Predefined config
    parser.add_argument(
        "--config", choices=list(CONFIGS.keys()), help="Use a predefined configuration"
    )

    # Generation settings
    parser.add_argument(
        "-t",
        "--timeout",
        "--interval-ms",
        dest="interval_ms",
        type=int,
        help="Milliseconds between readings of each zone (default: 500)",
    )
    parser.add_argument("--zones", type=int, help="Number of zones in data center (default: 4)")
    parser.add_argument(
        "--servers-per-zone", type=int, help="Number of servers per zone (default: 10)"
    )

    # Runtime settings
    parser.add_argument(
        "--duration", type=float, help="Duration to run in seconds (default: infinite)"
    )

    # Logging
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        type=str.upper,
        default=logging.getLevelName(level_from_env()),
        help="Logging level (default: INFO or LOG_LEVEL env var)",
    )

    args = parser.parse_args(argv)

    if args.mode == "kafka" and args.address:
        try:
            parse_kafka_brokers(args.address)
        except ValueError as e:
            parser.error(str(e))

    return args


def build_config_from_args(args) -> GeneratorConfig:
    """Build a GeneratorConfig from command-line arguments"""

    # Start with predefined config if specified
    if args.config:
        config = CONFIGS[args.config]
        logger.info("Using predefined configuration", config_name=args.config)
    else:
        config = GeneratorConfig()
        logger.info("Using default configuration")

    overrides = {
        "mode": args.mode,
        "kafka_bootstrap_servers": args.address,
        "kafka_topic": args.topic,
        "interval_ms": args.interval_ms,
        "num_zones": args.zones,
        "servers_per_zone": args.servers_per_zone,
    }
    # Presets are shared, replace() validates and returns a copy
    return dataclasses.replace(
        config, **{k: v for k, v in overrides.items() if v is not None}
    )


def build_emitter(config: GeneratorConfig):
    """Create the output sink for the configured mode"""
    if config.mode == "kafka":
        return KafkaEmitter(config.kafka_bootstrap_servers, config.kafka_topic)
    return ConsoleEmitter(sys.stdout)


def main(argv: list[str] | None = None):
    """Main entry point"""
    args = parse_arguments(argv)

    # Setup logging
    setup_logging(level=getattr(logging, args.log_level))

    logger.info("Starting Data Center Metrics Generator")

    try:
        config = build_config_from_args(args)
        emitter = build_emitter(config)

        generator = DatacenterGenerator(config, emitter)
        generator.run(duration_seconds=args.duration)

        logger.info("Generator completed successfully")
        return 0

    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 0

    except Exception as e:
        logger.error("Generator failed", error=str(e), exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
