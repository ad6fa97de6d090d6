import sys
import os
import yaml
import argparse
from loguru import logger

from .core.descriptor import DestinationDescriptor
from .core.errors import InvalidArgumentError
from .manager import DestinationManager
from .naming.memory import default_naming_service
from .qos.policy import DataReaderQosPolicy, DataWriterQosPolicy, TopicQosPolicy


def create_parser():
    parser = argparse.ArgumentParser(
        description="Topic-Binder",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    parser.add_argument(
        "--config",
        type=str,
        default="./config.yaml",
        metavar="FILE",
        help="YAML config file",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Validate the destinations and exit without binding them",
    )

    return parser


def load_config(path: str):
    config_path = os.path.join(os.getcwd(), path)

    try:
        with open(config_path, "r") as f:
            config = yaml.safe_load(f) or {}
            logger.info("Config loaded successfully.")
            return config
    except FileNotFoundError:
        logger.critical(f"Config file not found in '{config_path}'")
        sys.exit(1)
    except yaml.YAMLError as e:
        logger.critical(f"Syntax error in YAML file '{config_path}': {e}")
        sys.exit(1)


def configure_logging(config: dict):
    logging_config = config.get("logging") or {}
    if not isinstance(logging_config, dict):
        raise InvalidArgumentError("'logging' must be a mapping")
    log_level = str(logging_config.get("level", "INFO")).upper()
    logger.remove()
    logger.add(sys.stderr, level=log_level, colorize=True)
    logger.info(f"Logger level set to: {log_level}")


def build_destinations(config: dict) -> list[DestinationDescriptor]:
    naming = default_naming_service()
    destinations = []
    entries = config.get("destinations") or []
    if not isinstance(entries, list):
        raise InvalidArgumentError("'destinations' must be a list")

    for index, dest_config in enumerate(entries):
        if not isinstance(dest_config, dict):
            raise InvalidArgumentError(
                f"Destination #{index} must be a mapping, got {dest_config!r}"
            )
        if not dest_config.get("enabled", True):
            logger.debug(f"Destination #{index} is disabled. Skipping.")
            continue
        destination = DestinationDescriptor.from_config(dest_config, naming=naming)
        destinations.append(destination)
        logger.debug(f"Destination '{destination.destination_name}' created.")
    return destinations


def check_destination(destination: DestinationDescriptor):
    """Runs every validation start() would run, without binding anything."""
    destination.verify()
    DataReaderQosPolicy(destination.data_reader_policy)
    DataWriterQosPolicy(destination.data_writer_policy)
    TopicQosPolicy(destination.topic_policy)


def check(destinations: list[DestinationDescriptor]) -> int:
    failures = 0
    for destination in destinations:
        try:
            check_destination(destination)
            logger.success(f"Destination '{destination.destination_name}' is valid.")
        except InvalidArgumentError as e:
            failures += 1
            logger.error(f"Destination '{destination.destination_name}' is invalid: {e}")
    return 1 if failures else 0


def main(argv: list[str] | None = None) -> int:
    parser = create_parser()
    args = parser.parse_args(argv)
    config = load_config(args.config)
    if not isinstance(config, dict):
        logger.critical(f"Config file '{args.config}' must contain a mapping")
        return 1

    try:
        configure_logging(config)
        destinations = build_destinations(config)
    except InvalidArgumentError as e:
        logger.critical(f"Invalid configuration: {e}")
        return 1

    if not destinations:
        logger.warning("No destinations are defined in the configuration. Exiting.")
        return 0

    if args.check:
        return check(destinations)

    manager = DestinationManager(destinations)
    try:
        manager.run()
    except Exception as e:
        logger.critical(f"Destinations could not be started: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
