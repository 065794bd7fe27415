"""
SnipeCord - CLI Entry Point
===========================

Runs the section sniper: polls Rutgers open sections and posts to a Discord
webhook when a watched index opens.

Usage:
    # Start sniping
    snipecord

    # Dry run (alerts only go to the log)
    snipecord --dry-run

    # Test webhook configuration
    snipecord --test-webhook
"""

import argparse
import asyncio
import logging
import sys
from datetime import datetime
from pathlib import Path

from .alerts import send_test_alert
from .config import Config
from .exceptions import ConfigError, SOCAPIError
from .monitor import SniperService
from .settings import CONFIG_PATH, LOG_FILE, LOG_LEVEL, POLL_INTERVAL_SECONDS


def setup_logging(log_level: str = LOG_LEVEL, log_file: str = LOG_FILE):
    """Configure logging for the sniper service."""
    log_path = Path(log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    # Date-stamped log file (e.g., logs/snipecord_2024-08-20.log)
    date_str = datetime.now().strftime("%Y-%m-%d")
    dated_log_file = log_path.parent / f"{log_path.stem}_{date_str}{log_path.suffix}"

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(getattr(logging, log_level.upper()))

    formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')

    file_handler = logging.FileHandler(dated_log_file)
    file_handler.setFormatter(formatter)
    root_logger.addHandler(file_handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    # Reduce noise from HTTP libraries
    logging.getLogger("aiohttp").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("requests").setLevel(logging.WARNING)

    root_logger.info(f"Logging to: {dated_log_file}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='SnipeCord - Rutgers section sniper',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  snipecord                          # Start sniping
  snipecord --config my.json         # Use another config file
  snipecord --dry-run                # Log alerts instead of posting
  snipecord --test-webhook           # Test Discord webhook setup
        """
    )

    parser.add_argument(
        '--config',
        default=CONFIG_PATH,
        help=f'Path to config JSON (default: {CONFIG_PATH})'
    )

    parser.add_argument(
        '--interval',
        type=float,
        default=POLL_INTERVAL_SECONDS,
        help=f'Open sections poll interval in seconds (default: {POLL_INTERVAL_SECONDS})'
    )

    parser.add_argument(
        '--dry-run',
        action='store_true',
        help='Log alerts instead of sending them to Discord'
    )

    parser.add_argument(
        '--test-webhook',
        action='store_true',
        help='Send a test message to verify the webhook and exit'
    )

    parser.add_argument(
        '--log-level',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        default=LOG_LEVEL.upper(),
        help=f'Log level (default: {LOG_LEVEL})'
    )

    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    setup_logging(args.log_level)
    logger = logging.getLogger(__name__)

    if args.interval <= 0:
        logger.error("--interval must be positive")
        sys.exit(1)

    try:
        config = Config.load(args.config)
    except ConfigError as e:
        logger.error(f"Invalid configuration: {e}")
        sys.exit(1)

    if args.test_webhook:
        if send_test_alert(config.webhook, config.mention, dry_run=args.dry_run):
            logger.info("Test message sent successfully")
            sys.exit(0)
        logger.error("Failed to send test message. Check the webhook URL in your config.")
        sys.exit(1)

    service = SniperService(
        config,
        poll_interval_seconds=args.interval,
        dry_run=args.dry_run,
    )

    try:
        asyncio.run(service.run())
    except KeyboardInterrupt:
        logger.info("Sniper stopped by user")
        sys.exit(0)
    except SOCAPIError as e:
        logger.error(f"Failed to load course metadata: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
