"""
Hue Bridge Collector - Main Entry Point
"""

import argparse
import asyncio
import signal
import sys
import logging
import os

import yaml

from config_loader import DESCRIPTION, get_sample_config
from services.collector_server import CollectorServer

logger = logging.getLogger(__name__)

def parse_args(argv=None):
    parser = argparse.ArgumentParser(description=DESCRIPTION)
    parser.add_argument(
        "--config",
        default=os.environ.get('CONFIG_FILE', 'config/config.yaml'),
        help="Configuration file (default: $CONFIG_FILE or config/config.yaml)"
    )
    parser.add_argument("--once", action="store_true",
                        help="Run a single poll cycle, print line protocol and exit")
    parser.add_argument("--sample-config", action="store_true",
                        help="Print a sample configuration and exit")
    return parser.parse_args(argv)

async def run_once(config_path: str) -> int:
    """Single poll cycle - records go to stdout, errors to the log"""
    server = CollectorServer(config_path=config_path)
    try:
        report = await server.poll_once()
    finally:
        await server.poller.close()

    for record in report.records:
        print(record.to_line_protocol())

    return 1 if report.config_error else 0

async def main(config_path: str):
    """Main entry point"""
    # Handle graceful shutdown
    server = None
    loop = asyncio.get_running_loop()

    def signal_handler(signum):
        logger.info(f"Received signal {signum}, shutting down...")
        if server:
            asyncio.create_task(server.stop())

    for signum in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(signum, signal_handler, signum)
        except NotImplementedError:
            # Windows event loops have no signal handler support
            pass

    try:
        logger.info(f"Using configuration file: {config_path}")
        server = CollectorServer(config_path=config_path)

        await server.start()

    except asyncio.CancelledError:
        logger.info("Polling cancelled")
    except Exception as e:
        logger.error(f"Server failed: {e}")
        return 1
    finally:
        if server:
            await server.stop()

    return 0

if __name__ == "__main__":
    args = parse_args()

    if args.sample_config:
        print(yaml.safe_dump(get_sample_config(), sort_keys=False), end="")
        sys.exit(0)

    try:
        if args.once:
            exit_code = asyncio.run(run_once(args.config))
        else:
            exit_code = asyncio.run(main(args.config))
        sys.exit(exit_code)
    except KeyboardInterrupt:
        print("\nCollector stopped by user")
        sys.exit(0)
