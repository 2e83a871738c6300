################################################################################
# File Name: main.py
# Purpose/Description: NavLink command line entry point
# Author: Ralph Agent
# Creation Date: 2026-10-17
# Copyright: (c) 2026 NavLink Project. All rights reserved.
#
# Modification History:
# ================================================================================
# Date          | Author       | Description
# ================================================================================
# 2026-10-17    | Ralph Agent  | Initial implementation
# ================================================================================
################################################################################

"""
NavLink command line entry point.

Replays captured phone notifications through the full pipeline against a
simulated display link:
- CLI argument parsing
- Configuration loading and validation
- Logging setup from the 'logging' section
- JSON-lines replay from a file or stdin
- Error handling and exit codes

Each input line is an object with 'packageName', 'title', 'text' and
'bigText'. One JSON result line is printed per notification, followed by
a status summary.

Usage:
    python src/main.py --help
    python src/main.py --replay notifications.jsonl
    cat notifications.jsonl | python src/main.py --dry-run
"""

import argparse
import json
import sys
import time
from collections.abc import Iterator
from pathlib import Path
from typing import IO, Any

# Resolve project paths relative to this script (not CWD)
srcPath = Path(__file__).resolve().parent
projectRoot = srcPath.parent
if str(srcPath) not in sys.path:
    sys.path.insert(0, str(srcPath))

DEFAULT_CONFIG = str(srcPath / 'navlink_config.json')
DEFAULT_ENV = str(projectRoot / '.env')

from common.error_handler import ConfigurationError, handleError
from common.logging_config import getLogger, setupLogging, setupLoggingFromConfig
from navlink.config.loader import loadNavlinkConfig
from navlink.delivery.dispatcher import ThreadedDispatcher
from navlink.delivery.simulated import createSimulatedTransportFromConfig
from navlink.pipeline import NotificationPipeline, createPipelineFromConfig
from navlink.transform.exceptions import PayloadOverflowError

# Exit codes
EXIT_SUCCESS = 0
EXIT_CONFIG_ERROR = 1
EXIT_RUNTIME_ERROR = 2

# Seconds to wait for queued messages to drain after the replay
DEFAULT_SETTLE_SECONDS = 3.0
SETTLE_POLL_SECONDS = 0.05


def parseArgs(argv: list[str] | None = None) -> argparse.Namespace:
    """
    Parse command line arguments.

    Returns:
        Parsed arguments namespace
    """
    parser = argparse.ArgumentParser(
        description='Forward phone notifications to a navigation display',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog='''
Examples:
  python main.py --replay notes.jsonl          Replay a capture file
  cat notes.jsonl | python main.py             Replay from stdin
  python main.py --replay notes.jsonl --dry-run  Print payloads only
  python main.py --verbose                     Run with debug logging
        '''
    )

    parser.add_argument(
        '--config', '-c',
        default=DEFAULT_CONFIG,
        help='Path to configuration file (default: src/navlink_config.json)'
    )

    parser.add_argument(
        '--env-file', '-e',
        default=DEFAULT_ENV,
        help='Path to environment file (default: .env)'
    )

    parser.add_argument(
        '--replay', '-r',
        default=None,
        help='JSON-lines notification file (default: stdin)'
    )

    parser.add_argument(
        '--dry-run',
        action='store_true',
        help='Parse and render payloads without connecting'
    )

    parser.add_argument(
        '--settle',
        type=float,
        default=DEFAULT_SETTLE_SECONDS,
        help='Seconds to wait for queued messages after the replay'
    )

    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Enable verbose (debug) logging'
    )

    parser.add_argument(
        '--version',
        action='version',
        version='%(prog)s 1.0.0'
    )

    return parser.parse_args(argv)


def readNotifications(stream: IO[str]) -> Iterator[dict[str, Any]]:
    """
    Yield notification dictionaries from a JSON-lines stream.

    Blank lines are skipped; malformed lines are logged and skipped.
    """
    logger = getLogger(__name__)

    for lineNumber, line in enumerate(stream, start=1):
        line = line.strip()
        if not line:
            continue
        try:
            record = json.loads(line)
        except json.JSONDecodeError as e:
            logger.warning(f"Skipping malformed line | line={lineNumber} error={e.msg}")
            continue
        if not isinstance(record, dict) or not record.get('packageName'):
            logger.warning(f"Skipping line without packageName | line={lineNumber}")
            continue
        yield record


def replay(pipeline: NotificationPipeline, stream: IO[str], out: IO[str]) -> int:
    """
    Process every notification in the stream.

    Returns:
        Number of notifications processed
    """
    count = 0
    for record in readNotifications(stream):
        result = pipeline.processNotification(
            record['packageName'],
            record.get('title'),
            record.get('text'),
            record.get('bigText')
        )
        count += 1
        out.write(json.dumps({
            'packageName': record['packageName'],
            'outcome': result.outcome.value,
            'source': result.source,
            'event': result.event.toDict() if result.event is not None else None
        }, ensure_ascii=False) + '\n')
    return count


def dryRun(pipeline: NotificationPipeline, stream: IO[str], out: IO[str]) -> int:
    """
    Parse and render without delivery.

    Returns:
        Number of notifications read
    """
    logger = getLogger(__name__)
    count = 0
    for record in readNotifications(stream):
        count += 1
        event, source = pipeline.parseNotification(
            record['packageName'],
            record.get('title'),
            record.get('text'),
            record.get('bigText')
        )
        payload = None
        if event is not None:
            try:
                payload = pipeline.selector.current().transformEvent(event)
            except PayloadOverflowError as e:
                logger.error(f"Payload overflow | size={e.payloadSize} max={e.maxPayload}")
        out.write(json.dumps({
            'packageName': record['packageName'],
            'source': source,
            'payload': payload
        }, ensure_ascii=False) + '\n')
    return count


def waitForDelivery(pipeline: NotificationPipeline, timeoutSeconds: float) -> bool:
    """
    Wait until the queue is empty while connected, or a persistent failure.

    Returns:
        True if everything queued was delivered
    """
    deadline = time.monotonic() + timeoutSeconds
    manager = pipeline.deliveryManager
    while time.monotonic() < deadline:
        status = manager.getStatus()
        if status.isConnected and status.queuedMessages == 0:
            return True
        if status.persistentFailure:
            return False
        time.sleep(SETTLE_POLL_SECONDS)
    return manager.getStatus().queuedMessages == 0


def runReplay(config: dict[str, Any], args: argparse.Namespace, out: IO[str] | None = None) -> int:
    """
    Wire the pipeline with a simulated link and replay the input.

    Returns:
        Exit code
    """
    logger = getLogger(__name__)
    out = out or sys.stdout

    if args.dry_run:
        logger.info("DRY RUN MODE - Payloads are rendered but not delivered")
        config = {**config, 'delivery': {**config['delivery'], 'autoStart': False}}

    dispatcher = ThreadedDispatcher()
    transport = createSimulatedTransportFromConfig(config, dispatcher)
    pipeline = createPipelineFromConfig(config, transport, dispatcher)

    try:
        stream = open(args.replay, encoding='utf-8') if args.replay else sys.stdin
        try:
            if args.dry_run:
                count = dryRun(pipeline, stream, out)
            else:
                count = replay(pipeline, stream, out)
                if not waitForDelivery(pipeline, args.settle):
                    logger.info("Delivery incomplete | reason=link unavailable or settle timeout")
        finally:
            if stream is not sys.stdin:
                stream.close()

        logger.info(f"Replay finished | notifications={count}")
        out.write(json.dumps(pipeline.getSummary(), indent=2) + '\n')
        return EXIT_SUCCESS

    finally:
        pipeline.shutdown()
        dispatcher.shutdown()


def main(argv: list[str] | None = None) -> int:
    """
    Main entry point.

    Returns:
        Exit code (0 for success, 1 for configuration errors, 2 otherwise)
    """
    args = parseArgs(argv)

    setupLogging(level='DEBUG' if args.verbose else 'INFO')
    logger = getLogger(__name__)

    logger.info("=" * 60)
    logger.info("NavLink starting...")
    logger.info("=" * 60)

    try:
        config = loadNavlinkConfig(args.config, args.env_file)
        setupLoggingFromConfig(config, args.verbose)
        return runReplay(config, args)

    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        return EXIT_CONFIG_ERROR

    except OSError as e:
        logger.error(f"I/O error: {e}")
        return EXIT_RUNTIME_ERROR

    except KeyboardInterrupt:
        logger.warning("Interrupted by user")
        return EXIT_RUNTIME_ERROR

    except Exception as e:
        handleError(e, reraise=False)
        logger.error(f"Unexpected error: {e}")
        return EXIT_RUNTIME_ERROR

    finally:
        logger.info("=" * 60)
        logger.info("NavLink finished")
        logger.info("=" * 60)


if __name__ == '__main__':
    sys.exit(main())
