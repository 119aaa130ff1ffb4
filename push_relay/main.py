import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

import httpx
from pythonjsonlogger.json import JsonFormatter

from .batch_processor import BatchProcessor
from .config import Settings, settings as default_settings
from .expo_client import ExpoPushClient
from .schemas import RelayEvent, RelayResult, RelayStatus


# Configure logging
def setup_logging(settings: Optional[Settings] = None):
    """Configure structured JSON logging for the function."""
    settings = settings or default_settings
    log_level = getattr(logging, settings.log_level.upper())

    # Create JSON formatter for structured logging
    class CustomJsonFormatter(JsonFormatter):
        def add_fields(self, log_record, record, message_dict):
            super(CustomJsonFormatter, self).add_fields(log_record, record, message_dict)
            log_record['service'] = settings.service_name
            log_record['environment'] = settings.environment
            log_record['timestamp'] = datetime.now(timezone.utc).isoformat()

    handler = logging.StreamHandler()
    handler.setFormatter(CustomJsonFormatter('%(timestamp)s %(levelname)s %(service)s %(environment)s %(name)s %(message)s'))

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Clear existing handlers to avoid duplicates
    for h in root_logger.handlers[:]:
        root_logger.removeHandler(h)

    root_logger.addHandler(handler)

    # Set specific logger levels
    logging.getLogger('httpx').setLevel(logging.WARNING)
    logging.getLogger('httpcore').setLevel(logging.WARNING)


logger = logging.getLogger(__name__)

# Set on the first invocation of a container (cold start)
_logging_configured = False


async def handle(event: Any,
                 settings: Optional[Settings] = None,
                 transport: Optional[httpx.AsyncBaseTransport] = None) -> Dict[str, Any]:
    """
    Relay an event of notification batches and summarize the outcome.

    Args:
        event: List of batches, each a list of notification requests
        settings: Optional configuration override
        transport: Optional httpx transport for the push client

    Returns:
        JSON-serializable result dictionary; never raises
    """
    try:
        batches = RelayEvent.model_validate(event).root

        async with ExpoPushClient(settings=settings, transport=transport) as push_client:
            processor = BatchProcessor(push_client)
            batch_results, total_successes, total_failures = await processor.process_event(batches)

        if total_failures > 0:
            result = RelayResult(
                status=RelayStatus.PARTIAL_SUCCESS,
                totalSuccesses=total_successes,
                totalFailures=total_failures,
                batchResults=batch_results
            )
            logger.error(
                "Some notifications failed to send in some batches",
                extra={'batchResults': result.to_response()['batchResults']}
            )
            return result.to_response()

        logger.info(f"All notifications sent successfully in all batches: {total_successes}")
        return RelayResult(
            status=RelayStatus.SUCCESS,
            totalNotificationsSent=total_successes,
            batchResults=batch_results
        ).to_response()

    except Exception as e:
        error = str(e) or type(e).__name__
        logger.error(f"Unexpected error in processing notifications: {error}")
        return RelayResult(status=RelayStatus.FAILED, error=error).to_response()


def handler(event: Any, context: Any = None) -> Dict[str, Any]:
    """Lambda entry point."""
    global _logging_configured
    if not _logging_configured:
        setup_logging()
        _logging_configured = True

    return asyncio.run(handle(event))
