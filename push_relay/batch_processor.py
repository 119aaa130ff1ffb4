import asyncio
import logging
from typing import Any, List, Sequence, Tuple

from .expo_client import ExpoPushClient
from .schemas import BatchResult, BatchStatus, BatchSummary, NotificationOutcome

logger = logging.getLogger(__name__)


class BatchProcessor:
    """Fans notification batches out to the push client and aggregates the outcomes."""

    def __init__(self, push_client: ExpoPushClient):
        """
        Initialize the batch processor.

        Args:
            push_client: An opened ExpoPushClient
        """
        self.push_client = push_client

    async def process_batch(self, batch: Sequence[Any]) -> BatchSummary:
        """
        Send every notification in a batch concurrently and count the outcomes.

        All sends are awaited regardless of individual failures. Anything other
        than a successful outcome, including an exception escaping a send,
        counts as a failure.

        Args:
            batch: Notification requests (models or raw event items)

        Returns:
            BatchSummary with success and failure counts
        """
        results = await asyncio.gather(
            *(self.push_client.send_notification(item) for item in batch),
            return_exceptions=True
        )

        successes = 0
        for result in results:
            if isinstance(result, NotificationOutcome) and result.success:
                successes += 1
            elif isinstance(result, BaseException):
                logger.error(f"Unexpected error in notification task: {str(result)}")

        return BatchSummary(successes=successes, failures=len(results) - successes)

    async def process_event(
            self,
            batches: Sequence[Sequence[Any]]) -> Tuple[List[BatchResult], int, int]:
        """
        Process all batches concurrently and reduce them into totals.

        A batch whose task fails as a whole is reported as rejected, with all of
        its requests counted as failures.

        Args:
            batches: List of batches of notification requests

        Returns:
            Tuple of (per-batch results, total successes, total failures)
        """
        summaries = await asyncio.gather(
            *(self.process_batch(batch) for batch in batches),
            return_exceptions=True
        )

        batch_results = []
        for batch, summary in zip(batches, summaries):
            if isinstance(summary, BatchSummary):
                batch_results.append(BatchResult(
                    status=BatchStatus.FULFILLED,
                    successes=summary.successes,
                    failures=summary.failures
                ))
            else:
                logger.error(f"Batch of {len(batch)} notifications failed: {str(summary)}")
                batch_results.append(BatchResult(
                    status=BatchStatus.REJECTED,
                    successes=0,
                    failures=len(batch),
                    error=str(summary) or type(summary).__name__
                ))

        total_successes = sum(result.successes for result in batch_results)
        total_failures = sum(result.failures for result in batch_results)

        return batch_results, total_successes, total_failures
