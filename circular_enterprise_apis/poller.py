"""
Transaction outcome polling.

The poller repeatedly looks a transaction up until it leaves the
"Pending" status or the time budget runs out:

    POLLING -> FINALIZED   (Result == 200 and Response.Status != "Pending")
    POLLING -> TIMED_OUT   (elapsed >= timeout before finality)
    POLLING -> CANCELLED   (caller set the cancel event)

Lookup failures are transient and keep the poller in POLLING. The
interval is fixed with no backoff.
"""
import time
import logging
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Optional, Tuple

from .gateway._rate_limited_log import rate_limited_log
from .gateway.exceptions import GatewayError, ResultCode

logger = logging.getLogger(__name__)

PENDING_STATUS = "Pending"

# Block window searched on every tick: the most recent 10 blocks
DEFAULT_LOOKBACK = (0, 10)

TIMEOUT_MESSAGE = "timeout exceeded while waiting for transaction outcome"
CANCELLED_MESSAGE = "polling cancelled before transaction outcome was known"

Fetch = Callable[[str, int, int], Optional[Dict[str, Any]]]


class PollState(str, Enum):
    POLLING = "polling"
    FINALIZED = "finalized"
    TIMED_OUT = "timed_out"
    CANCELLED = "cancelled"


@dataclass
class PollOutcome:
    """Terminal result of a polling run."""
    state: PollState
    response: Optional[Dict[str, Any]] = None
    attempts: int = 0
    elapsed: float = 0.0
    error: Optional[str] = None

    @property
    def finalized(self) -> bool:
        return self.state is PollState.FINALIZED


def finalized_response(data: Any) -> Optional[Dict[str, Any]]:
    """
    Return the nested Response mapping if data reports a final status.

    Args:
        data: Raw transaction lookup response

    Returns:
        The Response mapping when Result == 200 and Status is present and
        not "Pending", otherwise None
    """
    if not isinstance(data, dict):
        return None
    try:
        code = int(data.get("Result"))
    except (TypeError, ValueError):
        return None
    if code != ResultCode.OK:
        return None

    response = data.get("Response")
    if not isinstance(response, dict) or "Status" not in response:
        return None
    status = response.get("Status")
    if not isinstance(status, str) or status == PENDING_STATUS:
        return None
    return response


class OutcomePoller:
    """
    Bounded-time poller for transaction finality.

    The clock and sleep functions are injectable so the state machine can be
    driven deterministically in tests.
    """

    def __init__(
        self,
        fetch: Fetch,
        clock: Optional[Callable[[], float]] = None,
        sleep: Optional[Callable[[float], None]] = None,
        lookback: Tuple[int, int] = DEFAULT_LOOKBACK,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize the poller.

        Args:
            fetch: Lookup function (tx_id, start, end) -> raw response mapping
            clock: Monotonic clock in seconds (defaults to time.monotonic)
            sleep: Sleep function used between attempts (defaults to time.sleep)
            lookback: (start, end) block window passed to fetch
            logger: Optional logger instance
        """
        self.fetch = fetch
        self.clock = clock or time.monotonic
        self.sleep = sleep or time.sleep
        self.lookback = lookback
        self.logger = logger or logging.getLogger(__name__)

    def _wait(self, seconds: float, cancel_event: Optional[threading.Event]) -> bool:
        """Wait between attempts; returns True if cancelled."""
        if cancel_event is None:
            self.sleep(seconds)
            return False
        return cancel_event.wait(seconds)

    def poll(
        self,
        tx_id: str,
        timeout_sec: float,
        interval_sec: float,
        cancel_event: Optional[threading.Event] = None
    ) -> PollOutcome:
        """
        Poll until the transaction is final, the timeout elapses or polling is cancelled.

        Args:
            tx_id: Transaction ID to look up
            timeout_sec: Total time budget in seconds
            interval_sec: Fixed wait between attempts in seconds
            cancel_event: Optional event that stops polling when set

        Returns:
            PollOutcome in state FINALIZED, TIMED_OUT or CANCELLED
        """
        start_time = self.clock()
        attempts = 0
        start_block, end_block = self.lookback

        while self.clock() - start_time < timeout_sec:
            if cancel_event is not None and cancel_event.is_set():
                return PollOutcome(PollState.CANCELLED, attempts=attempts,
                                   elapsed=self.clock() - start_time, error=CANCELLED_MESSAGE)

            attempts += 1
            try:
                data = self.fetch(tx_id, start_block, end_block)
            except GatewayError as e:
                rate_limited_log(
                    f"Transient error polling transaction {tx_id}: {e}",
                    level="warning",
                    interval=max(int(interval_sec), 1),
                    logger_instance=self.logger
                )
                data = None

            response = finalized_response(data)
            if response is not None:
                elapsed = self.clock() - start_time
                self.logger.info(
                    f"Transaction {tx_id} finalized with status {response.get('Status')} "
                    f"after {attempts} attempt(s)"
                )
                return PollOutcome(PollState.FINALIZED, response=response, attempts=attempts, elapsed=elapsed)

            self.logger.debug(f"Transaction {tx_id} not final yet (attempt {attempts})")
            if self._wait(interval_sec, cancel_event):
                return PollOutcome(PollState.CANCELLED, attempts=attempts,
                                   elapsed=self.clock() - start_time, error=CANCELLED_MESSAGE)

        elapsed = self.clock() - start_time
        self.logger.warning(f"Timed out after {elapsed:.1f}s waiting for transaction {tx_id}")
        return PollOutcome(PollState.TIMED_OUT, attempts=attempts, elapsed=elapsed, error=TIMEOUT_MESSAGE)
