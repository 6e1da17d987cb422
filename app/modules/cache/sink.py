"""Delivery sinks for cached events.

A sink attempts or enqueues delivery of one event and answers with a
DeliveryOutcome. Delivery may be asynchronous, so the outcome states the
sink's intent for the cache file rather than confirmed network delivery.
"""

import threading
from typing import Callable, List, Optional, Protocol, Union

from modules.cache.models import DeliveryOutcome, Event, RetryIntent


class DeliverySink(Protocol):
    """Protocol for the collaborator that delivers events.

    Example:
        class TransportSink:
            def deliver(self, event: Event) -> DeliveryOutcome:
                if transport.is_rate_limited():
                    return DeliveryOutcome.RETRY_LATER
                transport.enqueue(event)
                return DeliveryOutcome.DELIVERED
    """

    def deliver(self, event: Event) -> DeliveryOutcome:
        """Attempt or enqueue delivery of ``event``.

        Args:
            event: Event read from the cache

        Returns:
            DeliveryOutcome deciding whether the cache file is kept
        """
        ...


IntentCallback = Callable[[Event, RetryIntent], None]


class IntentDeliverySink:
    """Adapts a hint-style callable to the DeliverySink protocol.

    The callable receives the event and a fresh RetryIntent, and flags
    ``intent.retry = True`` when the event must be kept for a later pass.
    """

    def __init__(self, capture: IntentCallback) -> None:
        self.capture = capture

    def deliver(self, event: Event) -> DeliveryOutcome:
        intent = RetryIntent()
        self.capture(event, intent)
        return intent.outcome


OutcomePolicy = Union[DeliveryOutcome, Callable[[Event], DeliveryOutcome]]


class RecordingDeliverySink:
    """In-memory sink recording every delivered event.

    Answers with a fixed outcome or one computed per event. Safe for use
    from several threads.

    Attributes:
        events: Events received, in delivery order
    """

    def __init__(self, outcome: Optional[OutcomePolicy] = None) -> None:
        self.outcome: OutcomePolicy = outcome or DeliveryOutcome.DELIVERED
        self.events: List[Event] = []
        self._lock = threading.Lock()

    def deliver(self, event: Event) -> DeliveryOutcome:
        with self._lock:
            self.events.append(event)
        if callable(self.outcome):
            return self.outcome(event)
        return self.outcome

    def reset(self) -> None:
        with self._lock:
            self.events = []
