# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Execution Event Channel

Single-consumer channel the runner publishes node lifecycle events to.
Delivery is synchronous with the execution loop: no buffering, no
backpressure, causal order per node (queued, running, succeeded|failed).
"""

from typing import Callable, Optional

from .models import ExecutionEvent

ExecutionEventListener = Callable[[ExecutionEvent], None]


class EventChannel:
    """Synchronous, unbuffered, single-consumer event channel"""

    def __init__(self, listener: Optional[ExecutionEventListener] = None):
        self._listener: Optional[ExecutionEventListener] = None
        if listener is not None:
            self.subscribe(listener)

    @property
    def has_consumer(self) -> bool:
        return self._listener is not None

    def subscribe(self, listener: ExecutionEventListener) -> None:
        if self._listener is not None and self._listener is not listener:
            raise RuntimeError("Event channel already has a consumer")
        self._listener = listener

    def unsubscribe(self) -> None:
        self._listener = None

    def publish(self, event: ExecutionEvent) -> None:
        """Deliver an event; returns once the consumer has handled it"""
        if self._listener is not None:
            self._listener(event)
