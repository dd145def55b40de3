from typing import Dict, List, Callable
import inspect
import logging
logger = logging.getLogger(__name__)

SUBMIT_STARTED = "submit_started"
SUBMIT_SUCCEEDED = "submit_succeeded"
SUBMIT_FAILED = "submit_failed"


class EventEmitter:
    """Simple event emitter for submission lifecycle events."""

    def __init__(self):
        self._listeners: Dict[str, List[Callable]] = {}

    def on(self, event_name: str, callback: Callable):
        """Subscribe to an event."""
        if event_name not in self._listeners:
            self._listeners[event_name] = []
        if callback not in self._listeners[event_name]:
            self._listeners[event_name].append(callback)

    def off(self, event_name: str, callback: Callable):
        """Unsubscribe from an event."""
        if event_name in self._listeners:
            if callback in self._listeners[event_name]:
                self._listeners[event_name].remove(callback)

    async def emit(self, event_name: str, *args, **kwargs):
        """Emit an event to all listeners. A failing listener never breaks the submission."""
        if event_name not in self._listeners:
            return

        for callback in self._listeners[event_name][:]:  # listeners may unsubscribe while we iterate
            try:
                result = callback(*args, **kwargs)
                if inspect.isawaitable(result):
                    await result
            except Exception as e:
                logger.error(f"Error in event listener for {event_name}: {e}")
