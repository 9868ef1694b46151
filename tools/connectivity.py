import logging
from typing import Callable, List

logger = logging.getLogger(__name__)

ConnectivityCallback = Callable[[bool], None]


class ConnectivitySignal:
    """
    Process-wide online/offline flag.

    Only the environment (browser events, the API's connectivity endpoint)
    calls set_online; everything else reads `online` or subscribes through
    on_change and is notified when the value actually flips.
    """

    def __init__(self, online: bool = True):
        self._online = online
        self._subscribers: List[ConnectivityCallback] = []

    @property
    def online(self) -> bool:
        return self._online

    def on_change(self, callback: ConnectivityCallback) -> Callable[[], None]:
        """Subscribe to changes. Returns a function that removes the subscription."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def set_online(self, online: bool) -> None:
        if online == self._online:
            return
        self._online = online
        logger.info(f"Connectivity changed: {'online' if online else 'offline'}")
        for callback in list(self._subscribers):
            callback(online)

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)
