"""Background publisher of a steadily increasing heartbeat counter."""

from __future__ import annotations

import threading
from collections.abc import Callable


class HeartBeatPublisher:
    """Publish an incrementing counter on ``<node_name>/heartbeat``.

    ``publish`` is called as ``publish(topic, value)`` from a background
    thread, once per ``interval`` seconds, until :meth:`stop` is called.
    """

    def __init__(
        self,
        node_name: str,
        publish: Callable[[str, int], object],
        interval: float = 1.0,
    ) -> None:
        self.topic = f"{node_name}/heartbeat"
        self.count = 0
        self._publish = publish
        self._interval = interval
        self._stopped = threading.Event()
        self._thread = threading.Thread(
            target=self._run, name=f"heartbeat-{node_name}", daemon=True
        )
        self._thread.start()

    def _run(self) -> None:
        while not self._stopped.is_set():
            self.count += 1
            self._publish(self.topic, self.count)
            self._stopped.wait(self._interval)

    @property
    def running(self) -> bool:
        """Whether the publishing thread is still alive."""
        return self._thread.is_alive()

    def stop(self) -> None:
        """Stop publishing and wait for the background thread to finish."""
        self._stopped.set()
        if self._thread.is_alive() and self._thread is not threading.current_thread():
            self._thread.join()

    def __enter__(self) -> HeartBeatPublisher:
        return self

    def __exit__(self, *args: object) -> None:
        self.stop()