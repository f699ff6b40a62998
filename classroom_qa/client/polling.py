# classroom_qa/client/polling.py
import logging
import threading
from typing import Callable

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL = 5.0  # seconds


class QuestionPoller:
    """
    Re-fetch the question list of an open lecture every ``interval`` seconds.

    Refreshes are silent: a failed fetch is logged at debug level and the
    previous data stays on screen. After ``stop()`` no further ``on_update``
    call is made, even for a fetch already in flight.
    """

    def __init__(
        self,
        fetch: Callable[[], list],
        on_update: Callable[[list], None],
        interval: float = DEFAULT_POLL_INTERVAL,
    ):
        self.fetch = fetch
        self.on_update = on_update
        self.interval = interval
        self._stopped = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def poll_once(self) -> bool:
        """One refresh; True when fresh data was delivered."""
        try:
            questions = self.fetch()
        except Exception as e:
            logger.debug(f"Question refresh failed, keeping previous data: {e}")
            return False
        if self._stopped.is_set():
            return False
        self.on_update(questions)
        return True

    def _run(self, stopped: threading.Event):
        while not stopped.wait(self.interval):
            self.poll_once()

    def start(self) -> None:
        if self.running:
            return
        # each loop owns its stop event
        self._stopped = threading.Event()
        self._thread = threading.Thread(
            target=self._run, args=(self._stopped,), name="question-poller", daemon=True
        )
        self._thread.start()

    def stop(self, timeout: float | None = None) -> None:
        self._stopped.set()
        thread, self._thread = self._thread, None
        # called from on_update: the loop exits on its own once this returns
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)
