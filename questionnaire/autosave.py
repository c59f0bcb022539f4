import logging
import threading
from typing import Any, Callable, Optional


logger = logging.getLogger(__name__)


class AutoSaver:
    """
    Debounced persistence of the record being edited.

    `schedule()` keeps only the latest record and re-arms a timer; when the
    timer fires without being re-armed, `persist` runs exactly once with that
    record. Intermediate states are never written.
    """

    def __init__(
        self,
        persist: Callable[[Any], Any],
        delay: float = 0.8,
        on_saved: Optional[Callable[[Any], None]] = None,
        on_error: Optional[Callable[[Exception], None]] = None,
    ) -> None:
        self.persist = persist
        self.delay = delay
        self.on_saved = on_saved
        self.on_error = on_error
        self._lock = threading.Lock()
        # held across take-and-persist; cancel() blocks on a save in flight
        self._save_lock = threading.RLock()
        self._timer: Optional[threading.Timer] = None
        self._pending: Any = None
        self._has_pending = False
        self._generation = 0

    @property
    def pending(self) -> bool:
        with self._lock:
            return self._has_pending

    def schedule(self, record: Any) -> None:
        with self._lock:
            self._pending = record
            self._has_pending = True
            self._generation += 1
            if self._timer is not None:
                self._timer.cancel()
            self._timer = threading.Timer(self.delay, self._fire, args=(self._generation,))
            self._timer.daemon = True
            self._timer.start()

    def _take(self, generation: Optional[int] = None):
        with self._lock:
            # a timer that lost the race with a newer schedule() does nothing
            if generation is not None and generation != self._generation:
                return False, None
            if not self._has_pending:
                return False, None
            record = self._pending
            self._pending = None
            self._has_pending = False
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
            return True, record

    def _fire(self, generation: int) -> None:
        with self._save_lock:
            ok, record = self._take(generation)
            if ok:
                self._save(record)

    def _save(self, record: Any) -> Any:
        try:
            result = self.persist(record)
        except Exception as e:
            logger.error(f"Autosave failed: {e}")
            if self.on_error is not None:
                self.on_error(e)
            return None
        if self.on_saved is not None:
            self.on_saved(result)
        return result

    def flush(self) -> Any:
        """Persist the pending record now, if any; returns the persist result."""
        with self._save_lock:
            ok, record = self._take()
            if not ok:
                return None
            return self._save(record)

    def cancel(self) -> None:
        """Drop the pending record; returns once any save already running has finished."""
        with self._save_lock:
            self._take()

    def close(self, flush: bool = True) -> None:
        if flush:
            self.flush()
        else:
            self.cancel()
