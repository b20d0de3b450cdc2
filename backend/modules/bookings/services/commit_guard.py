# backend/modules/bookings/services/commit_guard.py

from contextlib import contextmanager
from datetime import date
from typing import Dict, Iterator, List, Tuple
import threading


class BookingCommitGuard:
    """Per (restaurant, date) mutexes around the booking check-and-commit.

    The database compare-and-swap on ``booking_revisions`` is what keeps
    separate processes from double-booking; this guard only serialises
    writers inside one process so they do not burn attempts racing each
    other. One instance is created at application start and shared by every
    request.

    Entries are reference counted and dropped once the last holder or waiter
    leaves, so the registry only holds keys that are in use.
    """

    def __init__(self):
        # key -> [lock, number of holders and waiters]
        self._locks: Dict[Tuple[str, date], List] = {}
        self._registry_lock = threading.Lock()

    def _acquire_entry(self, key: Tuple[str, date]) -> threading.Lock:
        with self._registry_lock:
            entry = self._locks.get(key)
            if entry is None:
                entry = self._locks[key] = [threading.Lock(), 0]
            entry[1] += 1
            return entry[0]

    def _release_entry(self, key: Tuple[str, date]) -> None:
        with self._registry_lock:
            entry = self._locks[key]
            entry[1] -= 1
            if entry[1] == 0:
                del self._locks[key]

    def active_keys(self) -> int:
        with self._registry_lock:
            return len(self._locks)

    @contextmanager
    def hold(self, restaurant_id: str, booking_date: date) -> Iterator[None]:
        key = (restaurant_id, booking_date)
        lock = self._acquire_entry(key)
        try:
            with lock:
                yield
        finally:
            self._release_entry(key)
