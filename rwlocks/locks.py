"""Readers-writer locks with reader or writer preference."""

from __future__ import annotations

import threading

__all__ = ["ReaderPreferenceLock", "WriterPreferenceLock"]


class ReaderPreferenceLock:
    """A readers-writer lock that admits readers as long as any reader holds it.

    The first reader takes the writer lock on behalf of all readers and the
    last one to leave gives it back, so a steady stream of readers can
    starve writers.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._writer = threading.Lock()
        self._readers = 0
        self._writing = False

    def acquire_read(self) -> None:
        """Block until the lock is held for reading."""
        with self._guard:
            self._readers += 1
            if self._readers == 1:
                self._writer.acquire()

    def release_read(self) -> None:
        """Give up one read hold."""
        with self._guard:
            if self._readers == 0:
                raise RuntimeError("release_read called without a read hold")
            self._readers -= 1
            if self._readers == 0:
                self._writer.release()

    def acquire_write(self) -> None:
        """Block until the lock is held exclusively."""
        self._writer.acquire()
        self._writing = True

    def release_write(self) -> None:
        """Give up the exclusive hold."""
        if not self._writing:
            raise RuntimeError("release_write called without a write hold")
        self._writing = False
        self._writer.release()

    def read_locked(self) -> bool:
        """Return whether at least one reader holds the lock."""
        with self._guard:
            return self._readers > 0

    def write_locked(self) -> bool:
        """Return whether a writer holds the lock."""
        return self._writing


class WriterPreferenceLock:
    """A readers-writer lock that holds back new readers while writers wait."""

    def __init__(self) -> None:
        self._access = threading.Condition(threading.Lock())
        self._readers = 0
        self._waiting_writers = 0
        self._writing = False

    def acquire_read(self) -> None:
        """Block until no writer holds or waits for the lock, then read."""
        with self._access:
            while self._waiting_writers > 0 or self._writing:
                self._access.wait()
            self._readers += 1

    def release_read(self) -> None:
        """Give up one read hold."""
        with self._access:
            if self._readers == 0:
                raise RuntimeError("release_read called without a read hold")
            self._readers -= 1
            if self._readers == 0:
                self._access.notify_all()

    def acquire_write(self) -> None:
        """Block until no reader or writer holds the lock, then write."""
        with self._access:
            self._waiting_writers += 1
            try:
                while self._readers > 0 or self._writing:
                    self._access.wait()
            finally:
                self._waiting_writers -= 1
            self._writing = True

    def release_write(self) -> None:
        """Give up the exclusive hold."""
        with self._access:
            if not self._writing:
                raise RuntimeError("release_write called without a write hold")
            self._writing = False
            self._access.notify_all()

    def read_locked(self) -> bool:
        """Return whether at least one reader holds the lock."""
        with self._access:
            return self._readers > 0

    def write_locked(self) -> bool:
        """Return whether a writer holds the lock."""
        with self._access:
            return self._writing