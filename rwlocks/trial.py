"""Timed trials that check the ordering a readers-writer lock produces."""

from __future__ import annotations

import argparse
import itertools
import threading
import time
from dataclasses import dataclass
from typing import Callable, Protocol, Sequence

from rwlocks.locks import ReaderPreferenceLock, WriterPreferenceLock

__all__ = [
    "CheckFailed",
    "TrialRecord",
    "run_trial",
    "check_reader_preference",
    "check_writer_preference",
    "main",
]


class _RWLock(Protocol):
    def acquire_read(self) -> None: ...
    def release_read(self) -> None: ...
    def acquire_write(self) -> None: ...
    def release_write(self) -> None: ...


class CheckFailed(Exception):
    """A trial showed an ordering the lock's policy forbids."""


@dataclass(frozen=True)
class TrialRecord:
    """Logical times at which each thread took and gave up the lock.

    Readers are numbered so that the first half started before the
    writers and the second half after them.
    """

    reader_acquire: tuple[int, ...]
    reader_release: tuple[int, ...]
    writer_acquire: tuple[int, ...]
    writer_release: tuple[int, ...]

    def __post_init__(self) -> None:
        if len(self.reader_acquire) != len(self.reader_release):
            raise ValueError("reader acquire and release times differ in length")
        if len(self.writer_acquire) != len(self.writer_release):
            raise ValueError("writer acquire and release times differ in length")
        if len(self.reader_acquire) % 2:
            raise ValueError("reader times must cover two equal batches")

    @property
    def readers(self) -> int:
        """Readers per batch."""
        return len(self.reader_acquire) // 2

    @property
    def writers(self) -> int:
        return len(self.writer_acquire)


def run_trial(
    lock: _RWLock,
    readers: int,
    writers: int,
    hold: float = 0.01,
    pause: float = 0.0,
) -> TrialRecord:
    """Start readers, then writers, then readers again, and record the order.

    Each thread holds the lock for ``hold`` seconds. ``pause`` seconds pass
    between starting the writers and starting the second batch of readers.
    """
    if readers < 0 or writers < 0:
        raise ValueError("thread counts must not be negative")

    clock = itertools.count()
    clock_guard = threading.Lock()
    reader_acquire: dict[int, int] = {}
    reader_release: dict[int, int] = {}
    writer_acquire: dict[int, int] = {}
    writer_release: dict[int, int] = {}

    def tick() -> int:
        with clock_guard:
            return next(clock)

    def worker(
        acquire: Callable[[], None],
        release: Callable[[], None],
        acquired: dict[int, int],
        released: dict[int, int],
        number: int,
    ) -> None:
        acquire()
        try:
            acquired[number] = tick()
            time.sleep(hold)
            released[number] = tick()
        finally:
            release()

    def start(kind: str, number: int) -> threading.Thread:
        if kind == "reader":
            args = (lock.acquire_read, lock.release_read, reader_acquire, reader_release, number)
        else:
            args = (lock.acquire_write, lock.release_write, writer_acquire, writer_release, number)
        thread = threading.Thread(target=worker, args=args, name=f"{kind}-{number}")
        thread.start()
        return thread

    threads = [start("reader", i) for i in range(readers)]
    threads.extend(start("writer", i) for i in range(writers))
    if pause > 0:
        time.sleep(pause)
    threads.extend(start("reader", readers + i) for i in range(readers))

    for thread in threads:
        thread.join()

    return TrialRecord(
        reader_acquire=tuple(reader_acquire[i] for i in range(2 * readers)),
        reader_release=tuple(reader_release[i] for i in range(2 * readers)),
        writer_acquire=tuple(writer_acquire[i] for i in range(writers)),
        writer_release=tuple(writer_release[i] for i in range(writers)),
    )


def _check_writers_alone(record: TrialRecord) -> None:
    for acquired, released in zip(record.writer_acquire, record.writer_release):
        if released - acquired != 1:
            raise CheckFailed("No reader/ writer is allowed when a writer holds lock")


def check_reader_preference(record: TrialRecord) -> None:
    """Raise CheckFailed unless the record shows reader-preferring behaviour."""
    if record.readers > 0:
        if max(record.reader_acquire) > min(record.reader_release):
            raise CheckFailed("Reader should not wait to acquire lock")
        if record.writers > 0 and min(record.writer_acquire) < max(record.reader_release):
            raise CheckFailed("All readers get lock before any writer")
    _check_writers_alone(record)


def check_writer_preference(record: TrialRecord) -> None:
    """Raise CheckFailed unless the record shows writer-preferring behaviour."""
    if record.readers > 0:
        second_acquire = record.reader_acquire[record.readers:]
        second_release = record.reader_release[record.readers:]
        if max(second_acquire) > min(second_release):
            raise CheckFailed("Reader should not wait to acquire lock in second half")
        if record.writers > 0 and min(second_acquire) < max(record.writer_release):
            raise CheckFailed("Reader can not acquire lock when writer is holding a lock")
    _check_writers_alone(record)


_MODES = {
    "reader": (ReaderPreferenceLock, check_reader_preference, 0.01, 0.0),
    "writer": (WriterPreferenceLock, check_writer_preference, 0.1, 0.0005),
}


def main(argv: Sequence[str] | None = None) -> int:
    """Run one trial from the command line and print PASSED or the failure."""
    parser = argparse.ArgumentParser(
        prog="rwlocks-trial",
        description="Check the ordering a readers-writer lock produces.",
    )
    parser.add_argument("mode", choices=sorted(_MODES), help="which preference to test")
    parser.add_argument("readers", type=int, help="readers in each batch")
    parser.add_argument("writers", type=int, help="number of writers")
    parser.add_argument("--hold", type=float, help="seconds each thread holds the lock")
    parser.add_argument("--pause", type=float, help="seconds before the second reader batch")
    args = parser.parse_args(argv)

    lock_type, check, hold, pause = _MODES[args.mode]
    if args.hold is not None:
        hold = args.hold
    if args.pause is not None:
        pause = args.pause
    if args.readers < 0 or args.writers < 0:
        parser.error("thread counts must not be negative")

    record = run_trial(lock_type(), args.readers, args.writers, hold, pause)
    try:
        check(record)
    except CheckFailed as failure:
        print(failure)
        return 0
    print("PASSED")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())