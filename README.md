# rwlocks

Two read/write locks for Python threads, plus a small trial that runs
readers and writers against a lock and checks the order in which they got in.

## Locks

`rwlocks.locks` provides:

- `ReaderPreferenceLock`: any number of readers may hold the lock at once.
  The first reader in shuts writers out and the last reader out lets them in,
  so a steady stream of readers can starve a writer.
- `WriterPreferenceLock`: a waiting writer blocks new readers. Readers
  already inside finish, then writers go one at a time, and only when no
  writer is waiting or writing do readers get in again.

Both have the same methods:

| method            | what it does                                          |
|-------------------|-------------------------------------------------------|
| `acquire_read()`  | block until shared (read) access is granted           |
| `release_read()`  | give up one read hold                                 |
| `acquire_write()` | block until exclusive (write) access is granted       |
| `release_write()` | give up the exclusive hold                            |
| `read_locked()`   | return `True` if at least one reader holds the lock   |
| `write_locked()`  | return `True` if a writer holds the lock              |

Calling `release_read()` with no read hold, or `release_write()` with no
write hold, raises `RuntimeError`.

```python
from rwlocks.locks import WriterPreferenceLock

lock = WriterPreferenceLock()
table = {}

def lookup(key):
    lock.acquire_read()
    try:
        return table.get(key)
    finally:
        lock.release_read()

def store(key, value):
    lock.acquire_write()
    try:
        table[key] = value
    finally:
        lock.release_write()
```

## Trial

`rwlocks.trial` starts a batch of readers, then the writers, then a second
batch of readers. Each thread holds the lock for `hold` seconds and notes,
on one shared counter, when it got in and when it left.

`run_trial(lock, readers, writers, hold=0.01, pause=0.0)` takes any object
with the four acquire/release methods, the number of readers in each batch
and the number of writers, and returns a `TrialRecord`. `pause` is the time
waited after starting the writers before starting the second batch of
readers. Negative counts raise `ValueError`.

A `TrialRecord` holds `reader_acquire`, `reader_release`, `writer_acquire`
and `writer_release` as tuples of counter values; readers `0` to `readers - 1`
are the first batch and the rest the second. Its `readers` property gives the
readers per batch and `writers` the number of writers.

Pass the record to `check_reader_preference(record)` or
`check_writer_preference(record)`. Each one raises `CheckFailed` with a
message if the order breaks that lock's promise:

- reader preference: all readers get in at once, all readers are in before
  any writer, and no one else gets in while a writer holds the lock;
- writer preference: the second batch of readers gets in at once, but only
  after every writer has finished, and no one else gets in while a writer
  holds the lock.

From the command line:

```
rwlocks-trial reader 4 2
rwlocks-trial writer 4 2
```

The first argument picks the lock and its check (`reader` or `writer`). The
next two give the number of readers in each batch and the number of writers.
`--hold SECONDS` and `--pause SECONDS` override the defaults, which are a
hold of 0.01 s and no pause for `reader`, and a hold of 0.1 s and a pause of
0.0005 s for `writer`. The command prints `PASSED`, or the message of the
check that failed; it exits with status 0 either way.

## Tests

```
pip install .[test]
pytest
```