import pytest

from rwlocks.locks import ReaderPreferenceLock, WriterPreferenceLock
from rwlocks.trial import (
    CheckFailed,
    TrialRecord,
    check_reader_preference,
    check_writer_preference,
    main,
    run_trial,
)


def _times(record):
    return sorted(
        record.reader_acquire
        + record.reader_release
        + record.writer_acquire
        + record.writer_release
    )


def test_run_trial_records_every_thread():
    record = run_trial(ReaderPreferenceLock(), 2, 1, hold=0.01)
    assert record.readers == 2
    assert record.writers == 1
    assert len(record.reader_acquire) == 4
    assert _times(record) == list(range(2 * (4 + 1)))


def test_run_trial_release_follows_acquire():
    record = run_trial(WriterPreferenceLock(), 2, 2, hold=0.01, pause=0.02)
    for acquired, released in zip(record.reader_acquire, record.reader_release):
        assert released > acquired
    for acquired, released in zip(record.writer_acquire, record.writer_release):
        assert released > acquired


def test_run_trial_rejects_negative_counts():
    with pytest.raises(ValueError):
        run_trial(ReaderPreferenceLock(), -1, 0)


def test_reader_preference_lock_passes_its_check():
    record = run_trial(ReaderPreferenceLock(), 3, 2, hold=0.05)
    check_reader_preference(record)
    assert max(record.reader_release) < min(record.writer_acquire)


def test_writer_preference_lock_passes_its_check():
    record = run_trial(WriterPreferenceLock(), 3, 2, hold=0.05, pause=0.02)
    check_writer_preference(record)
    assert max(record.writer_release) < min(record.reader_acquire[3:])


def test_reader_preference_lock_fails_writer_check():
    record = run_trial(ReaderPreferenceLock(), 2, 1, hold=0.05, pause=0.01)
    with pytest.raises(CheckFailed, match="Reader can not acquire lock when writer is holding a lock"):
        check_writer_preference(record)


def test_check_reader_preference_detects_waiting_reader():
    record = TrialRecord((0, 2), (1, 3), (), ())
    with pytest.raises(CheckFailed, match="Reader should not wait to acquire lock"):
        check_reader_preference(record)


def test_check_reader_preference_detects_early_writer():
    record = TrialRecord((2, 3), (4, 5), (0,), (1,))
    with pytest.raises(CheckFailed, match="All readers get lock before any writer"):
        check_reader_preference(record)


def test_check_detects_writer_sharing_the_lock():
    record = TrialRecord((), (), (0, 1), (2, 3))
    with pytest.raises(CheckFailed, match="No reader/ writer is allowed when a writer holds lock"):
        check_reader_preference(record)
    with pytest.raises(CheckFailed, match="No reader/ writer is allowed when a writer holds lock"):
        check_writer_preference(record)


def test_check_writer_preference_detects_waiting_second_reader():
    record = TrialRecord((0, 2, 4, 6), (1, 3, 5, 7), (), ())
    with pytest.raises(CheckFailed, match="Reader should not wait to acquire lock in second half"):
        check_writer_preference(record)


def test_check_writer_preference_accepts_good_order():
    record = TrialRecord((0, 1, 6, 7), (2, 3, 8, 9), (4,), (5,))
    check_writer_preference(record)
    assert record.writers == 1


def test_trial_record_rejects_mismatched_lengths():
    with pytest.raises(ValueError):
        TrialRecord((0, 1), (2,), (), ())


def test_main_reports_pass(capsys):
    assert main(["reader", "2", "1", "--hold", "0.05"]) == 0
    assert capsys.readouterr().out == "PASSED\n"


def test_main_writer_mode_reports_pass(capsys):
    assert main(["writer", "2", "1", "--hold", "0.05", "--pause", "0.02"]) == 0
    assert capsys.readouterr().out == "PASSED\n"


def test_main_rejects_unknown_mode():
    with pytest.raises(SystemExit):
        main(["neither", "1", "1"])