import threading
import time
from unittest.mock import patch

import maxminddb
import pytest

from geoip_resolver.db import database
from geoip_resolver.db.database import (
    SOURCE_EMBEDDED,
    SOURCE_EXTERNAL,
    DatabaseSource,
    embedded_db_resource,
)
from geoip_resolver.errors import DatabaseInitError


def test_external_database_preferred(sample_db, missing_db):
    handle = DatabaseSource(sample_db, embedded=missing_db).get()
    assert handle.source == SOURCE_EXTERNAL
    assert handle.path == str(sample_db)


def test_missing_external_falls_back_to_embedded(missing_db, sample_db):
    handle = DatabaseSource(missing_db, embedded=sample_db).get()
    assert handle.source == SOURCE_EMBEDDED


def test_corrupt_external_falls_back_to_embedded(corrupt_db, sample_db):
    handle = DatabaseSource(corrupt_db, embedded=sample_db).get()
    assert handle.source == SOURCE_EMBEDDED
    assert handle.reader.get("1.2.3.4")["country"] == "JP"


def test_external_directory_is_ignored(tmp_path, sample_db):
    handle = DatabaseSource(tmp_path, embedded=sample_db).get()
    assert handle.source == SOURCE_EMBEDDED


def test_no_external_path(sample_db):
    handle = DatabaseSource(None, embedded=sample_db).get()
    assert handle.source == SOURCE_EMBEDDED


def test_handle_is_cached(sample_db, missing_db):
    source = DatabaseSource(sample_db, embedded=missing_db)
    assert source.get() is source.get()


def test_init_failure_is_cached_without_retry(corrupt_db, missing_db):
    source = DatabaseSource(corrupt_db, embedded=missing_db)
    real_open = maxminddb.open_database

    with patch.object(database.maxminddb, "open_database", side_effect=real_open) as open_database:
        with pytest.raises(DatabaseInitError) as first:
            source.get()
        assert open_database.call_count == 2

        with pytest.raises(DatabaseInitError) as second:
            source.get()
        assert open_database.call_count == 2

    assert second.value is first.value


def test_concurrent_first_use_initializes_once(sample_db, missing_db):
    source = DatabaseSource(sample_db, embedded=missing_db)
    real_open = maxminddb.open_database
    workers = 8
    barrier = threading.Barrier(workers)
    results = []

    def slow_open(*args, **kwargs):
        time.sleep(0.05)
        return real_open(*args, **kwargs)

    def worker():
        barrier.wait()
        results.append(source.get())

    with patch.object(database.maxminddb, "open_database", side_effect=slow_open) as open_database:
        threads = [threading.Thread(target=worker) for _ in range(workers)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

    assert open_database.call_count == 1
    assert len(results) == workers
    assert all(handle is results[0] for handle in results)
    assert results[0].source == SOURCE_EXTERNAL


def test_concurrent_first_use_sees_same_error(missing_db, tmp_path):
    source = DatabaseSource(missing_db, embedded=tmp_path / "also-missing.db")
    workers = 4
    barrier = threading.Barrier(workers)
    errors = []

    def worker():
        barrier.wait()
        try:
            source.get()
        except DatabaseInitError as e:
            errors.append(e)

    threads = [threading.Thread(target=worker) for _ in range(workers)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(errors) == workers
    assert all(error is errors[0] for error in errors)


def test_default_embedded_resource():
    assert embedded_db_resource().name == "geoip.db"


def test_unstatable_external_path_falls_back_to_embedded(sample_db):
    # ENAMETOOLONG from stat() must count as "no external database"
    source = DatabaseSource("/" + "a" * 5000, embedded=sample_db)
    handle = source.get()
    assert handle.source == SOURCE_EMBEDDED
    assert handle.reader.get("1.2.3.4")["country"] == "JP"


def test_unexpected_init_error_is_wrapped_and_cached(sample_db):
    source = DatabaseSource(sample_db, embedded=sample_db)

    with patch.object(DatabaseSource, "_open_external", side_effect=RuntimeError("boom")) as open_external:
        with pytest.raises(DatabaseInitError, match="boom") as first:
            source.get()
        with pytest.raises(DatabaseInitError) as second:
            source.get()

    assert open_external.call_count == 1
    assert second.value is first.value


def test_get_after_close_raises(sample_db, missing_db):
    source = DatabaseSource(sample_db, embedded=missing_db)
    handle = source.get()
    source.close()

    with pytest.raises(DatabaseInitError, match="database closed"):
        source.get()
    assert handle.reader.closed


def test_close_before_first_use(sample_db, missing_db):
    source = DatabaseSource(sample_db, embedded=missing_db)
    source.close()

    with patch.object(database.maxminddb, "open_database") as open_database:
        with pytest.raises(DatabaseInitError, match="database closed"):
            source.get()
    open_database.assert_not_called()
