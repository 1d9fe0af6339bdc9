"""Statements are always finalized and closed connections release their files."""

import os
import psutil
import pytest
import litebind

RW = litebind.OPEN_READWRITE | litebind.OPEN_CREATE

def count_open_files(db_path):
    process = psutil.Process(os.getpid())
    return sum(1 for f in process.open_files() if f.path == db_path)

def test_file_handle_released_on_close(db_path):
    db_path = os.path.realpath(db_path)
    conn = litebind.open(db_path, RW)
    conn.execute("CREATE TABLE foo (id INTEGER)")
    assert count_open_files(db_path) >= 1
    conn.close()
    assert count_open_files(db_path) == 0

def test_repeated_open_close_does_not_leak(db_path):
    db_path = os.path.realpath(db_path)
    litebind.open(db_path, RW).close()
    for _ in range(50):
        with litebind.open(db_path, RW) as conn:
            conn.execute("SELECT count(*) FROM sqlite_master")
    assert count_open_files(db_path) == 0

def test_open_failure_releases_handle(tmp_path):
    missing = str(tmp_path / "missing.db")
    before = len(psutil.Process(os.getpid()).open_files())
    for _ in range(20):
        with pytest.raises(litebind.OpenError):
            litebind.open(missing)
    assert len(psutil.Process(os.getpid()).open_files()) == before

@pytest.mark.parametrize("sql, params, error", [
    ("SELECT 1", None, None),
    ("SELECT ?", (1,), None),
    ("SELEC 1", None, litebind.EngineError),
    ("SELECT ?", (object(),), litebind.UnsupportedTypeError),
    ("SELECT ?", (2 ** 64,), litebind.RangeError),
    ("INSERT INTO foo VALUES (?)", (1,), litebind.EngineError),
    ("SELECT CAST(x'ff' AS TEXT)", None, UnicodeDecodeError),
    ("SELECT ?", [[1], [2], [object()]], litebind.UnsupportedTypeError),
])
def test_no_statement_left_behind(mem, sql, params, error):
    mem.execute("CREATE TABLE foo (id INTEGER UNIQUE)")
    mem.execute("INSERT INTO foo VALUES (1)")
    if error is None:
        mem.execute(sql, params)
    else:
        with pytest.raises(error):
            mem.execute(sql, params)
    assert mem._open_statement_count() == 0

def test_prepare_and_finalize_balance(mem):
    mem.execute_script("CREATE TABLE foo (id INTEGER); INSERT INTO foo VALUES (1);")
    for _ in range(10):
        mem.execute("SELECT * FROM foo")
    with pytest.raises(litebind.UnsupportedTypeError):
        mem.execute("SELECT ?", (object(),))
    assert mem._stats["prepare_count"] == mem._stats["finalize_count"]
    assert mem._open_statement_count() == 0
