import os
import pytest
import litebind

RW = litebind.OPEN_READWRITE | litebind.OPEN_CREATE

def test_create_then_reopen_readonly(db_path):
    assert not os.path.exists(db_path)
    conn = litebind.open(db_path, RW)
    assert os.path.exists(db_path)
    assert conn.readonly is False
    conn.close()

    conn = litebind.open(db_path, litebind.OPEN_READONLY)
    assert conn.readonly is True
    conn.close()

def test_default_flags_are_readonly(db_path):
    litebind.open(db_path, RW).close()
    conn = litebind.open(db_path)
    assert conn.flags == litebind.OPEN_READONLY
    assert conn.readonly is True
    conn.close()

def test_open_missing_file_readonly_fails(db_path):
    with pytest.raises(litebind.OpenError) as excinfo:
        litebind.open(db_path, litebind.OPEN_READONLY)
    err = excinfo.value
    assert err.code == 14  # SQLITE_CANTOPEN
    assert err.extended_code & 0xff == 14
    assert err.path == db_path
    assert repr(db_path) in str(err)
    assert not os.path.exists(db_path)

def test_open_error_is_engine_error(db_path):
    with pytest.raises(litebind.EngineError):
        litebind.open(db_path)

def test_open_invalid_path_type():
    with pytest.raises(litebind.OpenError) as excinfo:
        litebind.open(12345)
    assert isinstance(excinfo.value.__cause__, TypeError)

def test_open_path_with_null_byte(tmp_path):
    with pytest.raises(litebind.OpenError) as excinfo:
        litebind.open(str(tmp_path / "a\x00b.db"), RW)
    assert isinstance(excinfo.value.__cause__, ValueError)

def test_open_pathlike(tmp_path):
    path = tmp_path / "pathlike.db"
    conn = litebind.open(path, RW)
    assert conn.path == str(path)
    conn.close()

def test_uri_readonly_overrides_flags(db_path):
    litebind.open(db_path, RW).close()
    conn = litebind.open(f"file:{db_path}?mode=ro", litebind.OPEN_READWRITE)
    assert conn.readonly is True
    with pytest.raises(litebind.EngineError) as excinfo:
        conn.execute("CREATE TABLE foo (id INTEGER)")
    assert excinfo.value.code == 8  # SQLITE_READONLY
    conn.close()

def test_memory_database():
    conn = litebind.open(":memory:", litebind.OPEN_READWRITE)
    assert conn.readonly is False
    conn.execute("CREATE TABLE foo (id INTEGER)")
    conn.close()

def test_memory_flag(tmp_path):
    conn = litebind.open(str(tmp_path / "unused.db"), RW | litebind.OPEN_MEMORY)
    conn.execute("CREATE TABLE foo (id INTEGER)")
    conn.close()
    assert not os.path.exists(tmp_path / "unused.db")

def test_close_is_idempotent(db_path):
    conn = litebind.open(db_path, RW)
    conn.close()
    conn.close()
    assert conn.closed

def test_closed_connection_rejects_operations(db_path):
    conn = litebind.open(db_path, RW)
    conn.close()
    with pytest.raises(litebind.InvalidStateError):
        conn.execute("SELECT 1")
    with pytest.raises(litebind.InvalidStateError):
        conn.execute_script("SELECT 1;")
    with pytest.raises(litebind.InvalidStateError):
        conn.readonly

def test_garbage_collected_connection_closes(db_path):
    conn = litebind.open(db_path, RW)
    conn.execute("CREATE TABLE foo (id INTEGER)")
    del conn
    # The file is no longer locked by a live handle.
    conn = litebind.open(db_path, RW)
    conn.execute("INSERT INTO foo VALUES (1)")
    conn.close()

def test_busy_timeout(db_path):
    writer = litebind.open(db_path, RW)
    writer.execute("CREATE TABLE foo (id INTEGER)")
    writer.execute("BEGIN EXCLUSIVE")

    other = litebind.open(db_path, RW, timeout=0.05)
    with pytest.raises(litebind.EngineError) as excinfo:
        other.execute("SELECT * FROM foo")
    assert excinfo.value.code == 5  # SQLITE_BUSY

    writer.execute("COMMIT")
    assert other.execute("SELECT * FROM foo") is None
    other.close()
    writer.close()

def test_flag_constants():
    assert litebind.OPEN_READONLY == 0x1
    assert litebind.OPEN_READWRITE == 0x2
    assert litebind.OPEN_CREATE == 0x4
    flags = (
        litebind.OPEN_MEMORY, litebind.OPEN_NOMUTEX, litebind.OPEN_FULLMUTEX,
        litebind.OPEN_SHAREDCACHE, litebind.OPEN_PRIVATECACHE, litebind.OPEN_NOFOLLOW,
    )
    assert len(set(flags)) == len(flags)
