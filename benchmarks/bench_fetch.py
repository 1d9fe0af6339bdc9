import litebind
import sqlite3
import time
import os
import sys

def run_benchmark(count=100000):
    db_path = "bench_fetch.db"
    if os.path.exists(db_path):
        os.remove(db_path)

    conn = litebind.open(db_path, litebind.OPEN_READWRITE | litebind.OPEN_CREATE)

    print("Setting up data...")
    conn.execute("CREATE TABLE bench (id INTEGER, val TEXT, f REAL)")

    data = [(i, f"value_{i}", float(i)) for i in range(count)]

    # Row-at-a-time inserts inside one transaction.
    start_time = time.perf_counter()
    conn.execute("BEGIN")
    for row in data:
        conn.execute("INSERT INTO bench VALUES (?, ?, ?)", row)
    conn.execute("COMMIT")
    end_time = time.perf_counter()
    print(f"Insert {count} rows: {end_time - start_time:.4f}s")

    # Batch form: one call, one prepare per parameter set.
    conn.execute("DELETE FROM bench")
    start_time = time.perf_counter()
    conn.execute("BEGIN")
    conn.execute("INSERT INTO bench VALUES (?, ?, ?)", data)
    conn.execute("COMMIT")
    end_time = time.perf_counter()
    print(f"Batch insert {count} rows: {end_time - start_time:.4f}s")

    conn.close()

    print("Benchmarking fetch (litebind)...")
    conn = litebind.open(db_path)
    start_time = time.perf_counter()
    rows = conn.execute("SELECT * FROM bench")
    end_time = time.perf_counter()
    print(f"Fetch {count} rows: {end_time - start_time:.4f}s")
    assert len(rows) == count
    conn.close()

    print("Benchmarking fetchall (sqlite3 stdlib)...")
    ref = sqlite3.connect(db_path)
    start_time = time.perf_counter()
    rows = ref.execute("SELECT * FROM bench").fetchall()
    end_time = time.perf_counter()
    print(f"Fetchall {count} rows: {end_time - start_time:.4f}s")
    assert len(rows) == count
    ref.close()

    if os.path.exists(db_path):
        os.remove(db_path)

if __name__ == "__main__":
    run_benchmark(int(sys.argv[1]) if len(sys.argv) > 1 else 100000)
