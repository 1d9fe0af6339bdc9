"""Example: basic litebind usage.

litebind loads the system SQLite library. To use a specific build:
    LITEBIND_NATIVE_LIB=/path/to/libsqlite3.so python example.py
"""

import os
import tempfile
import litebind


def main():
    # Create a temporary database file for this example.
    db_path = os.path.join(tempfile.gettempdir(), "litebind_example.db")

    with litebind.open(db_path, litebind.OPEN_READWRITE | litebind.OPEN_CREATE) as conn:
        # Create a table and seed it in one script.
        conn.execute_script("""
            CREATE TABLE IF NOT EXISTS users (
                id    INTEGER PRIMARY KEY,
                name  TEXT NOT NULL,
                email TEXT UNIQUE
            );
            DELETE FROM users;
        """)

        # One execution per parameter set.
        users = [
            ("Alice", "alice@example.com"),
            ("Bob", "bob@example.com"),
            ("Carol", "carol@example.com"),
        ]
        conn.execute("INSERT INTO users (name, email) VALUES (?, ?)", users)

        # Query all users; rows carry the column names.
        print("All users:")
        for row in conn.execute("SELECT id, name, email FROM users ORDER BY id"):
            print(f"  id={row.id}  name={row.name}  email={row.email}")

        # Parameterised lookup.
        row, = conn.execute("SELECT name FROM users WHERE email = ?", ("bob@example.com",))
        print(f"\nLookup by email: {row.name}")

        # Transaction example.
        results = conn.execute_script("""
            BEGIN;
            INSERT INTO users (name, email) VALUES ('Dave', 'dave@example.com');
            COMMIT;
            SELECT count(*) AS total FROM users;
        """)
        print(f"\nTotal users after transaction: {results[-1][0].total}")

        # Errors carry the engine's codes.
        try:
            conn.execute("INSERT INTO users (name, email) VALUES (?, ?)", ("Eve", "alice@example.com"))
        except litebind.EngineError as e:
            print(f"\nConstraint violation: code={e.code} extended={e.extended_code}")

    # Reopen read-only.
    with litebind.open(db_path) as conn:
        print(f"\nRead-only: {conn.readonly}")

    os.unlink(db_path)
    print("\nDone.")


if __name__ == "__main__":
    main()
