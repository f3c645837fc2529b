import logging
import sqlite3
from contextlib import contextmanager
from datetime import datetime, timedelta, timezone

from config import settings
from database_schemas import TABLE_SCHEMAS, INDEX_SCHEMAS

logger = logging.getLogger(__name__)

DEMO_EMAIL = 'demo@earth.link'
DEMO_PASSWORD = 'password123'
DEMO_HANDLE = 'demo'

SEED_POSTS = [
    ("Just deployed Earth Link! The development experience has been amazing so far.", 5),
    ("Hot take: server-rendered pages with small API routes are underrated.", 45),
    ("Spent the morning debugging connection handling. Always test your health checks!", 120),
    ("Building in public is scary but rewarding. Shipping Earth Link v1 soon!", 360),
    ("The best code is no code at all. The second best is simple, readable code.", 480),
]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def to_db_timestamp(value: datetime) -> str:
    """Serialize a datetime the way every timestamp column stores it."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat(timespec="microseconds")


def now_timestamp() -> str:
    return to_db_timestamp(utc_now())


@contextmanager
def get_db():
    conn = sqlite3.connect(settings.database_path)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    try:
        yield conn
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def init_db():
    with get_db() as conn:
        cursor = conn.cursor()
        for schema in TABLE_SCHEMAS:
            cursor.execute(schema)
        for index in INDEX_SCHEMAS:
            cursor.execute(index)
        conn.commit()
    logger.info("Database schema ready at %s", settings.database_path)


def seed_demo_data():
    """Create the demo account and a few posts when the database is empty."""
    from auth import handle_candidates, hash_password

    with get_db() as conn:
        cursor = conn.cursor()
        cursor.execute("SELECT id FROM users WHERE email = ?", (DEMO_EMAIL,))
        row = cursor.fetchone()
        if row:
            demo_id = row["id"]
        else:
            for handle in handle_candidates(DEMO_HANDLE):
                cursor.execute("SELECT 1 FROM users WHERE handle = ?", (handle,))
                if not cursor.fetchone():
                    break
            cursor.execute(
                "INSERT INTO users (handle, name, email, password_hash, created_at) VALUES (?, ?, ?, ?, ?)",
                (handle, 'Demo User', DEMO_EMAIL, hash_password(DEMO_PASSWORD), now_timestamp())
            )
            demo_id = cursor.lastrowid
            logger.info("Demo user created with id=%s handle=%s", demo_id, handle)

        cursor.execute("SELECT COUNT(*) FROM posts")
        if cursor.fetchone()[0] == 0:
            now = utc_now()
            for body, minutes_ago in SEED_POSTS:
                cursor.execute(
                    "INSERT INTO posts (author_id, body, created_at) VALUES (?, ?, ?)",
                    (demo_id, body, to_db_timestamp(now - timedelta(minutes=minutes_ago)))
                )
            logger.info("Seeded %d demo posts", len(SEED_POSTS))
        conn.commit()


def check_connection() -> bool:
    with get_db() as conn:
        row = conn.execute("SELECT 1 AS health").fetchone()
        return row["health"] == 1


if __name__ == "__main__":
    logging.basicConfig(level=settings.log_level)
    init_db()
    if settings.seed_demo_data:
        seed_demo_data()
