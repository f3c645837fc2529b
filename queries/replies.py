from typing import List

from database import get_db, now_timestamp
from schemas.shared import ReplyResponse

# Parent tables are fixed identifiers, never user input
REPLY_TABLES = {
    "post": ("post_replies", "post_id"),
    "event": ("event_replies", "event_id"),
}


def _reply_select(kind: str) -> str:
    table, _ = REPLY_TABLES[kind]
    return f"""
        SELECT
            {table}.id,
            {table}.body,
            {table}.created_at,
            {table}.author_id,
            users.name AS author_name,
            users.handle AS author_handle
        FROM {table}
        JOIN users ON {table}.author_id = users.id
    """


def _to_reply(row) -> ReplyResponse:
    return ReplyResponse(
        id=row["id"], body=row["body"], created_at=row["created_at"],
        author_id=row["author_id"], author_name=row["author_name"], author_handle=row["author_handle"]
    )


def list_replies(kind: str, parent_id: int) -> List[ReplyResponse]:
    table, parent_column = REPLY_TABLES[kind]
    with get_db() as conn:
        cursor = conn.cursor()
        cursor.execute(
            f"{_reply_select(kind)} WHERE {table}.{parent_column} = ? ORDER BY {table}.created_at ASC, {table}.id ASC",
            (parent_id,)
        )
        return [_to_reply(row) for row in cursor.fetchall()]


def add_reply(kind: str, parent_id: int, author_id: int, body: str) -> ReplyResponse:
    table, parent_column = REPLY_TABLES[kind]
    with get_db() as conn:
        cursor = conn.cursor()
        cursor.execute(
            f"INSERT INTO {table} ({parent_column}, author_id, body, created_at) VALUES (?, ?, ?, ?)",
            (parent_id, author_id, body, now_timestamp())
        )
        reply_id = cursor.lastrowid
        conn.commit()
        cursor.execute(f"{_reply_select(kind)} WHERE {table}.id = ?", (reply_id,))
        return _to_reply(cursor.fetchone())
