"""Core AsyncStore class for database operations.

Every read and write is scoped by ``user_id``: a user can never see, change
or delete another user's buckets, prompts or answers. Records that exist but
belong to someone else are reported as not found.
"""

from __future__ import annotations

import json
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from typing import Any

import aiosqlite

from ..errors import ConflictError, DomainValidationError, NotFoundError
from ..logging_config import get_logger
from ..models import (
    AnswerCreate,
    Bucket,
    PromptAnswer,
    PromptCreate,
    PromptFilters,
    Question,
    SavedPrompt,
)
from ..taxonomy import is_valid_pair
from .schema import SCHEMA

logger = get_logger(__name__)

DEFAULT_BUCKET_COLOR = "#8B5CF6"
DEFAULT_BUCKET_ICON = "folder"
TITLE_MAX_CHARS = 60
NOTES_MAX_CHARS = 1000


def _now() -> str:
    return datetime.now(UTC).isoformat()


def _row_to_bucket(row: aiosqlite.Row) -> Bucket:
    keys = row.keys()
    return Bucket(
        id=row["id"],
        user_id=row["user_id"],
        name=row["name"],
        color=row["color"],
        icon=row["icon"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
        prompt_count=row["prompt_count"] if "prompt_count" in keys else 0,
        last_used_at=row["last_used_at"] if "last_used_at" in keys else None,
    )


def _row_to_prompt(row: aiosqlite.Row) -> SavedPrompt:
    answers = json.loads(row["answers"] or "{}")
    return SavedPrompt(
        id=row["id"],
        user_id=row["user_id"],
        title=row["title"],
        original_idea=row["original_idea"],
        super_prompt=row["super_prompt"],
        bucket_id=row["bucket_id"],
        category=row["category"],
        subcategory=row["subcategory"],
        analysis_mode=row["analysis_mode"],
        questions=[Question(**q) for q in json.loads(row["questions"] or "[]")],
        answers={int(k): v for k, v in answers.items()},
        created_at=row["created_at"],
    )


def _row_to_answer(row: aiosqlite.Row) -> PromptAnswer:
    return PromptAnswer(
        id=row["id"],
        prompt_id=row["prompt_id"],
        user_id=row["user_id"],
        answer_text=row["answer_text"],
        notes=row["notes"],
        tokens_used=row["tokens_used"],
        generation_time_ms=row["generation_time_ms"],
        created_at=row["created_at"],
    )


class AsyncStore:
    """Async SQLite storage for buckets, prompts and answers."""

    def __init__(self, db_path: str):
        """Initialize the store.

        Args:
            db_path: Path to SQLite database file
        """
        self.db_path = db_path
        self._connection: aiosqlite.Connection | None = None

    async def connect(self) -> None:
        """Open database connection."""
        self._connection = await aiosqlite.connect(self.db_path)
        self._connection.row_factory = aiosqlite.Row
        await self._connection.execute("PRAGMA foreign_keys = ON")
        logger.info("database_connected", path=self.db_path)

    async def close(self) -> None:
        """Close database connection."""
        if self._connection:
            await self._connection.close()
            self._connection = None
            logger.info("database_closed")

    @asynccontextmanager
    async def connection(self) -> AsyncIterator[aiosqlite.Connection]:
        """Context manager for database connection."""
        if not self._connection:
            await self.connect()
        yield self._connection

    async def init_db(self) -> None:
        """Initialize database schema."""
        async with self.connection() as conn:
            await conn.executescript(SCHEMA)
            await conn.commit()
        logger.info("database_initialized")

    # =========================================================================
    # Buckets
    # =========================================================================

    async def _fetch_bucket(self, conn: aiosqlite.Connection, user_id: str, bucket_id: int) -> Bucket | None:
        cursor = await conn.execute(
            "SELECT * FROM buckets WHERE id = ? AND user_id = ?",
            (bucket_id, user_id),
        )
        row = await cursor.fetchone()
        return _row_to_bucket(row) if row else None

    async def _bucket_name_taken(
        self,
        conn: aiosqlite.Connection,
        user_id: str,
        name: str,
        exclude_id: int | None = None,
    ) -> bool:
        cursor = await conn.execute(
            "SELECT id FROM buckets WHERE user_id = ? AND name = ? AND id != ?",
            (user_id, name, exclude_id if exclude_id is not None else -1),
        )
        return await cursor.fetchone() is not None

    async def get_bucket(self, user_id: str, bucket_id: int) -> Bucket:
        """Get one bucket owned by the user.

        Raises:
            NotFoundError: If the bucket does not exist or is not owned by the user
        """
        async with self.connection() as conn:
            bucket = await self._fetch_bucket(conn, user_id, bucket_id)
        if bucket is None:
            raise NotFoundError("Bucket not found")
        return bucket

    async def list_buckets(self, user_id: str) -> list[Bucket]:
        """List a user's buckets, oldest first, with prompt counts and last use."""
        async with self.connection() as conn:
            cursor = await conn.execute(
                """
                SELECT b.*,
                       COUNT(p.id) AS prompt_count,
                       MAX(p.created_at) AS last_used_at
                FROM buckets b
                LEFT JOIN prompts p ON p.bucket_id = b.id AND p.user_id = b.user_id
                WHERE b.user_id = ?
                GROUP BY b.id
                ORDER BY b.created_at ASC, b.id ASC
                """,
                (user_id,),
            )
            rows = await cursor.fetchall()
        return [_row_to_bucket(row) for row in rows]

    async def create_bucket(
        self,
        user_id: str,
        name: str,
        color: str = DEFAULT_BUCKET_COLOR,
        icon: str = DEFAULT_BUCKET_ICON,
    ) -> Bucket:
        """Create a bucket.

        Raises:
            DomainValidationError: If the name is blank
            ConflictError: If the user already has a bucket with this name
        """
        name = (name or "").strip()
        if not name:
            raise DomainValidationError("Bucket name is required")

        async with self.connection() as conn:
            if await self._bucket_name_taken(conn, user_id, name):
                raise ConflictError("A bucket with this name already exists")

            now = _now()
            try:
                cursor = await conn.execute(
                    """
                    INSERT INTO buckets (user_id, name, color, icon, created_at, updated_at)
                    VALUES (?, ?, ?, ?, ?, ?)
                    """,
                    (user_id, name, color or DEFAULT_BUCKET_COLOR, icon or DEFAULT_BUCKET_ICON, now, now),
                )
                await conn.commit()
            except aiosqlite.IntegrityError as e:
                await conn.rollback()
                raise ConflictError("A bucket with this name already exists") from e
            bucket_id = cursor.lastrowid

        logger.info("bucket_created", user_id=user_id, bucket_id=bucket_id, name=name)
        return await self.get_bucket(user_id, bucket_id)

    async def ensure_default_bucket(self, user_id: str, name: str = "Personal") -> Bucket:
        """Return the user's first bucket, creating one if they have none."""
        buckets = await self.list_buckets(user_id)
        if buckets:
            return buckets[0]
        try:
            return await self.create_bucket(user_id, name)
        except ConflictError:
            # A concurrent request created it first
            logger.debug("default_bucket_race", user_id=user_id, name=name)
            return (await self.list_buckets(user_id))[0]

    async def update_bucket(
        self,
        user_id: str,
        bucket_id: int,
        name: str | None = None,
        color: str | None = None,
        icon: str | None = None,
    ) -> Bucket:
        """Rename or restyle a bucket.

        Raises:
            NotFoundError: If the bucket does not exist or is not owned by the user
            DomainValidationError: If the new name is blank
            ConflictError: If the new name is already used by another bucket
        """
        updates: dict[str, Any] = {}
        async with self.connection() as conn:
            if await self._fetch_bucket(conn, user_id, bucket_id) is None:
                raise NotFoundError("Bucket not found")

            if name is not None:
                name = name.strip()
                if not name:
                    raise DomainValidationError("Bucket name is required")
                if await self._bucket_name_taken(conn, user_id, name, exclude_id=bucket_id):
                    raise ConflictError("A bucket with this name already exists")
                updates["name"] = name
            if color is not None:
                updates["color"] = color
            if icon is not None:
                updates["icon"] = icon
            updates["updated_at"] = _now()

            assignments = ", ".join(f"{column} = ?" for column in updates)
            await conn.execute(
                f"UPDATE buckets SET {assignments} WHERE id = ? AND user_id = ?",
                (*updates.values(), bucket_id, user_id),
            )
            await conn.commit()

        logger.info("bucket_updated", user_id=user_id, bucket_id=bucket_id, fields=sorted(updates))
        return await self.get_bucket(user_id, bucket_id)

    async def delete_bucket(self, user_id: str, bucket_id: int, reassign_to: int | None) -> int:
        """Delete a bucket after moving its prompts to another bucket.

        Args:
            user_id: Acting user
            bucket_id: Bucket to delete
            reassign_to: Bucket that receives the deleted bucket's prompts

        Returns:
            Number of prompts reassigned

        Raises:
            NotFoundError: If the bucket does not exist or is not owned by the user
            DomainValidationError: If it is the user's last bucket, or the
                reassignment target is missing, the same bucket, or not owned
        """
        async with self.connection() as conn:
            if await self._fetch_bucket(conn, user_id, bucket_id) is None:
                raise NotFoundError("Bucket not found")

            cursor = await conn.execute("SELECT COUNT(*) FROM buckets WHERE user_id = ?", (user_id,))
            (bucket_count,) = await cursor.fetchone()
            if bucket_count <= 1:
                raise DomainValidationError("Cannot delete your last bucket")

            if reassign_to is None:
                raise DomainValidationError("A bucket to move prompts into is required")
            if reassign_to == bucket_id:
                raise DomainValidationError("Cannot move prompts into the bucket being deleted")
            if await self._fetch_bucket(conn, user_id, reassign_to) is None:
                raise DomainValidationError("Invalid reassignment bucket")

            try:
                cursor = await conn.execute(
                    "UPDATE prompts SET bucket_id = ? WHERE bucket_id = ? AND user_id = ?",
                    (reassign_to, bucket_id, user_id),
                )
                moved = cursor.rowcount
                await conn.execute(
                    "DELETE FROM buckets WHERE id = ? AND user_id = ?",
                    (bucket_id, user_id),
                )
                await conn.commit()
            except Exception:
                await conn.rollback()
                raise

        logger.info(
            "bucket_deleted",
            user_id=user_id,
            bucket_id=bucket_id,
            reassigned_to=reassign_to,
            prompts_moved=moved,
        )
        return moved

    # =========================================================================
    # Prompts
    # =========================================================================

    async def create_prompt(self, user_id: str, fields: PromptCreate) -> SavedPrompt:
        """Save a prompt.

        Raises:
            DomainValidationError: If required text is missing, the bucket is
                not owned by the user, or the subcategory is not under the category
        """
        original_idea = (fields.original_idea or "").strip()
        super_prompt = (fields.super_prompt or "").strip()
        if not original_idea or not super_prompt:
            raise DomainValidationError("Missing required fields")
        if not is_valid_pair(fields.category, fields.subcategory):
            raise DomainValidationError("Subcategory does not belong to the selected category")

        title = (fields.title or "").strip() or original_idea[:TITLE_MAX_CHARS]

        async with self.connection() as conn:
            if await self._fetch_bucket(conn, user_id, fields.bucket_id) is None:
                raise DomainValidationError("Invalid bucket")

            cursor = await conn.execute(
                """
                INSERT INTO prompts
                (user_id, title, original_idea, super_prompt, bucket_id,
                 category, subcategory, analysis_mode, questions, answers, created_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    user_id,
                    title,
                    original_idea,
                    super_prompt,
                    fields.bucket_id,
                    fields.category.value,
                    fields.subcategory.value if fields.subcategory else None,
                    fields.analysis_mode.value,
                    json.dumps([q.model_dump() for q in fields.questions]),
                    json.dumps({str(k): v for k, v in fields.answers.items()}),
                    _now(),
                ),
            )
            await conn.commit()
            prompt_id = cursor.lastrowid

        logger.info(
            "prompt_saved",
            user_id=user_id,
            prompt_id=prompt_id,
            bucket_id=fields.bucket_id,
            category=fields.category.value,
            mode=fields.analysis_mode.value,
        )
        return await self.get_prompt(user_id, prompt_id)

    async def get_prompt(self, user_id: str, prompt_id: int) -> SavedPrompt:
        """Get one prompt owned by the user.

        Raises:
            NotFoundError: If the prompt does not exist or is not owned by the user
        """
        async with self.connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM prompts WHERE id = ? AND user_id = ?",
                (prompt_id, user_id),
            )
            row = await cursor.fetchone()
        if not row:
            raise NotFoundError("Prompt not found or access denied")
        return _row_to_prompt(row)

    async def list_prompts(self, user_id: str, filters: PromptFilters | None = None) -> list[SavedPrompt]:
        """List a user's prompts, newest first.

        Args:
            user_id: Owner
            filters: Optional category/subcategory/bucket filters and a
                case-insensitive search over title, idea and super prompt
        """
        filters = filters or PromptFilters()
        clauses = ["user_id = ?"]
        params: list[Any] = [user_id]

        if filters.category is not None:
            clauses.append("category = ?")
            params.append(filters.category.value)
        if filters.subcategory is not None:
            clauses.append("subcategory = ?")
            params.append(filters.subcategory.value)
        if filters.bucket_id is not None:
            clauses.append("bucket_id = ?")
            params.append(filters.bucket_id)
        if filters.search and filters.search.strip():
            pattern = f"%{filters.search.strip().lower()}%"
            clauses.append("(LOWER(title) LIKE ? OR LOWER(original_idea) LIKE ? OR LOWER(super_prompt) LIKE ?)")
            params.extend([pattern, pattern, pattern])

        async with self.connection() as conn:
            cursor = await conn.execute(
                f"SELECT * FROM prompts WHERE {' AND '.join(clauses)} ORDER BY created_at DESC, id DESC",
                params,
            )
            rows = await cursor.fetchall()
        return [_row_to_prompt(row) for row in rows]

    async def delete_prompt(self, user_id: str, prompt_id: int) -> None:
        """Delete a prompt and its saved answers.

        Raises:
            NotFoundError: If the prompt does not exist or is not owned by the user
        """
        async with self.connection() as conn:
            cursor = await conn.execute(
                "DELETE FROM prompts WHERE id = ? AND user_id = ?",
                (prompt_id, user_id),
            )
            await conn.commit()
        if cursor.rowcount == 0:
            raise NotFoundError("Prompt not found or access denied")
        logger.info("prompt_deleted", user_id=user_id, prompt_id=prompt_id)

    async def get_category_stats(self, user_id: str) -> list[dict[str, Any]]:
        """Prompt counts per category, most used first."""
        async with self.connection() as conn:
            cursor = await conn.execute(
                """
                SELECT category, COUNT(*) AS count, MAX(created_at) AS last_used
                FROM prompts
                WHERE user_id = ?
                GROUP BY category
                ORDER BY count DESC, category ASC
                """,
                (user_id,),
            )
            rows = await cursor.fetchall()

        total = sum(row["count"] for row in rows)
        return [
            {
                "category": row["category"],
                "count": row["count"],
                "percentage": round(row["count"] * 100 / total, 1) if total else 0.0,
                "last_used": row["last_used"],
            }
            for row in rows
        ]

    # =========================================================================
    # Playground answers
    # =========================================================================

    async def save_answer(self, user_id: str, fields: AnswerCreate) -> PromptAnswer:
        """Save a playground answer against one of the user's prompts.

        Raises:
            DomainValidationError: If the answer is blank or the notes are too long
            NotFoundError: If the prompt does not exist or is not owned by the user
        """
        if not fields.answer_text or not fields.answer_text.strip():
            raise DomainValidationError("Answer text cannot be empty")
        if fields.notes and len(fields.notes) > NOTES_MAX_CHARS:
            raise DomainValidationError(f"Notes cannot exceed {NOTES_MAX_CHARS:,} characters")

        await self.get_prompt(user_id, fields.prompt_id)

        async with self.connection() as conn:
            cursor = await conn.execute(
                """
                INSERT INTO prompt_answers
                (prompt_id, user_id, answer_text, notes, tokens_used, generation_time_ms, created_at)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    fields.prompt_id,
                    user_id,
                    fields.answer_text,
                    fields.notes.strip() if fields.notes else None,
                    fields.tokens_used,
                    fields.generation_time_ms,
                    _now(),
                ),
            )
            await conn.commit()
            answer_id = cursor.lastrowid

            cursor = await conn.execute("SELECT * FROM prompt_answers WHERE id = ?", (answer_id,))
            row = await cursor.fetchone()

        logger.info("answer_saved", user_id=user_id, prompt_id=fields.prompt_id, answer_id=answer_id)
        return _row_to_answer(row)

    async def list_answers(self, user_id: str, prompt_id: int) -> list[PromptAnswer]:
        """List saved answers for one of the user's prompts, newest first.

        Raises:
            NotFoundError: If the prompt does not exist or is not owned by the user
        """
        await self.get_prompt(user_id, prompt_id)

        async with self.connection() as conn:
            cursor = await conn.execute(
                """
                SELECT * FROM prompt_answers
                WHERE prompt_id = ? AND user_id = ?
                ORDER BY created_at DESC, id DESC
                """,
                (prompt_id, user_id),
            )
            rows = await cursor.fetchall()
        return [_row_to_answer(row) for row in rows]

    async def delete_answer(self, user_id: str, answer_id: int) -> None:
        """Delete one of the user's saved answers.

        Raises:
            NotFoundError: If the answer does not exist or is not owned by the user
        """
        async with self.connection() as conn:
            cursor = await conn.execute(
                "DELETE FROM prompt_answers WHERE id = ? AND user_id = ?",
                (answer_id, user_id),
            )
            await conn.commit()
        if cursor.rowcount == 0:
            raise NotFoundError("Answer not found or access denied")
        logger.info("answer_deleted", user_id=user_id, answer_id=answer_id)
