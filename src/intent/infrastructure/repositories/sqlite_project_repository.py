import logging
import math
import sqlite3
from datetime import datetime
from typing import List, Optional

from intent.config import MIN_CROP_SIZE
from intent.domain.models import AspectRatio, CropRect, Frame, Project
from intent.domain.repositories import IProjectRepository
from intent.errors import DatabaseError
from intent.infrastructure.db.pool import ConnectionPool

_logger = logging.getLogger(__name__)


class SQLiteProjectRepository(IProjectRepository):
    def __init__(self, pool: ConnectionPool, min_size: float = MIN_CROP_SIZE):
        self._pool = pool
        self._min_size = min_size
        self._init_tables()

    def _init_tables(self):
        with self._pool.connection() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS projects (
                    id TEXT PRIMARY KEY,
                    name TEXT NOT NULL,
                    created_at TEXT,
                    original_image BLOB NOT NULL
                )
            """)
            conn.execute("""
                CREATE TABLE IF NOT EXISTS frames (
                    id TEXT NOT NULL,
                    project_id TEXT NOT NULL REFERENCES projects(id) ON DELETE CASCADE,
                    position INTEGER NOT NULL,
                    created_at TEXT,
                    x REAL NOT NULL,
                    y REAL NOT NULL,
                    width REAL NOT NULL,
                    height REAL NOT NULL,
                    aspect_ratio TEXT NOT NULL,
                    PRIMARY KEY (project_id, id)
                )
            """)
            conn.execute(
                "CREATE INDEX IF NOT EXISTS idx_frames_project ON frames(project_id, position)"
            )

    def get(self, id: str) -> Optional[Project]:
        with self._pool.connection() as conn:
            row = conn.execute("SELECT * FROM projects WHERE id = ?", (id,)).fetchone()
            if row is None:
                return None
            return self._map_row_to_project(conn, row)

    def list_all(self) -> List[Project]:
        with self._pool.connection() as conn:
            rows = conn.execute(
                "SELECT * FROM projects ORDER BY created_at DESC, rowid DESC"
            ).fetchall()
            return [self._map_row_to_project(conn, row) for row in rows]

    def save(self, project: Project) -> None:
        try:
            with self._pool.connection() as conn:
                conn.execute("""
                    INSERT INTO projects (id, name, created_at, original_image)
                    VALUES (?, ?, ?, ?)
                    ON CONFLICT(id) DO UPDATE SET
                        name = excluded.name,
                        created_at = excluded.created_at,
                        original_image = excluded.original_image
                """, (
                    project.id,
                    project.name,
                    project.created_at.isoformat() if project.created_at else None,
                    sqlite3.Binary(project.original_image_bytes),
                ))
                # The frame list is replaced wholesale so order always matches the model
                conn.execute("DELETE FROM frames WHERE project_id = ?", (project.id,))
                conn.executemany("""
                    INSERT INTO frames
                    (id, project_id, position, created_at, x, y, width, height, aspect_ratio)
                    VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                """, [
                    (
                        frame.id,
                        project.id,
                        position,
                        frame.created_at.isoformat() if frame.created_at else None,
                        frame.crop_rect.x,
                        frame.crop_rect.y,
                        frame.crop_rect.width,
                        frame.crop_rect.height,
                        frame.aspect_ratio.value,
                    )
                    for position, frame in enumerate(project.frames)
                ])
        except sqlite3.Error as exc:
            raise DatabaseError(f"Failed to save project {project.id}: {exc}") from exc

    def delete(self, id: str) -> None:
        try:
            with self._pool.connection() as conn:
                conn.execute("DELETE FROM projects WHERE id = ?", (id,))
        except sqlite3.Error as exc:
            raise DatabaseError(f"Failed to delete project {id}: {exc}") from exc

    def _map_row_to_project(self, conn, row) -> Project:
        frame_rows = conn.execute(
            "SELECT * FROM frames WHERE project_id = ? ORDER BY position",
            (row["id"],),
        ).fetchall()
        frames = []
        for frame_row in frame_rows:
            frame = self._map_row_to_frame(frame_row)
            if frame is not None:
                frames.append(frame)
        return Project(
            id=row["id"],
            name=row["name"],
            original_image_bytes=bytes(row["original_image"]),
            created_at=_parse_datetime(row["created_at"]),
            frames=frames,
        )

    def _map_row_to_frame(self, row) -> Optional[Frame]:
        values = (row["x"], row["y"], row["width"], row["height"])
        if not all(_is_finite_number(v) for v in values):
            _logger.warning("Skipping frame %s with corrupt crop %s", row["id"], values)
            return None
        rect = CropRect(*(float(v) for v in values))
        if not rect.is_valid(self._min_size):
            clamped = rect.clamped(self._min_size)
            _logger.warning("Clamped stored crop of frame %s from %s to %s", row["id"], rect, clamped)
            rect = clamped
        try:
            aspect_ratio = AspectRatio.parse(row["aspect_ratio"])
        except ValueError:
            _logger.warning(
                "Unknown aspect ratio %r on frame %s, using Free", row["aspect_ratio"], row["id"]
            )
            aspect_ratio = AspectRatio.FREE
        return Frame(
            id=row["id"],
            crop_rect=rect,
            aspect_ratio=aspect_ratio,
            created_at=_parse_datetime(row["created_at"]),
        )


def _is_finite_number(value) -> bool:
    # REAL columns still hold TEXT or BLOB values that cannot be converted
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def _parse_datetime(value: Optional[str]) -> datetime:
    if not value:
        return datetime.now()
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        return datetime.now()
