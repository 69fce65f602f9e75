import math
from datetime import datetime

import pytest

from intent.domain.models import AspectRatio, CropRect, Frame, Project


def _project(name="Trip", created_at=None, frames=None):
    return Project(
        id=f"p-{name}",
        name=name,
        original_image_bytes=b"\xff\xd8fake",
        created_at=created_at or datetime(2024, 5, 1, 12, 0),
        frames=frames or [],
    )


def test_save_and_get_round_trip(project_repo):
    frames = [
        Frame(crop_rect=CropRect(0.1, 0.1, 0.5, 0.5), aspect_ratio=AspectRatio.ONE_ONE, id="a"),
        Frame(crop_rect=CropRect(0.2, 0.3, 0.4, 0.3), id="b"),
    ]
    project_repo.save(_project(frames=frames))

    loaded = project_repo.get("p-Trip")
    assert loaded is not None
    assert loaded.name == "Trip"
    assert loaded.original_image_bytes == b"\xff\xd8fake"
    assert [f.id for f in loaded.frames] == ["a", "b"]
    assert loaded.frames[0].aspect_ratio is AspectRatio.ONE_ONE
    assert loaded.frames[1].crop_rect == CropRect(0.2, 0.3, 0.4, 0.3)


def test_get_missing_returns_none(project_repo):
    assert project_repo.get("nope") is None


def test_save_replaces_frames_wholesale(project_repo):
    project = _project(frames=[Frame(crop_rect=CropRect(), id="a"), Frame(crop_rect=CropRect(), id="b")])
    project_repo.save(project)
    project.frames = [project.frames[1]]
    project.name = "Renamed"
    project_repo.save(project)

    loaded = project_repo.get(project.id)
    assert loaded.name == "Renamed"
    assert [f.id for f in loaded.frames] == ["b"]


def test_list_all_newest_first(project_repo):
    project_repo.save(_project("old", created_at=datetime(2023, 1, 1)))
    project_repo.save(_project("new", created_at=datetime(2024, 1, 1)))
    assert [p.name for p in project_repo.list_all()] == ["new", "old"]


def test_delete_cascades_to_frames(project_repo, db_pool):
    project_repo.save(_project(frames=[Frame(crop_rect=CropRect(), id="a")]))
    project_repo.delete("p-Trip")

    assert project_repo.get("p-Trip") is None
    with db_pool.connection() as conn:
        assert conn.execute("SELECT COUNT(*) FROM frames").fetchone()[0] == 0


def _insert_raw_frame(db_pool, frame_id, x, y, w, h, ratio="Free"):
    with db_pool.connection() as conn:
        conn.execute(
            "INSERT INTO frames (id, project_id, position, created_at, x, y, width, height, aspect_ratio)"
            " VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)",
            (frame_id, "p-Trip", 0, None, x, y, w, h, ratio),
        )


def test_load_clamps_out_of_bounds_frames(project_repo, db_pool, caplog):
    """A stored crop outside the unit square is clamped, never propagated."""
    project_repo.save(_project())
    _insert_raw_frame(db_pool, "bad", 0.95, -0.1, 0.3, 0.05)

    with caplog.at_level("WARNING"):
        loaded = project_repo.get("p-Trip")
    rect = loaded.frames[0].crop_rect
    assert rect.is_valid(0.1)
    assert rect.as_tuple() == pytest.approx((0.7, 0.0, 0.3, 0.1))
    assert "Clamped" in caplog.text


def test_load_skips_non_finite_frames(project_repo, db_pool):
    project_repo.save(_project())
    _insert_raw_frame(db_pool, "inf", 0.1, 0.1, math.inf, 0.5)
    assert project_repo.get("p-Trip").frames == []


def test_load_unknown_ratio_falls_back_to_free(project_repo, db_pool):
    project_repo.save(_project())
    _insert_raw_frame(db_pool, "odd", 0.1, 0.1, 0.5, 0.5, ratio="5:4")
    assert project_repo.get("p-Trip").frames[0].aspect_ratio is AspectRatio.FREE


def test_load_skips_frames_with_non_numeric_columns(project_repo, db_pool, caplog):
    """Text left in a coordinate column drops the frame, the project stays readable."""
    project_repo.save(_project(frames=[Frame(crop_rect=CropRect(), id="good")]))
    with db_pool.connection() as conn:
        conn.execute(
            "INSERT INTO frames (id, project_id, position, created_at, x, y, width, height, aspect_ratio)"
            " VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)",
            ("garbage", "p-Trip", 1, None, "garbage", 0.1, 0.5, 0.5, "Free"),
        )

    with caplog.at_level("WARNING"):
        loaded = project_repo.get("p-Trip")
    assert [f.id for f in loaded.frames] == ["good"]
    assert [p.id for p in project_repo.list_all()] == ["p-Trip"]
    assert "corrupt crop" in caplog.text


def test_frame_ids_are_scoped_to_their_project(project_repo):
    project_repo.save(_project("one", frames=[Frame(crop_rect=CropRect(), id="shared")]))
    project_repo.save(
        _project("two", frames=[Frame(crop_rect=CropRect(0.2, 0.2, 0.5, 0.5), id="shared")])
    )

    assert [f.id for f in project_repo.get("p-one").frames] == ["shared"]
    assert project_repo.get("p-two").frames[0].crop_rect == CropRect(0.2, 0.2, 0.5, 0.5)
