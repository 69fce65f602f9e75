from datetime import datetime

import pytest

from intent.application.services.frame_collection import FrameCollectionManager
from intent.application.use_cases import (
    AddFrameUseCase,
    RemoveFrameUseCase,
    UpdateProjectUseCase,
)
from intent.domain.models import AspectRatio, CropRect, Frame, Project


@pytest.fixture
def manager(project_repo):
    return FrameCollectionManager(
        AddFrameUseCase(project_repo),
        RemoveFrameUseCase(project_repo),
        UpdateProjectUseCase(project_repo),
    )


@pytest.fixture
def project(project_repo):
    project = Project(
        id="p1", name="Beach", original_image_bytes=b"img", created_at=datetime(2024, 1, 1)
    )
    project_repo.save(project)
    return project


def test_commit_two_frames_then_delete_first(manager, project, project_repo):
    """Deleting the first of two frames leaves only the second."""
    first = Frame(crop_rect=CropRect(0.1, 0.1, 0.3, 0.3))
    second = Frame(crop_rect=CropRect(0.5, 0.5, 0.4, 0.4), aspect_ratio=AspectRatio.ONE_ONE)

    assert manager.add(project, first).success
    resp = manager.add(project, second)
    assert resp.success and resp.frame_count == 2

    removed = manager.remove(project, first.id)
    assert removed.success and removed.removed

    stored = project_repo.get(project.id)
    assert [f.id for f in stored.frames] == [second.id]
    assert [f.id for f in project.frames] == [second.id]


def test_add_appends_in_insertion_order(manager, project, project_repo):
    ids = []
    for offset in (0.0, 0.2, 0.4):
        frame = Frame(crop_rect=CropRect(offset, offset, 0.2, 0.2))
        manager.add(project, frame)
        ids.append(frame.id)
    assert [f.id for f in project_repo.get(project.id).frames] == ids


@pytest.mark.parametrize(
    "rect",
    [
        CropRect(0.1, 0.1, 0.05, 0.5),
        CropRect(0.8, 0.1, 0.5, 0.5),
        CropRect(-0.2, 0.1, 0.5, 0.5),
        CropRect(0.1, 0.1, float("nan"), 0.5),
    ],
)
def test_invalid_frame_is_dropped(manager, project, project_repo, rect, caplog):
    """Validate-on-commit: nothing reaches storage and no exception escapes."""
    resp = manager.add(project, Frame(crop_rect=rect))
    assert not resp.success
    assert resp.error
    assert project.frames == []
    assert project_repo.get(project.id).frames == []
    assert "Dropped frame" in caplog.text


def test_duplicate_frame_id_is_rejected(manager, project):
    frame = Frame(crop_rect=CropRect())
    assert manager.add(project, frame).success
    assert not manager.add(project, frame).success
    assert project.frame_count == 1


def test_remove_is_idempotent(manager, project):
    frame = Frame(crop_rect=CropRect())
    manager.add(project, frame)
    assert manager.remove(project, frame.id).removed
    again = manager.remove(project, frame.id)
    assert again.success and not again.removed
    assert manager.remove(project, "unknown").success


def test_update_replaces_stored_project(manager, project, project_repo):
    project.name = "Sunset"
    project.frames = [Frame(crop_rect=CropRect(0.0, 0.0, 1.0, 1.0))]
    assert manager.update(project).success
    stored = project_repo.get(project.id)
    assert stored.name == "Sunset"
    assert stored.frame_count == 1


def test_update_refuses_invalid_frames(manager, project, project_repo):
    project.frames = [Frame(crop_rect=CropRect(0.5, 0.5, 0.9, 0.9))]
    resp = manager.update(project)
    assert not resp.success
    assert project_repo.get(project.id).frames == []
