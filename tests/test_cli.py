import re

import pytest
from typer.testing import CliRunner

from intent.appctx import create_context
from intent.cli import app

runner = CliRunner()


@pytest.fixture
def settings_path(tmp_path):
    return tmp_path / "settings.json"


@pytest.fixture
def photo(tmp_path, jpeg_bytes):
    path = tmp_path / "harbour.jpg"
    path.write_bytes(jpeg_bytes)
    return path


def _invoke(settings_path, *args, **kwargs):
    return runner.invoke(app, ["--settings", str(settings_path), *args], **kwargs)


@pytest.fixture
def project_id(qapp, settings_path, photo):
    result = _invoke(settings_path, "import", str(photo))
    assert result.exit_code == 0, result.output
    match = re.search(r"as ([0-9a-f-]{36})", result.output)
    assert match
    return match.group(1)


def test_import_and_list(settings_path, project_id):
    result = _invoke(settings_path, "list")
    assert result.exit_code == 0
    assert "harbour" in result.output


def test_add_frame_with_ratio(settings_path, project_id):
    result = _invoke(
        settings_path, "add-frame", project_id,
        "--x", "0.1", "--y", "0.1", "--width", "0.8", "--height", "0.4", "--aspect", "1:1",
    )
    assert result.exit_code == 0, result.output

    context = create_context(settings_path)
    try:
        frame = context.projects.get_project(project_id).frames[0]
    finally:
        context.close()
    assert frame.crop_rect.width == pytest.approx(0.4)
    assert frame.crop_rect.height == pytest.approx(0.4)


def test_add_invalid_frame_fails(settings_path, project_id):
    result = _invoke(
        settings_path, "add-frame", project_id,
        "--x", "0.1", "--y", "0.1", "--width", "0.05", "--height", "0.4",
    )
    assert result.exit_code == 1


def test_unknown_aspect_is_a_usage_error(settings_path, project_id):
    result = _invoke(
        settings_path, "add-frame", project_id,
        "--x", "0.1", "--y", "0.1", "--width", "0.5", "--height", "0.5", "--aspect", "5:4",
    )
    assert result.exit_code == 2


def test_show_missing_project(settings_path, qapp):
    result = _invoke(settings_path, "show", "missing")
    assert result.exit_code == 1


def test_export_remove_and_render(settings_path, project_id, tmp_path):
    context = create_context(settings_path)
    try:
        project = context.projects.get_project(project_id)
        from intent.domain.models import CropRect, Frame

        frame = Frame(crop_rect=CropRect(0.0, 0.0, 0.5, 0.5))
        assert context.frames.add(project, frame).success
    finally:
        context.close()

    exported = _invoke(settings_path, "export", project_id, frame.id, "--dest", str(tmp_path / "out"))
    assert exported.exit_code == 0, exported.output
    assert len(list((tmp_path / "out").glob("*.jpg"))) == 1

    preview = tmp_path / "preview.png"
    rendered = _invoke(settings_path, "render-overlay", project_id, str(preview), "--width", "200")
    assert rendered.exit_code == 0, rendered.output
    assert preview.exists()

    thumb = tmp_path / "thumb.png"
    assert _invoke(settings_path, "thumbnail", project_id, frame.id, str(thumb), "--size", "32").exit_code == 0
    assert thumb.exists()

    removed = _invoke(settings_path, "remove-frame", project_id, frame.id)
    assert removed.exit_code == 0
    assert "Removed" in removed.output


def test_rename_and_delete(settings_path, project_id):
    assert _invoke(settings_path, "rename", project_id, "Harbour at dusk").exit_code == 0
    aborted = _invoke(settings_path, "delete", project_id, input="n\n")
    assert aborted.exit_code == 1
    deleted = _invoke(settings_path, "delete", project_id, input="y\n")
    assert deleted.exit_code == 0
    assert _invoke(settings_path, "show", project_id).exit_code == 1
