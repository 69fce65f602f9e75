import pytest
from PySide6.QtCore import QSize

from intent.domain.models import CropRect, Project
from intent.errors import ImageCropError, ImageDecodeError
from intent.infrastructure.services.image_store import ExportStatus, ImageStore


@pytest.fixture
def store():
    return ImageStore()


@pytest.fixture
def image(qapp, store, jpeg_bytes):
    return store.decode(jpeg_bytes)


def test_load_original(qapp, store, jpeg_bytes):
    project = Project.create(jpeg_bytes)
    loaded = store.load_original(project)
    assert (loaded.width(), loaded.height()) == (400, 200)


def test_load_original_rejects_garbage(qapp, store):
    with pytest.raises(ImageDecodeError):
        store.load_original(Project.create(b"garbage"))


def test_crop_uses_normalised_rect(store, image):
    cropped = store.crop(image, CropRect(0.0, 0.0, 0.5, 0.5))
    assert (cropped.width(), cropped.height()) == (200, 100)
    assert cropped.pixelColor(50, 50).red() > 150


def test_crop_outside_image_fails(store, image):
    with pytest.raises(ImageCropError):
        store.crop(image, CropRect(1.0, 1.0, 0.1, 0.1))


def test_compress_produces_jpeg(store, image):
    data = store.compress(image, target_size=QSize(100, 100), quality=0.7)
    assert data[:2] == b"\xff\xd8"
    shrunk = store.decode(data)
    assert (shrunk.width(), shrunk.height()) == (100, 50)


def test_resize_keeps_aspect(store, image):
    resized = store.resize(image, QSize(200, 200))
    assert (resized.width(), resized.height()) == (200, 100)
    assert store.resize(image, QSize(0, 10)) is None


def test_thumbnail_is_square(store, image):
    thumb = store.thumbnail(image, 80)
    assert (thumb.width(), thumb.height()) == (80, 80)


def test_export_to_library(store, image, tmp_path):
    target = tmp_path / "out"
    assert store.export_to_library(image, target) is ExportStatus.SUCCESS
    assert len(list(target.glob("frame-*.jpg"))) == 1


def test_export_into_a_file_path_errors(store, image, tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("x")
    assert store.export_to_library(image, blocker / "sub") is ExportStatus.ERROR
