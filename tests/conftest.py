import os
import sys
from io import BytesIO
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"

# Make ``intent`` importable without installing the package
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


@pytest.fixture(scope="session")
def qapp():
    """Offscreen Qt application shared by tests that decode or paint images."""
    from PySide6.QtGui import QGuiApplication

    app = QGuiApplication.instance()
    if app is None:
        app = QGuiApplication([])
    yield app


@pytest.fixture
def jpeg_bytes():
    """A 400x200 JPEG with a red left half and a blue right half."""
    from PIL import Image

    image = Image.new("RGB", (400, 200), (200, 30, 30))
    image.paste((30, 30, 200), (200, 0, 400, 200))
    buffer = BytesIO()
    image.save(buffer, format="JPEG", quality=90)
    return buffer.getvalue()


@pytest.fixture
def db_pool(tmp_path):
    from intent.infrastructure.db.pool import ConnectionPool

    pool = ConnectionPool(tmp_path / "projects.db")
    yield pool
    pool.close_all()


@pytest.fixture
def project_repo(db_pool):
    from intent.infrastructure.repositories.sqlite_project_repository import (
        SQLiteProjectRepository,
    )

    return SQLiteProjectRepository(db_pool)
