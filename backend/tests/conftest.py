import pytest
from fastapi.testclient import TestClient

from app.core.config import settings


@pytest.fixture
def upload_dir(tmp_path, monkeypatch):
    """Point the upload directory at a per-test location"""
    directory = tmp_path / "uploads"
    directory.mkdir()
    monkeypatch.setattr(settings, "upload_dir", str(directory))
    return directory


@pytest.fixture
def client(upload_dir):
    from main import app
    return TestClient(app)


@pytest.fixture
def write_file(tmp_path):
    def _write(name, content):
        path = tmp_path / name
        if isinstance(content, str):
            path.write_text(content)
        else:
            path.write_bytes(content)
        return path
    return _write


@pytest.fixture
def make_gpx():
    def _make(heart_rates, tag="gpxtpx:hr"):
        points = "".join(
            f'<trkpt lat="47.1" lon="8.5"><extensions><gpxtpx:TrackPointExtension>'
            f"<{tag}>{hr}</{tag}></gpxtpx:TrackPointExtension></extensions></trkpt>"
            for hr in heart_rates
        )
        return (
            '<?xml version="1.0" encoding="UTF-8"?>'
            '<gpx version="1.1" xmlns:gpxtpx="http://www.garmin.com/xmlschemas/TrackPointExtension/v1">'
            f"<trk><trkseg>{points}</trkseg></trk></gpx>"
        )
    return _make
