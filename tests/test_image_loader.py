"""
Tests for logo loading.
"""
import base64
import io

import pytest
import requests
from PIL import Image

from compliance_reports.exceptions import LogoFetchError
from compliance_reports.layout.image_loader import load_logo


def png_bytes(size=(40, 20), mode="RGB"):
    buffer = io.BytesIO()
    Image.new(mode, size, color=0).save(buffer, format="PNG")
    return buffer.getvalue()


def data_uri(raw):
    return "data:image/png;base64," + base64.b64encode(raw).decode("ascii")


class FakeResponse:
    def __init__(self, content, status_code=200):
        self.content = content
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error")


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.requested = []

    def get(self, url, timeout=None):
        self.requested.append((url, timeout))
        if self.error:
            raise self.error
        return self.response


@pytest.mark.parametrize("source", [None, ""])
def test_no_source_means_no_logo(source):
    assert load_logo(source) is None


def test_data_uri():
    logo = load_logo(data_uri(png_bytes((40, 20))))
    assert (logo.width, logo.height) == (40, 20)
    assert logo.aspect == 0.5
    assert logo.scaled_height(72) == 36


def test_palette_image_is_converted():
    logo = load_logo(data_uri(png_bytes((10, 10), mode="P")))
    assert logo.width == 10


def test_file_path(tmp_path):
    path = tmp_path / "logo.png"
    path.write_bytes(png_bytes((30, 30)))
    logo = load_logo(str(path))
    assert logo.aspect == 1.0


def test_missing_file():
    with pytest.raises(LogoFetchError, match="file not found"):
        load_logo("/nonexistent/logo.png")


def test_undecodable_data():
    source = data_uri(b"this is not an image")
    with pytest.raises(LogoFetchError, match="not a decodable image"):
        load_logo(source)


def test_url_uses_session_and_timeout():
    session = FakeSession(FakeResponse(png_bytes((50, 25))))
    logo = load_logo("https://cdn.example.com/logo.png", session=session, timeout=5)

    assert logo.width == 50
    assert session.requested == [("https://cdn.example.com/logo.png", 5)]


def test_url_http_error():
    session = FakeSession(FakeResponse(b"", status_code=404))
    with pytest.raises(LogoFetchError, match="404"):
        load_logo("https://cdn.example.com/logo.png", session=session)


def test_url_connection_error():
    session = FakeSession(error=requests.ConnectionError("unreachable"))
    with pytest.raises(LogoFetchError, match="unreachable"):
        load_logo("https://cdn.example.com/logo.png", session=session)
