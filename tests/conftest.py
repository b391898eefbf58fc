import pytest
from fastapi.testclient import TestClient

from fileshare.main import create_app


@pytest.fixture
def upload_dir(tmp_path):
    return tmp_path / "uploads"


@pytest.fixture
def passwords_file(tmp_path):
    return tmp_path / "file_passwords.json"


@pytest.fixture
def app(upload_dir, passwords_file):
    return create_app(upload_dir=upload_dir, passwords_file=passwords_file, max_file_size=1024)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


def upload(client, filename, content=b"hello", password=None):
    """Upload one file and return the stored name it was given."""
    before = {f["name"] for f in client.get("/files").json()}
    data = {"password": password} if password is not None else {}
    r = client.post("/upload", files={"file": (filename, content)}, data=data, follow_redirects=False)
    assert r.status_code == 302
    assert r.headers["location"] == "/"
    after = {f["name"] for f in client.get("/files").json()}
    (name,) = after - before
    return name
