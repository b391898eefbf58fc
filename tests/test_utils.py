import re

import pytest

from fileshare import utils


@pytest.mark.parametrize("filename,expected", [
    ("a.jpg", ("image", "image/jpeg")),
    ("a.JPEG", ("image", "image/jpeg")),
    ("a.png", ("image", "image/png")),
    ("a.gif", ("image", "image/gif")),
    ("a.webp", ("image", "image/webp")),
    ("a.svg", ("image", "image/svg")),
    ("a.txt", ("text", "text/plain")),
    ("a.md", ("text", "text/markdown")),
    ("a.csv", ("text", "text/csv")),
    ("a.json", ("text", "application/json")),
    ("a.exe", ("other", "application/octet-stream")),
    ("noext", ("other", "application/octet-stream")),
])
def test_classify(filename, expected):
    assert utils.classify(filename) == expected


def test_parse_file_size():
    assert utils.parse_file_size("10") == 10
    assert utils.parse_file_size("10mb") == 10 * 1024 * 1024
    assert utils.parse_file_size("500KB") == 500 * 1024
    with pytest.raises(ValueError):
        utils.parse_file_size("lots")


def test_parse_time():
    assert utils.parse_time("60") == 60
    assert utils.parse_time("30s") == 30
    assert utils.parse_time("5m") == 300
    assert utils.parse_time("1H") == 3600
    with pytest.raises(ValueError):
        utils.parse_time("5 weeks")


def test_safe_name_strips_directories():
    assert utils.safe_name("report.pdf") == "report.pdf"
    assert utils.safe_name("../../etc/passwd") == "passwd"
    assert utils.safe_name("C:\\Users\\me\\photo.png") == "photo.png"
    assert utils.safe_name("..") is None
    assert utils.safe_name("") is None
    assert utils.safe_name(None) is None


def test_timestamped_name():
    name = utils.timestamped_name("photo.png")
    assert re.fullmatch(r"\d{13,}-photo\.png", name)
