import pytest

from services.exceptions import UrlResolutionError
from services.url_service import (
    ReleaseRef,
    combine_url_and_file,
    looks_like_release_url,
    parse_release_url,
)


@pytest.mark.parametrize(
    "url, file",
    [
        ("http://x/", "/f.zip"),
        ("http://x", "f.zip"),
        ("http://x///", "//f.zip"),
        ("http://x", "/f.zip"),
    ],
)
def test_combine_uses_exactly_one_separator(url, file):
    assert combine_url_and_file(url, file) == "http://x/f.zip"


def test_combine_keeps_inner_path():
    assert combine_url_and_file("https://h/a/b/", "c/d.zip") == "https://h/a/b/c/d.zip"


@pytest.mark.parametrize("url, file", [("http://x", None), (None, "f.zip"), ("http://x", 3)])
def test_combine_rejects_non_strings(url, file):
    with pytest.raises(UrlResolutionError):
        combine_url_and_file(url, file)


def test_parse_release_url():
    ref = parse_release_url("https://github.com/owner/repo/releases/download/v1.2.3/")

    assert ref == ReleaseRef(owner="owner", repo="repo", tag="v1.2.3")
    assert ref.slug == "owner/repo"


def test_parse_release_url_needs_five_segments():
    assert parse_release_url("https://github.com/owner/repo/releases/") is None


def test_looks_like_release_url():
    assert looks_like_release_url("https://github.com/o/r/releases/download/t/")
    assert not looks_like_release_url("https://github.com/o/r/archive/t.zip")
    assert not looks_like_release_url("https://gitlab.com/o/r/releases/t")
