# File: tests/test_storage.py
import pytest

from docs_to_pdf.errors import FatalStartupFailure
from docs_to_pdf.storage import ArtifactStore
from docs_to_pdf.utils import (
    MAX_FILENAME_LENGTH,
    default_output_name,
    derive_title,
    extract_domain,
    truncate_url,
    url_to_filename,
)


@pytest.mark.parametrize(
    "url,expected",
    [
        ("https://docs.example.com/guide/intro", "docs_example_com_guide_intro.pdf"),
        ("http://docs.example.com/", "docs_example_com.pdf"),
        ("https://docs.example.com/a--b/c?x=1&y=2", "docs_example_com_a--b_c_x_1_y_2.pdf"),
        ("https://docs.example.com/__init__", "docs_example_com_init.pdf"),
    ],
)
def test_url_to_filename(url, expected):
    assert url_to_filename(url) == expected


def test_url_to_filename_truncates():
    name = url_to_filename("https://docs.example.com/" + "x" * 300)
    assert len(name) == MAX_FILENAME_LENGTH + len(".pdf")


@pytest.mark.parametrize(
    "first,second",
    [
        ("https://docs.example.com/a.b", "https://docs.example.com/a/b"),
        ("http://docs.example.com/a", "https://docs.example.com/a"),
        ("https://docs.example.com/guide", "https://docs.example.com/guide/"),
    ],
)
def test_short_urls_can_share_a_name(tmp_path, first, second):
    assert url_to_filename(first) == url_to_filename(second)
    store = ArtifactStore(tmp_path / "pages")
    a = store.save(first, 1, b"%PDF-a")
    b = store.save(second, 1, b"%PDF-b")
    assert a.path != b.path
    assert b.path.name.endswith("_2.pdf")
    assert a.content == b"%PDF-a"


def test_store_disambiguates_collisions(tmp_path):
    store = ArtifactStore(tmp_path / "pages")
    prefix = "https://docs.example.com/" + "section/" * 20
    first = store.save(prefix + "one", 3, b"%PDF-1")
    second = store.save(prefix + "two", 3, b"%PDF-2")
    third = store.save(prefix + "three", 3, b"%PDF-3")

    assert first.path != second.path != third.path
    assert second.path.name == first.path.name[: -len(".pdf")] + "_2.pdf"
    assert third.path.name == first.path.name[: -len(".pdf")] + "_3.pdf"
    assert first.content == b"%PDF-1"
    assert second.content == b"%PDF-2"


def test_store_save_returns_artifact(tmp_path):
    store = ArtifactStore(tmp_path / "pages")
    artifact = store.save("https://docs.example.com/guide", 1, b"data")
    assert artifact.url == "https://docs.example.com/guide"
    assert artifact.depth == 1
    assert artifact.order_key == (1, "https://docs.example.com/guide")
    assert artifact.path.read_bytes() == b"data"


def test_cleanup_removes_files_and_directory(tmp_path):
    root = tmp_path / "pages"
    store = ArtifactStore(root)
    artifacts = [store.save(f"https://docs.example.com/p{i}", 1, b"x") for i in range(3)]
    store.manifest_path.write_text("{}", encoding="utf-8")
    store.cleanup(artifacts, extra=[store.manifest_path])
    assert not root.exists()


def test_cleanup_keeps_foreign_files(tmp_path):
    root = tmp_path / "pages"
    store = ArtifactStore(root)
    artifact = store.save("https://docs.example.com/", 0, b"x")
    (root / "notes.txt").write_text("keep me", encoding="utf-8")
    store.cleanup([artifact])
    assert not artifact.path.exists()
    assert (root / "notes.txt").exists()


def test_default_store_uses_temp_directory():
    store = ArtifactStore()
    try:
        assert store.root.is_dir()
        assert store.root.name.startswith("docs-to-pdf-")
    finally:
        store.cleanup([])


def test_store_root_that_is_a_file_is_fatal(tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("x", encoding="utf-8")
    with pytest.raises(FatalStartupFailure):
        ArtifactStore(blocker)


@pytest.mark.parametrize(
    "url,expected",
    [
        ("https://docs.python.org/3/", "docs"),
        ("https://www.example.com/docs", "example"),
        ("not a url", "documentation"),
        ("http://[::1", "documentation"),
    ],
)
def test_extract_domain(url, expected):
    assert extract_domain(url) == expected


def test_default_output_and_title():
    assert default_output_name("https://www.fastapi.tiangolo.com/") == "fastapi-documentation.pdf"
    assert derive_title("fastapi-documentation.pdf") == "fastapi documentation"
    assert derive_title("/tmp/out/my-docs.PDF") == "my docs"


def test_truncate_url():
    short = "https://docs.example.com/a"
    assert truncate_url(short) == short
    long = "https://docs.example.com/" + "a" * 100
    assert truncate_url(long) == long[:80] + "..."
