"""Unit tests for the output writer."""

import pytest

from texen.rendering.io import ensure_directory, output_writer


@pytest.mark.unit
def test_ensure_directory_creates_parents(tmp_path):
    target = tmp_path / "a" / "b" / "c"
    ensure_directory(target)
    ensure_directory(target)
    assert target.is_dir()


@pytest.mark.unit
def test_output_writer_writes_on_success(tmp_path):
    path = tmp_path / "out.txt"
    with output_writer(path) as writer:
        writer.write("line one\nline two\n")

    assert path.read_bytes() == b"line one\nline two\n"
    assert list(tmp_path.iterdir()) == [path]


@pytest.mark.unit
def test_output_writer_encoding(tmp_path):
    path = tmp_path / "out.txt"
    with output_writer(path, encoding="latin-1") as writer:
        writer.write("café")
    assert path.read_bytes() == "café".encode("latin-1")


@pytest.mark.unit
def test_output_writer_leaves_nothing_on_failure(tmp_path):
    """Test that a failing block neither creates output nor leaks a temp file."""
    path = tmp_path / "out.txt"
    with pytest.raises(RuntimeError):
        with output_writer(path) as writer:
            writer.write("partial")
            raise RuntimeError("boom")

    assert list(tmp_path.iterdir()) == []


@pytest.mark.unit
def test_output_writer_keeps_previous_output_on_failure(tmp_path):
    path = tmp_path / "out.txt"
    path.write_text("previous")

    with pytest.raises(RuntimeError):
        with output_writer(path) as writer:
            writer.write("new")
            raise RuntimeError("boom")

    assert path.read_text() == "previous"
