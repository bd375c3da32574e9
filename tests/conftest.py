"""
Shared fixtures for sumtree tests.
Creates isolated temporary directories with controlled test files.
"""
import pytest
import tempfile
from pathlib import Path
from typing import Dict
import sys

# Add src/ to sys.path so 'sumtree' is importable without installing
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))


@pytest.fixture
def temp_dir():
    """Creates isolated temporary directory, auto-cleanup after test."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def simple_tree(temp_dir) -> Path:
    """
    The two-file tree used throughout the docs:
    - a.txt   ("hello")
    - b/c.txt ("world")
    """
    (temp_dir / "a.txt").write_bytes(b"hello")
    (temp_dir / "b").mkdir()
    (temp_dir / "b" / "c.txt").write_bytes(b"world")
    return temp_dir


@pytest.fixture
def test_files(temp_dir) -> Dict[str, Path]:
    """
    Creates a nested tree whose depth-first, name-sorted order interleaves files and directories:
    - a.txt
    - b/c.txt
    - b/d/e.bin      (multi-chunk content)
    - b/f.txt
    - g.txt
    - empty.txt      (zero bytes, still hashed)
    """
    files = {}

    files["a"] = temp_dir / "a.txt"
    files["a"].write_bytes(b"alpha")

    (temp_dir / "b" / "d").mkdir(parents=True)
    files["c"] = temp_dir / "b" / "c.txt"
    files["c"].write_bytes(b"charlie")
    files["e"] = temp_dir / "b" / "d" / "e.bin"
    files["e"].write_bytes(bytes(range(256)) * 40)  # 10KB, spans many 1KB chunks
    files["f"] = temp_dir / "b" / "f.txt"
    files["f"].write_bytes(b"foxtrot")

    files["g"] = temp_dir / "g.txt"
    files["g"].write_bytes(b"golf")
    files["empty"] = temp_dir / "empty.txt"
    files["empty"].write_bytes(b"")

    return files


@pytest.fixture
def walk_order(test_files):
    """Expected depth-first, per-directory lexicographic order of `test_files`."""
    return [
        str(test_files["a"]),
        str(test_files["c"]),
        str(test_files["e"]),
        str(test_files["f"]),
        str(test_files["empty"]),
        str(test_files["g"]),
    ]


@pytest.fixture(autouse=True)
def plain_console(monkeypatch):
    """Keep rich from treating captured streams as terminals."""
    monkeypatch.delenv("FORCE_COLOR", raising=False)
    monkeypatch.delenv("TTY_COMPATIBLE", raising=False)
    monkeypatch.delenv("TTY_INTERACTIVE", raising=False)
