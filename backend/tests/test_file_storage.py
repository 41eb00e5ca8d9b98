"""
FileStorage tests (disk I/O only, under pytest's tmp_path).
"""

import os

import pytest

from casting_chat.infrastructure.storage.file_storage import FileStorage


class TestFileStorage:
    @pytest.fixture
    def storage(self, tmp_path):
        return FileStorage(upload_base=str(tmp_path))

    def test_save_then_delete(self, storage, tmp_path):
        directory = storage.entity_dir("chat", "message", "abc-123")

        path = storage.save_file(b"hello", directory, "notes.txt")

        assert path.startswith(str(tmp_path))
        assert path.endswith("_notes.txt")
        with open(path, "rb") as f:
            assert f.read() == b"hello"
        assert storage.delete_file(path) is True
        assert not os.path.exists(path)

    def test_delete_missing_file(self, storage, tmp_path):
        assert storage.delete_file(str(tmp_path / "missing.bin")) is False

    def test_unsafe_names_are_sanitized(self, storage, tmp_path):
        directory = storage.entity_dir("chat", "message", "..")

        path = storage.save_file(b"x", directory, "../../etc/passwd")

        assert os.path.dirname(os.path.dirname(os.path.dirname(directory))) == str(tmp_path)
        assert os.path.realpath(path).startswith(os.path.realpath(str(tmp_path)))
        assert "/" not in os.path.basename(path)

    def test_relative_path_names_the_stored_file(self, storage):
        directory = storage.entity_dir("chat", "message", "abc-123")

        path = storage.save_file(b"x", directory, "head shot?.png")

        relative = storage.relative_path(path)
        assert relative == f"chat/message/abc-123/{os.path.basename(path)}"
        assert relative.endswith("_head shot_.png")
