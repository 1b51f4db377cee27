"""Tests for the JSON Lines comment store."""

import json
import threading

import pytest

from commentwidget.core.modules.comment.models import Comment
from commentwidget.core.modules.comment.store import CommentStore
from commentwidget.errors import (
    CorruptRecordError,
    ReadFailedError,
    SerializeFailedError,
    StorageInitError,
    WriteFailedError,
)


def make_comment(index: int, body: str = "Hello world") -> Comment:
    return Comment(
        id=f"00000000-0000-7000-8000-{index:012x}",
        name=f"user{index}",
        body=body,
        created="2024-05-01 13:45",
    )


class TestEnsureInitialized:
    """Tests for log file creation."""

    def test_creates_empty_file_and_parents(self, comments_path):
        """Test that a missing file and its directory are created."""
        store = CommentStore(comments_path)
        store.ensure_initialized()
        assert comments_path.is_file()
        assert comments_path.read_bytes() == b""

    def test_idempotent_keeps_content(self, store, comments_path):
        """Test that initializing again does not truncate existing records."""
        store.append(make_comment(1))
        store.ensure_initialized()
        assert len(store.load_all()) == 1
        assert comments_path.read_text(encoding="utf-8").count("\n") == 1

    def test_directory_path_fails(self, tmp_path):
        """Test that a directory in place of the log file is rejected."""
        with pytest.raises(StorageInitError):
            CommentStore(tmp_path).ensure_initialized()

    def test_uncreatable_parent_fails(self, tmp_path):
        """Test that a regular file in place of the parent directory is rejected."""
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        with pytest.raises(StorageInitError):
            CommentStore(blocker / "comments.jsonl").ensure_initialized()


class TestAppend:
    """Tests for appending records."""

    def test_one_line_per_record(self, store, comments_path):
        """Test that each append adds exactly one self-contained JSON line."""
        store.append(make_comment(1))
        store.append(make_comment(2))

        lines = comments_path.read_text(encoding="utf-8").splitlines()
        assert len(lines) == 2
        record = json.loads(lines[0])
        assert record == {
            "id": "00000000-0000-7000-8000-000000000001",
            "name": "user1",
            "body": "Hello world",
            "created": "2024-05-01 13:45",
        }

    def test_body_newlines_are_escaped(self, store, comments_path):
        """Test that multi-line bodies stay on one line in the log."""
        store.append(make_comment(1, body="first\nsecond\r\nthird"))

        content = comments_path.read_text(encoding="utf-8")
        assert content.count("\n") == 1
        assert content.endswith("\n")
        assert store.load_all()[0].body == "first\nsecond\r\nthird"

    def test_non_ascii_is_stored_as_utf8(self, store, comments_path):
        """Test that non-ASCII text round-trips through the UTF-8 file."""
        comment = Comment(id=make_comment(1).id, name="Zoë", body="日本語のコメント", created="2024-05-01 13:45")
        store.append(comment)

        assert "日本語" in comments_path.read_text(encoding="utf-8")
        assert store.load_all() == [comment]

    def test_write_failure(self, tmp_path):
        """Test that an unwritable location raises WriteFailedError."""
        store = CommentStore(tmp_path / "missing-dir" / "comments.jsonl")
        with pytest.raises(WriteFailedError):
            store.append(make_comment(1))

    def test_serialize_failure(self, store, comments_path):
        """Test that an unencodable comment raises SerializeFailedError and writes nothing."""

        class Unserializable:
            id = "broken"

            def model_dump_json(self) -> str:
                raise ValueError("cannot encode")

        with pytest.raises(SerializeFailedError):
            store.append(Unserializable())  # type: ignore[arg-type]
        assert comments_path.read_bytes() == b""

    def test_lock_released_after_failure(self, tmp_path):
        """Test that a failed append does not leave the store locked."""
        store = CommentStore(tmp_path / "missing-dir" / "comments.jsonl")
        with pytest.raises(WriteFailedError):
            store.append(make_comment(1))
        assert not store.lock.write_locked

    def test_append_new_builds_under_write_lock(self, store):
        """Test that the builder runs while exclusive access is held and its result is stored."""
        seen = []

        def build() -> Comment:
            seen.append(store.lock.write_locked)
            return make_comment(7)

        comment = store.append_new(build)

        assert seen == [True]
        assert comment == make_comment(7)
        assert store.load_all() == [comment]
        assert not store.lock.write_locked

    def test_append_new_failed_build_writes_nothing(self, store, comments_path):
        def build() -> Comment:
            raise WriteFailedError("no identifier")

        with pytest.raises(WriteFailedError):
            store.append_new(build)
        assert comments_path.read_bytes() == b""
        assert not store.lock.write_locked


class TestLoadAll:
    """Tests for reading records back."""

    def test_empty_file_gives_empty_list(self, store):
        assert store.load_all() == []

    def test_preserves_append_order(self, store):
        """Test that records come back in exactly the order they were appended."""
        comments = [make_comment(i) for i in range(20)]
        for comment in comments:
            store.append(comment)
        assert store.load_all() == comments

    def test_repeated_reads_are_identical(self, store):
        """Test that two reads without a write in between return equal sequences."""
        for i in range(3):
            store.append(make_comment(i))
        assert store.load_all() == store.load_all()

    def test_reads_fresh_from_disk(self, store, comments_path):
        """Test that records written outside the store are visible on the next read."""
        store.append(make_comment(1))
        with comments_path.open("a", encoding="utf-8") as f:
            f.write(make_comment(2).model_dump_json() + "\n")
        assert [c.name for c in store.load_all()] == ["user1", "user2"]

    def test_invalid_json_line_fails_whole_read(self, store, comments_path):
        """Test that a corrupt line fails the read and reports its index."""
        store.append(make_comment(0))
        with comments_path.open("a", encoding="utf-8") as f:
            f.write('{"id": "x", "name": "trunc\n')
        store.append(make_comment(2))

        with pytest.raises(CorruptRecordError) as exc_info:
            store.load_all()
        assert exc_info.value.line_index == 1

    def test_missing_field_is_corrupt(self, store, comments_path):
        """Test that a JSON object without the required fields is corrupt."""
        comments_path.write_text('{"id": "x", "name": "a"}\n', encoding="utf-8")
        with pytest.raises(CorruptRecordError) as exc_info:
            store.load_all()
        assert exc_info.value.line_index == 0

    def test_blank_line_is_corrupt(self, store, comments_path):
        """Test that an empty line inside the log is not skipped."""
        comments_path.write_text(make_comment(0).model_dump_json() + "\n\n", encoding="utf-8")
        with pytest.raises(CorruptRecordError) as exc_info:
            store.load_all()
        assert exc_info.value.line_index == 1

    def test_invalid_utf8_is_corrupt(self, store, comments_path):
        comments_path.write_bytes(b'{"id": "\xff"}\n')
        with pytest.raises(CorruptRecordError):
            store.load_all()

    def test_missing_file(self, comments_path):
        """Test that reading a log that was never created raises ReadFailedError."""
        with pytest.raises(ReadFailedError):
            CommentStore(comments_path).load_all()


class TestIsolation:
    """Tests for independent store instances."""

    def test_stores_do_not_share_files_or_locks(self, tmp_path):
        first = CommentStore(tmp_path / "a.jsonl")
        second = CommentStore(tmp_path / "b.jsonl")
        first.ensure_initialized()
        second.ensure_initialized()

        first.append(make_comment(1))
        assert second.load_all() == []

        with first.lock.write():
            # A held write lock on one store must not block the other
            assert second.load_all() == []


class TestConcurrency:
    """Tests for concurrent readers and writers."""

    def test_readers_never_see_partial_records(self, store):
        """Test that concurrent reads only observe fully appended records."""
        writers = 4
        per_writer = 50
        big_body = "x" * 1000
        errors: list[Exception] = []
        stop = threading.Event()

        def writer(offset: int) -> None:
            try:
                for i in range(per_writer):
                    store.append(make_comment(offset * per_writer + i, body=big_body))
            except Exception as e:  # noqa: BLE001
                errors.append(e)

        def reader() -> None:
            last = 0
            try:
                while not stop.is_set():
                    count = len(store.load_all())
                    assert count >= last
                    last = count
            except Exception as e:  # noqa: BLE001
                errors.append(e)

        reader_threads = [threading.Thread(target=reader) for _ in range(4)]
        writer_threads = [threading.Thread(target=writer, args=(n,)) for n in range(writers)]
        for thread in reader_threads + writer_threads:
            thread.start()
        for thread in writer_threads:
            thread.join(30)
        stop.set()
        for thread in reader_threads:
            thread.join(30)

        assert errors == []
        comments = store.load_all()
        assert len(comments) == writers * per_writer
        assert len({c.id for c in comments}) == writers * per_writer
