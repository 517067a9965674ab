"""Persistence: Blocklayout, Laden abgeschnittener/übergroßer Dateien, sicheres Überschreiben.

Invarianten:
    - Ein Block ist genau 212 Bytes lang, ohne Header
    - Nur ganze Blöcke werden gelesen, höchstens max_records
    - Ein fehlgeschlagenes Speichern lässt die alte Datei unverändert
"""

import os
import stat
import struct

import pytest

from student_records.errors import DataValidationError
from student_records.persistence import (
    RECORD_FORMAT,
    BinaryFileStorage,
    BinaryStudentRecordRepository,
    StudentRecordCodec,
)

from conftest import make_record


@pytest.fixture
def codec():
    return StudentRecordCodec()


def test_block_size_matches_legacy_layout(codec):
    assert codec.record_size == 212
    assert len(codec.encode(make_record())) == 212


def test_field_offsets(codec, asha):
    block = codec.encode(asha)
    assert block[0:14] == b"AP00000000001\x00"
    assert block[14:18] == b"Asha" and block[18:64] == b"\x00" * 46
    assert struct.unpack_from("<i", block, 64) == (20,)
    assert block[68:70] == b"CS"
    assert block[98:105] == b"Math,OS"
    assert block[198:200] == b"\x00\x00"
    assert struct.unpack_from("<ffi", block, 200) == (8.5, 92.0, 2)


def test_decode_restores_record(codec, asha):
    assert codec.decode(codec.encode(asha)) == asha


def test_single_precision_values_survive_encoding_exactly(codec):
    record = make_record(gpa=8.3, attendance_percent=77.7)
    assert codec.decode(codec.encode(record)) == record


def test_multibyte_text_is_cut_on_character_boundary(codec):
    record = make_record(name="é" * 49)
    decoded = codec.decode(codec.encode(record))
    assert decoded.name == "é" * 24
    assert decoded == record


def test_decode_rejects_out_of_range_block(codec):
    block = struct.pack(RECORD_FORMAT, b"AP00000000001", b"X", 200, b"CS", b"", 1.0, 1.0, 1)
    with pytest.raises(DataValidationError):
        codec.decode(block)


def test_decode_rejects_wrong_block_size(codec):
    with pytest.raises(DataValidationError):
        codec.decode(b"\x00" * 10)


def test_load_missing_file_raises_file_not_found(repo):
    with pytest.raises(FileNotFoundError):
        repo.load(100)


def test_load_ignores_partial_trailing_block(repo, data_file, codec):
    records = [make_record(1), make_record(2)]
    data_file.write_bytes(codec.encode_many(records) + b"\x01" * 100)

    loaded = repo.load(100)

    assert loaded.records == records
    assert loaded.trailing_bytes == 100


def test_load_stops_at_max_records(repo, data_file, codec):
    data_file.write_bytes(codec.encode_many([make_record(n) for n in range(1, 6)]))

    loaded = repo.load(3)

    assert [r.admission_no for r in loaded.records] == [make_record(n).admission_no for n in (1, 2, 3)]
    assert loaded.more_available


def test_load_skips_invalid_blocks(repo, data_file, codec):
    bad = struct.pack(RECORD_FORMAT, b"garbage", b"X", 20, b"CS", b"", 1.0, 1.0, 1)
    data_file.write_bytes(codec.encode(make_record(1)) + bad + codec.encode(make_record(2)))

    loaded = repo.load(100)

    assert [r.admission_no for r in loaded.records] == ["AP00000000001", "AP00000000002"]
    assert loaded.skipped == 1


def test_save_writes_blocks_back_to_back(repo, data_file, codec):
    records = [make_record(1), make_record(2), make_record(3)]
    repo.save(records)
    assert data_file.read_bytes() == codec.encode_many(records)


def test_save_of_empty_collection_truncates_file(repo, data_file):
    data_file.write_bytes(b"x" * 500)
    repo.save([])
    assert data_file.read_bytes() == b""


def test_failed_replace_keeps_old_file(repo, data_file, tmp_path, monkeypatch):
    data_file.write_bytes(b"old content")

    def boom(src, dst):
        raise PermissionError("read-only")

    monkeypatch.setattr("student_records.persistence.os.replace", boom)

    with pytest.raises(PermissionError):
        repo.save([make_record(1)])

    assert data_file.read_bytes() == b"old content"
    assert sorted(p.name for p in tmp_path.iterdir()) == ["student_records.dat"]


def test_save_into_missing_directory_raises(tmp_path):
    repo = BinaryStudentRecordRepository(str(tmp_path / "missing" / "records.dat"))
    with pytest.raises(OSError):
        repo.save([make_record(1)])


def test_delete_reports_whether_file_existed(repo, data_file):
    assert repo.delete() is False
    data_file.write_bytes(b"")
    assert repo.delete() is True
    assert not data_file.exists()


def test_storage_read_respects_limit(data_file):
    data_file.write_bytes(b"abcdef")
    assert BinaryFileStorage().read_bytes(str(data_file), 4) == b"abcd"


def test_save_keeps_permissions_of_existing_file(repo, data_file):
    data_file.write_bytes(b"")
    os.chmod(data_file, 0o644)

    repo.save([make_record(1)])

    assert stat.S_IMODE(os.stat(data_file).st_mode) == 0o644


def test_new_file_gets_umask_default_permissions(repo, data_file):
    umask = os.umask(0o022)
    try:
        repo.save([make_record(1)])
    finally:
        os.umask(umask)

    assert stat.S_IMODE(os.stat(data_file).st_mode) == 0o644
