from pathlib import Path

import pytest


@pytest.fixture
def tmppath(tmpdir):
    return Path(str(tmpdir))


def _read(path) -> bytes:
    with open(str(path), 'rb') as stream:
        return stream.read()


def test_overview():
    from srec import Data16Record, HeaderRecord, Start16Record
    from srec import read_records, write_records

    records = [
        HeaderRecord(b'HDR'),
        Data16Record(0x1234, b'\x00\x01\x02\x03'),
        Start16Record(0x1234),
    ]
    text = write_records(records)
    assert text == (
        'S00600004844521B\n'
        'S107123400010203AC\n'
        'S9031234B6\n'
    )
    assert list(read_records(text)) == records


def test_decode_error_within_results():
    from srec import ChecksumMismatchError, Data16Record, read_records

    text = (
        'S107123400010203AD\n'
        'S107123400010203AC\n'
    )
    results = list(read_records(text))
    assert isinstance(results[0], ChecksumMismatchError)
    assert results[0].lineno == 1
    assert results[1] == Data16Record(0x1234, b'\x00\x01\x02\x03')


def test_save_memory(tmppath):
    from bytesparse import Memory
    from srec import build_records, read_file, write_file

    memory = Memory.from_bytes(bytes(range(40)), offset=0x8000)
    records = build_records(memory, header=b'app', startaddr=0x8000)
    out_path = tmppath / 'app.srec'
    write_file(str(out_path), records, end='\r\n')

    ans_out = _read(out_path)
    assert ans_out.startswith(b'S0060000617070B8\r\n')
    assert ans_out.endswith(b'S5030002FA\r\nS90380007C\r\n')
    assert ans_out.count(b'\r\n') == 5

    loaded = list(read_file(str(out_path)))
    assert loaded == records

    memory2 = Memory()
    for record in loaded:
        if record.TAG.is_data():
            memory2.write(int(record.address), record.data)
    assert memory2 == memory
