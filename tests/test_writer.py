from pathlib import Path

import pytest

from srec.errors import EncodeError
from srec.records import Count16Record
from srec.records import Count24Record
from srec.records import Data16Record
from srec.records import Data24Record
from srec.records import Data32Record
from srec.records import HeaderRecord
from srec.records import Start16Record
from srec.records import Start24Record
from srec.records import Start32Record
from srec.writer import encode_record
from srec.writer import write_file
from srec.writer import write_records

TEXT = 'S00600004844521B\nS107123400010203AC\nS10712380405060798\nS9031234B6\n'

RECORDS = [
    HeaderRecord(b'HDR'),
    Data16Record(0x1234, b'\x00\x01\x02\x03'),
    Data16Record(0x1238, b'\x04\x05\x06\x07'),
    Start16Record(0x1234),
]


@pytest.fixture
def tmppath(tmpdir):
    return Path(str(tmpdir))


def test_encode_record():
    vector = [
        ('S0030000FC', HeaderRecord(b'')),
        ('S00600004844521B', HeaderRecord(b'HDR')),
        ('S00600004844521B', HeaderRecord('HDR')),
        ('S0070000484452001A', HeaderRecord(b'HDR\0')),
        ('S1031234B6', Data16Record(0x1234, b'')),
        ('S107123400010203AC', Data16Record(0x1234, b'\x00\x01\x02\x03')),
        ('S2041234565F', Data24Record(0x123456, b'')),
        ('S2081234560001020355', Data24Record(0x123456, b'\x00\x01\x02\x03')),
        ('S30512345678E6', Data32Record(0x12345678, b'')),
        ('S3091234567800010203DC', Data32Record(0x12345678, b'\x00\x01\x02\x03')),
        ('S308000012346162638B', Data32Record(0x1234, b'abc')),
        ('S5031234B6', Count16Record(0x1234)),
        ('S6041234565F', Count24Record(0x123456)),
        ('S604001234B5', Count24Record(0x1234)),
        ('S70512345678E6', Start32Record(0x12345678)),
        ('S70500001234B4', Start32Record(0x1234)),
        ('S8041234565F', Start24Record(0x123456)),
        ('S9031234B6', Start16Record(0x1234)),
        ('S9030000FC', Start16Record()),
    ]
    for expected, record in vector:
        assert encode_record(record) == expected


def test_encode_record_boundaries():
    vector = [
        ('S0FF0000' + ('00' * 0xFC) + '00', HeaderRecord(bytes(0xFC))),
        ('S1FFFFFF' + ('FF' * 0xFC) + 'FE', Data16Record(0xFFFF, b'\xFF' * 0xFC)),
        ('S2FFFFFFFF' + ('00' * 0xFB) + '03', Data24Record(0xFFFFFF, bytes(0xFB))),
        ('S3FFFFFFFFFF' + ('FF' * 0xFA) + 'FE', Data32Record(0xFFFFFFFF, b'\xFF' * 0xFA)),
        ('S503FFFFFE', Count16Record(0xFFFF)),
        ('S604FFFFFFFE', Count24Record(0xFFFFFF)),
        ('S705FFFFFFFFFE', Start32Record(0xFFFFFFFF)),
        ('S804FFFFFFFE', Start24Record(0xFFFFFF)),
        ('S903FFFFFE', Start16Record(0xFFFF)),
    ]
    for expected, record in vector:
        assert encode_record(record) == expected


def test_encode_record_uppercase():
    line = encode_record(Data32Record(0xABCDEF01, b'\xab\xcd\xef'))
    assert line == line.upper()
    assert line.startswith('S308ABCDEF01ABCDEF')


def test_encode_record_raises_data_size():
    vector = [
        HeaderRecord(bytes(0xFD), validate=False),
        Data16Record(0, bytes(0xFD), validate=False),
        Data24Record(0, bytes(0xFC), validate=False),
        Data32Record(0, bytes(0xFB), validate=False),
    ]
    for record in vector:
        with pytest.raises(EncodeError, match='data size overflow') as info:
            encode_record(record)
        assert info.value.record is record


def test_encode_record_raises_type():
    with pytest.raises(TypeError, match='record expected'):
        encode_record('S9030000FC')


def test_write_records():
    assert write_records(RECORDS) == TEXT


def test_write_records_end():
    assert write_records(RECORDS, end='\r\n') == TEXT.replace('\n', '\r\n')


def test_write_records_empty():
    assert write_records([]) == ''


def test_write_records_iterable():
    assert write_records(iter(RECORDS)) == TEXT
    assert write_records(record for record in RECORDS) == TEXT


def test_write_records_raises():
    records = [
        HeaderRecord(b'HDR'),
        Data16Record(0, bytes(0xFD), validate=False),
    ]
    with pytest.raises(EncodeError) as info:
        write_records(records)
    assert info.value.record is records[1]


def test_write_file(tmppath):
    path = tmppath / 'test.srec'
    write_file(path, RECORDS)
    with open(str(path), 'rb') as stream:
        assert stream.read() == TEXT.encode('ascii')


def test_write_file_crlf(tmppath):
    path = str(tmppath / 'test.srec')
    write_file(path, RECORDS, end='\r\n')
    with open(path, 'rb') as stream:
        assert stream.read() == TEXT.replace('\n', '\r\n').encode('ascii')


def test_write_file_raises(tmppath):
    path = tmppath / 'test.srec'
    records = [Data16Record(0, bytes(0xFD), validate=False)]
    with pytest.raises(EncodeError):
        write_file(path, records)
    assert not path.exists()
