import os
from pathlib import Path

import pytest

from srec.errors import ChecksumMismatchError
from srec.errors import DecodeError
from srec.errors import InvalidHexError
from srec.errors import LengthMismatchError
from srec.errors import MalformedLineError
from srec.errors import UnknownRecordTypeError
from srec.reader import decode_line
from srec.reader import decode_lines
from srec.reader import load_records
from srec.reader import read_file
from srec.reader import read_records
from srec.records import Address16
from srec.records import Address32
from srec.records import Count16Record
from srec.records import Count24Record
from srec.records import Data16Record
from srec.records import Data24Record
from srec.records import Data32Record
from srec.records import HeaderRecord
from srec.records import Start16Record
from srec.records import Start24Record
from srec.records import Start32Record

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


def test_decode_line():
    vector = [
        ('S0030000FC', HeaderRecord(b'')),
        ('S00600004844521B', HeaderRecord(b'HDR')),
        ('S009000048445200000018', HeaderRecord(b'HDR\0\0\0')),
        ('S0060123484452F7', HeaderRecord(b'HDR', address=0x0123)),

        ('S1031234B6', Data16Record(0x1234, b'')),
        ('S107123400010203AC', Data16Record(0x1234, b'\x00\x01\x02\x03')),
        ('S10612346162638D', Data16Record(0x1234, b'abc')),
        ('S1101234000102030405060708090A0B0C5B', Data16Record(0x1234, bytes(range(13)))),

        ('S2041234565F', Data24Record(0x123456, b'')),
        ('S2081234560001020355', Data24Record(0x123456, b'\x00\x01\x02\x03')),

        ('S30512345678E6', Data32Record(0x12345678, b'')),
        ('S3091234567800010203DC', Data32Record(0x12345678, b'\x00\x01\x02\x03')),
        ('S308000012346162638B', Data32Record(0x1234, b'abc')),

        ('S5031234B6', Count16Record(0x1234)),
        ('S6041234565F', Count24Record(0x123456)),
        ('S604001234B5', Count24Record(0x1234)),

        ('S70512345678E6', Start32Record(0x12345678)),
        ('S70587654321AA', Start32Record(0x87654321)),
        ('S8041234565F', Start24Record(0x123456)),
        ('S9031234B6', Start16Record(0x1234)),
    ]
    for line, expected in vector:
        assert decode_line(line) == expected


def test_decode_line_boundaries():
    vector = [
        ('S0FF0000' + ('00' * 0xFC) + '00', HeaderRecord(bytes(0xFC))),
        ('S1FF0000' + ('FF' * 0xFC) + 'FC', Data16Record(0x0000, b'\xFF' * 0xFC)),
        ('S103FFFFFE', Data16Record(0xFFFF, b'')),
        ('S1FFFFFF' + ('00' * 0xFC) + '02', Data16Record(0xFFFF, bytes(0xFC))),
        ('S2FF000000' + ('FF' * 0xFB) + 'FB', Data24Record(0x000000, b'\xFF' * 0xFB)),
        ('S204FFFFFFFE', Data24Record(0xFFFFFF, b'')),
        ('S3FF00000000' + ('00' * 0xFA) + '00', Data32Record(0x00000000, bytes(0xFA))),
        ('S305FFFFFFFFFE', Data32Record(0xFFFFFFFF, b'')),
        ('S503FFFFFE', Count16Record(0xFFFF)),
        ('S604FFFFFFFE', Count24Record(0xFFFFFF)),
        ('S705FFFFFFFFFE', Start32Record(0xFFFFFFFF)),
        ('S804FFFFFFFE', Start24Record(0xFFFFFF)),
        ('S903FFFFFE', Start16Record(0xFFFF)),
    ]
    for line, expected in vector:
        assert decode_line(line) == expected


# https://en.wikipedia.org/wiki/SREC_(file_format)#Checksum_calculation
def test_decode_line_wikipedia():
    line = 'S1137AF00A0A0D0000000000000000000000000061'
    record = decode_line(line)
    assert record == Data16Record(0x7AF0, b'\x0A\x0A\x0D' + bytes(13))


def test_decode_line_address_width():
    record = decode_line('S103FFFFFE')
    assert isinstance(record.address, Address16)
    assert int(record.address) == 0xFFFF

    record = decode_line('S305FFFFFFFFFE')
    assert isinstance(record.address, Address32)
    assert int(record.address) == 0xFFFFFFFF


def test_decode_line_terminators():
    for end in ('', '\n', '\r', '\r\n', '\r\r\n'):
        assert decode_line('S9031234B6' + end) == Start16Record(0x1234)


def test_decode_line_lowercase():
    assert decode_line('S107123400010203ac') == Data16Record(0x1234, b'\x00\x01\x02\x03')
    assert decode_line('S10612346162638d') == Data16Record(0x1234, b'abc')
    assert decode_line('S705abcdef0192') == Start32Record(0xABCDEF01)


def test_decode_line_raises_malformed():
    vector = [
        ('', 'empty line'),
        ('\r\n', 'empty line'),
        ('D', 'missing record marker'),
        ('s9031234b6', 'missing record marker'),
        (' S9031234B6', 'missing record marker'),
        (':00000001FF', 'missing record marker'),
    ]
    for line, message in vector:
        with pytest.raises(MalformedLineError, match=message):
            decode_line(line)


def test_decode_line_raises_unknown_type():
    for line in ('S401FE', 'Sx', 'SA031234B6', 'S 031234B6', 'S4'):
        with pytest.raises(UnknownRecordTypeError, match='unknown record type'):
            decode_line(line)


def test_decode_line_raises_invalid_hex():
    vector = [
        'S1G31234B6',
        'S1 31234B6',
        'S104123400xx',
        'S1031234BG',
        'S103..34B6',
        'S1031234+6',
    ]
    for line in vector:
        with pytest.raises(InvalidHexError):
            decode_line(line)


def test_decode_line_raises_length():
    vector = [
        'S100',
        'S101FE',
        'S10212EB',
        'S1100000FFEF',
        'S107123400010203',
        'S107123400010203AC00',
        'S9031234B6 ',
        'S2031234B6',
        'S3041234565F',
        'S50212EB',
        'S6031234B6',
        'S7041234565F',
        'S8031234B6',
        'S90212EB',
        'S9041234565F',
        'S5041234565F',
    ]
    for line in vector:
        with pytest.raises(LengthMismatchError):
            decode_line(line)

    vector = [
        ('S', 'missing record type'),
        ('S1', 'missing byte count'),
        ('S10', 'missing byte count'),
    ]
    for line, message in vector:
        with pytest.raises(LengthMismatchError, match=message):
            decode_line(line)


def test_decode_line_raises_checksum():
    with pytest.raises(ChecksumMismatchError, match='checksum mismatch') as info:
        decode_line('S1101234000102030405060708090A0B0CFF')
    assert info.value.expected == 0x5B
    assert info.value.actual == 0xFF

    line = 'S107123400010203AC'
    for index in (len(line) - 2, len(line) - 1):
        digit = line[index]
        for other in '0123456789ABCDEF':
            if other != digit:
                altered = line[:index] + other + line[index + 1:]
                with pytest.raises(ChecksumMismatchError):
                    decode_line(altered)


def test_decode_line_raises_lineno():
    with pytest.raises(DecodeError) as info:
        decode_line('S9031234B5', lineno=7)
    assert info.value.lineno == 7
    assert info.value.line == 'S9031234B5'
    assert str(info.value) == 'line 7: checksum mismatch'


def test_decode_line_raises_value_error():
    with pytest.raises(ValueError):
        decode_line('X')


def test_decode_lines():
    results = list(decode_lines(['S9031234B6', 'X', 'S5031234B6']))
    assert len(results) == 3
    assert results[0] == Start16Record(0x1234)
    assert isinstance(results[1], MalformedLineError)
    assert results[1].lineno == 2
    assert results[2] == Count16Record(0x1234)


def test_decode_lines_start():
    results = list(decode_lines(['X', 'Y'], start=10))
    assert [result.lineno for result in results] == [10, 11]


def test_decode_lines_lazy():
    consumed = []

    def lines():
        for line in ('S9031234B6', 'X', 'S5031234B6'):
            consumed.append(line)
            yield line

    results = decode_lines(lines())
    assert consumed == []
    assert next(results) == Start16Record(0x1234)
    assert consumed == ['S9031234B6']
    assert isinstance(next(results), DecodeError)
    assert consumed == ['S9031234B6', 'X']


def test_read_records_lf():
    assert list(read_records(TEXT)) == RECORDS


def test_read_records_crlf():
    assert list(read_records(TEXT.replace('\n', '\r\n'))) == RECORDS


def test_read_records_cr():
    assert list(read_records(TEXT.replace('\n', '\r'))) == RECORDS


def test_read_records_no_final_terminator():
    assert list(read_records(TEXT.rstrip('\n'))) == RECORDS


def test_read_records_empty():
    assert list(read_records('')) == []


def test_read_records_with_err():
    text = 'S00600004844521B\nS107123400010203AC\nS10712380405060798\nS9031234B4\n'
    results = list(read_records(text))
    assert results[:3] == RECORDS[:3]
    assert isinstance(results[3], ChecksumMismatchError)
    assert results[3].lineno == 4


def test_read_records_continues_after_err():
    text = 'S00600004844521B\nS4\nS107123400010203AC\r\nS1031234\nS9031234B6\n'
    results = list(read_records(text))
    assert len(results) == 5
    assert results[0] == HeaderRecord(b'HDR')
    assert isinstance(results[1], UnknownRecordTypeError)
    assert results[2] == Data16Record(0x1234, b'\x00\x01\x02\x03')
    assert isinstance(results[3], LengthMismatchError)
    assert results[4] == Start16Record(0x1234)


def test_read_records_blank():
    text = 'S5031234B6\n\n  \nS9031234B6\n'

    results = list(read_records(text))
    assert len(results) == 4
    assert isinstance(results[1], MalformedLineError)
    assert isinstance(results[2], MalformedLineError)
    assert results[1].lineno == 2
    assert results[2].lineno == 3

    results = list(read_records(text, skip_blank=True))
    assert results == [Count16Record(0x1234), Start16Record(0x1234)]


def test_read_records_skip_blank_lineno():
    results = list(read_records('\n\nX\n', skip_blank=True))
    assert len(results) == 1
    assert results[0].lineno == 3


def test_read_records_not_restartable():
    results = read_records(TEXT)
    assert len(list(results)) == 4
    assert list(results) == []


def test_load_records():
    assert load_records(TEXT) == RECORDS
    assert load_records('') == []
    assert load_records('\n' + TEXT, skip_blank=True) == RECORDS


def test_load_records_raises():
    with pytest.raises(ChecksumMismatchError) as info:
        load_records('S9031234B6\nS9031234B5\nX\n')
    assert info.value.lineno == 2


def test_read_file(tmppath):
    path = tmppath / 'test.srec'
    with open(str(path), 'wb') as stream:
        stream.write(TEXT.replace('\n', '\r\n').encode('ascii'))
    assert list(read_file(path)) == RECORDS
    assert list(read_file(str(path))) == RECORDS


def test_read_file_blank(tmppath):
    path = os.path.join(str(tmppath), 'test.srec')
    with open(path, 'wt', newline='') as stream:
        stream.write(TEXT + '\n\n')
    results = list(read_file(path))
    assert results[:4] == RECORDS
    assert len(results) == 6
    assert list(read_file(path, skip_blank=True)) == RECORDS
