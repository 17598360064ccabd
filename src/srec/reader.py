# Copyright (c) 2013-2025, Andrea Zoppi
# All rights reserved.
#
# Redistribution and use in source and binary forms, with or without
# modification, are permitted provided that the following conditions are met:
#
# 1. Redistributions of source code must retain the above copyright notice,
#    this list of conditions and the following disclaimer.
#
# 2. Redistributions in binary form must reproduce the above copyright
#    notice, this list of conditions and the following disclaimer in the
#    documentation and/or other materials provided with the distribution.
#
# THIS SOFTWARE IS PROVIDED BY THE COPYRIGHT HOLDERS AND CONTRIBUTORS "AS IS"
# AND ANY EXPRESS OR IMPLIED WARRANTIES, INCLUDING, BUT NOT LIMITED TO, THE
# IMPLIED WARRANTIES OF MERCHANTABILITY AND FITNESS FOR A PARTICULAR PURPOSE
# ARE DISCLAIMED. IN NO EVENT SHALL THE COPYRIGHT HOLDER OR CONTRIBUTORS BE
# LIABLE FOR ANY DIRECT, INDIRECT, INCIDENTAL, SPECIAL, EXEMPLARY, OR
# CONSEQUENTIAL DAMAGES (INCLUDING, BUT NOT LIMITED TO, PROCUREMENT OF
# SUBSTITUTE GOODS OR SERVICES; LOSS OF USE, DATA, OR PROFITS; OR BUSINESS
# INTERRUPTION) HOWEVER CAUSED AND ON ANY THEORY OF LIABILITY, WHETHER IN
# CONTRACT, STRICT LIABILITY, OR TORT (INCLUDING NEGLIGENCE OR OTHERWISE)
# ARISING IN ANY WAY OUT OF THE USE OF THIS SOFTWARE, EVEN IF ADVISED OF THE
# POSSIBILITY OF SUCH DAMAGE.

r"""Decoding of Motorola S-record text.

Decoding works line by line: a bad line never stops the following ones.
The caller chooses the error policy while consuming the results of
:func:`read_records`, which is lazy.

Cross-record consistency (e.g. the value of *count* records) is not checked
here; see :func:`srec.sequence.validate_records`.
"""

import logging
import os
from typing import Iterable
from typing import Iterator
from typing import List
from typing import Mapping
from typing import Optional
from typing import Tuple
from typing import Union

from .errors import ChecksumMismatchError
from .errors import DecodeError
from .errors import InvalidHexError
from .errors import LengthMismatchError
from .errors import MalformedLineError
from .errors import UnknownRecordTypeError
from .records import RECORD_TYPES
from .records import SrecRecord
from .records import SrecTag
from .utils import checksum_of
from .utils import is_hex
from .utils import iter_lines
from .utils import unhexlify

logger = logging.getLogger(__name__)

DecodeResult = Union[SrecRecord, DecodeError]

TAG_DIGITS: Mapping[str, SrecTag] = {str(tag.value): tag for tag in SrecTag}
r"""Record tag for each type digit."""


def decode_line(line: str, lineno: Optional[int] = None) -> SrecRecord:
    r"""Decodes a single line.

    Trailing CR and LF characters are ignored.
    Hexadecimal digits are accepted in either case.

    Args:
        line (str):
            Line to decode.

        lineno (int):
            Line number, stored into any raised :class:`DecodeError`.

    Returns:
        :class:`SrecRecord`: Decoded record.

    Raises:
        MalformedLineError: empty line, or missing record marker.
        UnknownRecordTypeError: unknown type digit.
        InvalidHexError: non-hexadecimal character.
        LengthMismatchError: line too short, or byte count not matching the
            line content.
        ChecksumMismatchError: wrong checksum.

    Examples:
        >>> from srec.reader import decode_line
        >>> decode_line('S107123400010203AC\n')
        Data16Record(address=Address16(0x1234), data=b'\x00\x01\x02\x03')
        >>> decode_line('S107123400010203AD')
        Traceback (most recent call last):
            ...
        srec.errors.ChecksumMismatchError: checksum mismatch
    """

    line = line.rstrip('\r\n')

    if not line:
        raise MalformedLineError('empty line', line=line, lineno=lineno)

    if line[0] != 'S':
        raise MalformedLineError('missing record marker', line=line, lineno=lineno)

    if len(line) < 2:
        raise LengthMismatchError('missing record type', line=line, lineno=lineno)

    tag = TAG_DIGITS.get(line[1])
    if tag is None:
        raise UnknownRecordTypeError(f'unknown record type: {line[1]!r}',
                                     line=line, lineno=lineno)

    if len(line) < 4:
        raise LengthMismatchError('missing byte count', line=line, lineno=lineno)

    count_text = line[2:4]
    if not is_hex(count_text):
        raise InvalidHexError('invalid byte count', line=line, lineno=lineno)
    count = int(count_text, 16)

    body_text = line[4:]
    if len(body_text) != count * 2:
        raise LengthMismatchError(f'byte count {count} requires {count * 2} digits, '
                                  f'got {len(body_text)}',
                                  line=line, lineno=lineno)

    address_size = tag.get_address_size()
    if tag.is_header() or tag.is_data():
        if count < address_size + 1:
            raise LengthMismatchError('byte count too small', line=line, lineno=lineno)
    elif count != address_size + 1:
        raise LengthMismatchError('byte count not matching record type',
                                  line=line, lineno=lineno)

    try:
        body = unhexlify(body_text)
    except ValueError:
        raise InvalidHexError('invalid hexadecimal digits', line=line, lineno=lineno) from None

    checksum = body[-1]
    expected = checksum_of(bytes((count,)) + body[:-1])
    if checksum != expected:
        raise ChecksumMismatchError('checksum mismatch', expected, checksum,
                                    line=line, lineno=lineno)

    address = body[:address_size]
    payload = body[address_size:-1]
    record = RECORD_TYPES[tag].from_fields(address, payload)
    return record


def _decode_numbered(numbered: Iterable[Tuple[int, str]]) -> Iterator[DecodeResult]:

    for lineno, line in numbered:
        try:
            yield decode_line(line, lineno=lineno)
        except DecodeError as exc:
            logger.debug('cannot decode line %d: %s', lineno, exc.message)
            yield exc


def decode_lines(lines: Iterable[str], start: int = 1) -> Iterator[DecodeResult]:
    r"""Decodes lines lazily.

    Each line generates exactly one result: either the decoded record, or the
    :class:`DecodeError` instance describing why the line is invalid.
    Errors are yielded, not raised.

    Args:
        lines (str iterable):
            Lines to decode.

        start (int):
            Number of the first line.

    Yields:
        :class:`SrecRecord` or :class:`DecodeError`: Decoding result.

    Examples:
        >>> from srec.reader import decode_lines
        >>> results = list(decode_lines(['S9031234B6', 'X']))
        >>> results[0]
        Start16Record(address=Address16(0x1234))
        >>> str(results[1])
        'line 2: missing record marker'
    """

    return _decode_numbered(enumerate(lines, start))


def read_records(text: str, skip_blank: bool = False) -> Iterator[DecodeResult]:
    r"""Reads records from text.

    Lines are terminated by CR, LF, or CRLF.
    The text is split and decoded lazily.

    Args:
        text (str):
            Text to decode.

        skip_blank (bool):
            Skips lines made of whitespace only, instead of reporting them
            as :class:`MalformedLineError`.

    Yields:
        :class:`SrecRecord` or :class:`DecodeError`: Decoding result of each
        line.

    See Also:
        :func:`decode_lines`

    Examples:
        >>> from srec.reader import read_records
        >>> text = 'S00600004844521B\nS107123400010203AC\nS9031234B6\n'
        >>> for result in read_records(text):
        ...     print(result)
        HeaderRecord(data=b'HDR', address=Address16(0x0000))
        Data16Record(address=Address16(0x1234), data=b'\x00\x01\x02\x03')
        Start16Record(address=Address16(0x1234))
    """

    lines = iter_lines(text)
    if skip_blank:
        numbered = ((lineno, line) for lineno, line in enumerate(lines, 1)
                    if line and not line.isspace())
    else:
        numbered = enumerate(lines, 1)

    return _decode_numbered(numbered)


def load_records(text: str, skip_blank: bool = False) -> List[SrecRecord]:
    r"""Loads all the records from text.

    Unlike :func:`read_records`, it stops at the first invalid line.

    Args:
        text (str):
            Text to decode.

        skip_blank (bool):
            Ignores blank lines.

    Returns:
        list of :class:`SrecRecord`: Decoded records.

    Raises:
        DecodeError: first invalid line.
    """

    records = []
    for result in read_records(text, skip_blank=skip_blank):
        if isinstance(result, DecodeError):
            raise result
        records.append(result)
    return records


def read_file(
    path: Union[str, os.PathLike],
    skip_blank: bool = False,
    encoding: str = 'ascii',
) -> Iterator[DecodeResult]:
    r"""Reads records from a file.

    The whole file content is read at once; decoding is lazy.

    Args:
        path (str):
            Path of the file to read.

        skip_blank (bool):
            Ignores blank lines.

        encoding (str):
            Text encoding of the file.

    Returns:
        iterator: See :func:`read_records`.
    """

    with open(path, 'rt', encoding=encoding, newline='') as stream:
        text = stream.read()
    logger.debug('read %d characters from %s', len(text), path)
    return read_records(text, skip_blank=skip_blank)
