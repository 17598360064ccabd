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

r"""Encoding of Motorola S-record text."""

import logging
import os
from typing import Iterable
from typing import Union

from .errors import EncodeError
from .records import SrecRecord
from .utils import checksum_of
from .utils import hexlify

logger = logging.getLogger(__name__)


def encode_record(record: SrecRecord) -> str:
    r"""Encodes a single record.

    Hexadecimal digits are uppercase; no line terminator is appended.

    Args:
        record (:class:`SrecRecord`):
            Record to encode.

    Returns:
        str: Encoded line.

    Raises:
        EncodeError: the record breaks its own invariants, e.g. too much data
            for a single line.

    Examples:
        >>> from srec.records import Data16Record, HeaderRecord
        >>> from srec.writer import encode_record
        >>> encode_record(Data16Record(0x1234, b'\x00\x01\x02\x03'))
        'S107123400010203AC'
        >>> encode_record(HeaderRecord(b'HDR'))
        'S00600004844521B'
    """

    if not isinstance(record, SrecRecord):
        raise TypeError(f'record expected, got {type(record).__name__}')

    try:
        record.validate()
    except (TypeError, ValueError) as exc:
        raise EncodeError(str(exc), record=record) from exc

    body = record.get_body()
    line = f'S{record.TAG:d}{hexlify(body)}{checksum_of(body):02X}'
    return line


def write_records(records: Iterable[SrecRecord], end: str = '\n') -> str:
    r"""Encodes records into text.

    Args:
        records (:class:`SrecRecord` iterable):
            Records to encode, in order.

        end (str):
            Line terminator, appended to each line.

    Returns:
        str: Encoded text.

    Raises:
        EncodeError: invalid record.

    Examples:
        >>> from srec.records import Data16Record, HeaderRecord, Start16Record
        >>> from srec.writer import write_records
        >>> records = [
        ...     HeaderRecord(b'HDR'),
        ...     Data16Record(0x1234, b'\x00\x01\x02\x03'),
        ...     Start16Record(0x1234),
        ... ]
        >>> write_records(records)
        'S00600004844521B\nS107123400010203AC\nS9031234B6\n'
    """

    return ''.join(encode_record(record) + end for record in records)


def write_file(
    path: Union[str, os.PathLike],
    records: Iterable[SrecRecord],
    end: str = '\n',
    encoding: str = 'ascii',
) -> None:
    r"""Writes records to a file.

    The whole text is encoded before the file is opened; an invalid record
    raises without touching the file.

    Args:
        path (str):
            Path of the file to write.

        records (:class:`SrecRecord` iterable):
            Records to encode, in order.

        end (str):
            Line terminator.

        encoding (str):
            Text encoding of the file.
    """

    text = write_records(records, end=end)
    with open(path, 'wt', encoding=encoding, newline='') as stream:
        stream.write(text)
    logger.debug('wrote %d characters to %s', len(text), path)
