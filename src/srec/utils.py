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

r"""Generic utility functions."""

import binascii
import re
from typing import Iterator
from typing import Union

AnyBytes = Union[bytes, bytearray, memoryview]

HEX_REGEX = re.compile(r'[0-9A-Fa-f]*')
r"""Hexadecimal digits only (any case)."""

LINE_REGEX = re.compile(r'(?P<line>[^\r\n]*)(?P<end>\r\n|\r|\n)?')
r"""Single line, with its optional terminator."""


def checksum_of(bytestr: AnyBytes) -> int:
    r"""Computes the S-record checksum.

    It is the one's complement of the least significant byte of the sum of
    all the byte values.

    Args:
        bytestr (bytes):
            Bytes covered by the checksum: *count*, *address*, and *data*.

    Returns:
        int: Checksum byte value.

    Examples:
        >>> from srec.utils import checksum_of
        >>> hex(checksum_of(b'\x07\x12\x34\x00\x01\x02\x03'))
        '0xac'
        >>> hex(checksum_of(b''))
        '0xff'
    """

    return (sum(bytestr) & 0xFF) ^ 0xFF


def hexlify(bytestr: AnyBytes, upper: bool = True) -> str:
    r"""Converts raw bytes into a hexadecimal string.

    Args:
        bytestr (bytes):
            Source byte string.

        upper (bool):
            Uppercase hexadecimal string.

    Returns:
        str: Hexadecimal string.

    Examples:
        >>> from srec.utils import hexlify
        >>> hexlify(b'\xAA\xBB\xCC')
        'AABBCC'
        >>> hexlify(b'\xAA\xBB\xCC', upper=False)
        'aabbcc'
    """

    hexstr = binascii.hexlify(bytestr).decode('ascii')
    if upper:
        hexstr = hexstr.upper()
    return hexstr


def is_hex(text: str) -> bool:
    r"""Tells whether a string holds hexadecimal digits only.

    Examples:
        >>> from srec.utils import is_hex
        >>> is_hex('09afAF')
        True
        >>> is_hex('0x')
        False
        >>> is_hex('')
        True
    """

    return HEX_REGEX.fullmatch(text) is not None


def iter_lines(text: str) -> Iterator[str]:
    r"""Splits text into lines, lazily.

    Lines are terminated by CR, LF, or CRLF; terminators are not included.
    A terminator at the very end of `text` does not generate a further empty
    line.

    Args:
        text (str):
            Source text.

    Yields:
        str: Line content.

    Examples:
        >>> from srec.utils import iter_lines
        >>> list(iter_lines('a\nb\r\nc\rd'))
        ['a', 'b', 'c', 'd']
        >>> list(iter_lines('a\n\nb\n'))
        ['a', '', 'b']
        >>> list(iter_lines(''))
        []
    """

    position = 0
    size = len(text)
    while position < size:
        match = LINE_REGEX.match(text, position)
        yield match.group('line')
        position = match.end()


def unhexlify(hexstr: str) -> bytes:
    r"""Converts a hexadecimal string into raw bytes.

    Args:
        hexstr (str):
            Source hexadecimal string, with an even number of digits.

    Returns:
        bytes: Raw byte string.

    Raises:
        ValueError: invalid hexadecimal string.

    Examples:
        >>> from srec.utils import unhexlify
        >>> unhexlify('AABBcc')
        b'\xaa\xbb\xcc'
    """

    if not is_hex(hexstr):
        raise ValueError('invalid hexadecimal string')
    try:
        return binascii.unhexlify(hexstr)
    except binascii.Error as exc:
        raise ValueError(str(exc)) from exc
