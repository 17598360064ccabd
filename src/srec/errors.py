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

r"""Exceptions raised by the S-record codec.

All of them derive from :class:`ValueError`, so that callers used to catch
plain value errors keep working.
"""

from typing import Any
from typing import Optional


class SrecError(ValueError):
    r"""Base class for all the S-record errors."""


class DecodeError(SrecError):
    r"""A text line could not be decoded into a record.

    Args:
        message (str):
            Short description of the failure.

        line (str):
            The offending line, if known.

        lineno (int):
            1-based line number within the decoded text, if known.
    """

    def __init__(
        self,
        message: str,
        line: Optional[str] = None,
        lineno: Optional[int] = None,
    ):

        super().__init__(message)
        self.message: str = message
        self.line: Optional[str] = line
        self.lineno: Optional[int] = lineno

    def __str__(self) -> str:

        if self.lineno is None:
            return self.message
        return f'line {self.lineno}: {self.message}'


class MalformedLineError(DecodeError):
    r"""Empty line, or missing ``S`` record marker."""


class UnknownRecordTypeError(DecodeError):
    r"""Record type digit outside of the known set."""


class InvalidHexError(DecodeError):
    r"""Non-hexadecimal character within a hexadecimal field."""


class LengthMismatchError(DecodeError):
    r"""Line too short, or byte count field not matching the line content."""


class ChecksumMismatchError(DecodeError):
    r"""Stored checksum not matching the computed one.

    Attributes:
        expected (int):
            Checksum computed from the line content.

        actual (int):
            Checksum stored within the line.
    """

    def __init__(
        self,
        message: str,
        expected: int,
        actual: int,
        line: Optional[str] = None,
        lineno: Optional[int] = None,
    ):

        super().__init__(message, line=line, lineno=lineno)
        self.expected: int = expected
        self.actual: int = actual


class EncodeError(SrecError):
    r"""A record could not be encoded.

    Attributes:
        record:
            The offending record object.
    """

    def __init__(self, message: str, record: Any = None):

        super().__init__(message)
        self.record: Any = record


class SequenceError(SrecError):
    r"""Inconsistent record sequence."""
