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

__version__ = '0.1.0'

from .errors import ChecksumMismatchError
from .errors import DecodeError
from .errors import EncodeError
from .errors import InvalidHexError
from .errors import LengthMismatchError
from .errors import MalformedLineError
from .errors import SequenceError
from .errors import SrecError
from .errors import UnknownRecordTypeError
from .reader import decode_line
from .reader import decode_lines
from .reader import load_records
from .reader import read_file
from .reader import read_records
from .records import Address
from .records import Address16
from .records import Address24
from .records import Address32
from .records import Count
from .records import Count16
from .records import Count16Record
from .records import Count24
from .records import Count24Record
from .records import CountRecord
from .records import Data16Record
from .records import Data24Record
from .records import Data32Record
from .records import DataRecord
from .records import HeaderRecord
from .records import SrecRecord
from .records import SrecTag
from .records import Start16Record
from .records import Start24Record
from .records import Start32Record
from .records import StartRecord
from .sequence import build_records
from .sequence import validate_records
from .writer import encode_record
from .writer import write_file
from .writer import write_records
