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

r"""Record sequence helpers.

These functions deal with whole record sequences, on top of the single
record codec: generation of the records describing some binary memory, and
optional consistency checks of a decoded sequence.
"""

import logging
from typing import Iterator
from typing import List
from typing import Optional
from typing import Sequence
from typing import Union

from bytesparse import Memory

from .errors import SequenceError
from .records import DataRecord
from .records import SrecRecord
from .records import SrecTag
from .records import create_count
from .records import create_data
from .records import create_header
from .records import create_start
from .utils import AnyBytes

logger = logging.getLogger(__name__)

MAXDATALEN: int = 32
r"""Default maximum data size of generated data records."""

BlockSequence = Sequence[Sequence[Union[int, AnyBytes]]]


def _as_memory(memory: Union[Memory, BlockSequence]) -> Memory:

    if isinstance(memory, Memory):
        return memory
    return Memory.from_blocks(memory)


def _get_kind(tag: SrecTag) -> str:

    if tag.is_data():
        return 'data'
    if tag.is_count():
        return 'count'
    if tag.is_start():
        return 'start'
    return 'header'


def iter_data_records(
    memory: Union[Memory, BlockSequence],
    data_tag: Optional[SrecTag] = None,
    maxdatalen: int = MAXDATALEN,
    align: bool = False,
) -> Iterator[DataRecord]:
    r"""Splits memory into data records.

    Args:
        memory (:class:`bytesparse.Memory`):
            Source memory, or its sequence of ``[address, data]`` blocks.

        data_tag (:class:`SrecTag`):
            Specific *data* record tag to use.
            If ``None``, the most compact tag fitting the highest memory
            address is used.

        maxdatalen (int):
            Maximum byte size of each data record.

        align (bool):
            Aligns data record chunk address bounds to `maxdatalen`.

    Yields:
        :class:`DataRecord`: Data records, in address order.

    Raises:
        ValueError: invalid `maxdatalen`, or address not fitting `data_tag`.

    Examples:
        >>> from srec.sequence import iter_data_records
        >>> list(iter_data_records([[0x1234, b'abcdef']], maxdatalen=4))
        ... # doctest: +NORMALIZE_WHITESPACE
        [Data16Record(address=Address16(0x1234), data=b'abcd'),
         Data16Record(address=Address16(0x1238), data=b'ef')]
    """

    memory = _as_memory(memory)

    if data_tag is None:
        data_tag = SrecTag.fit_data_tag(max(0, memory.endin) if memory else 0)
    elif not data_tag.is_data():
        raise ValueError('invalid data tag')

    if not 1 <= maxdatalen <= data_tag.get_data_max():
        raise ValueError('invalid maximum data length')

    for chunk_start, chunk_view in memory.chop(maxdatalen, align=align):
        try:
            chunk_data = bytes(chunk_view)
        finally:
            chunk_view.release()
        yield create_data(chunk_start, chunk_data, tag=data_tag)


def build_records(
    memory: Union[Memory, BlockSequence],
    header: Optional[Union[AnyBytes, str]] = b'',
    startaddr: int = 0,
    maxdatalen: int = MAXDATALEN,
    align: bool = False,
    count: bool = True,
    data_tag: Optional[SrecTag] = None,
    count_tag: Optional[SrecTag] = None,
) -> List[SrecRecord]:
    r"""Builds the record sequence describing some memory.

    The sequence is made of the optional *header* record, the *data* records,
    the optional *count* record, and the *start address* record matching the
    *data* tag.

    Args:
        memory (:class:`bytesparse.Memory`):
            Source memory, or its sequence of ``[address, data]`` blocks.

        header (bytes):
            Header byte string; ``None`` to skip the *header* record.

        startaddr (int):
            Start address.

        maxdatalen (int):
            Maximum byte size of each data record.

        align (bool):
            Aligns data record chunk address bounds to `maxdatalen`.

        count (bool):
            Generates the *count* record.

        data_tag (:class:`SrecTag`):
            Specific *data* record tag to use.
            If ``None``, the most compact tag fitting both the highest memory
            address and `startaddr` is used.

        count_tag (:class:`SrecTag`):
            Specific *count* record tag to use.

    Returns:
        list of :class:`SrecRecord`: Record sequence.

    Raises:
        ValueError: invalid arguments.

    Examples:
        >>> from srec.sequence import build_records
        >>> from srec.writer import write_records
        >>> records = build_records([[123, b'abc']], startaddr=456)
        >>> print(write_records(records), end='')
        S0030000FC
        S106007B61626358
        S5030001FB
        S90301C833
    """

    memory = _as_memory(memory)

    if data_tag is None:
        address_max = max(0, memory.endin) if memory else 0
        data_tag = SrecTag.fit_data_tag(max(address_max, startaddr))

    records = []
    if header is not None:
        records.append(create_header(header))

    data_records = list(iter_data_records(memory, data_tag=data_tag,
                                          maxdatalen=maxdatalen, align=align))
    records.extend(data_records)

    if count:
        records.append(create_count(len(data_records), tag=count_tag))

    records.append(create_start(startaddr, tag=data_tag.get_tag_match()))

    logger.debug('built %d records (%d data, tag %s)',
                 len(records), len(data_records), data_tag.name)
    return records


def validate_records(
    records: Sequence[SrecRecord],
    header_required: bool = False,
    header_first: bool = True,
    data_ordering: bool = False,
    data_uniform: bool = True,
    count_required: bool = False,
    count_penultimate: bool = True,
    start_required: bool = True,
    start_last: bool = True,
) -> Sequence[SrecRecord]:
    r"""Validates a record sequence.

    It performs consistency checks across the records of a sequence.
    Decoding never calls it: it is up to the caller to opt in.

    Args:
        records (:class:`SrecRecord` sequence):
            Record sequence to check.

        header_required (bool):
            Requires the *header* record be present.

        header_first (bool):
            Requires the *header* record be the first of the sequence.

        data_ordering (bool):
            Checks that the *data* record sequence has monotonically
            increasing addresses, without any overlapping.

        data_uniform (bool):
            Requires *data* records have the same tag, matched by the *start
            address* record.

        count_required (bool):
            Requires the *count* record be present.
            When present, its value must equal the number of *data*
            records in the whole sequence.

        count_penultimate (bool):
            Requires the *count* record be the penultimate one.

        start_required (bool):
            Requires the *start address* record be present.

        start_last (bool):
            Requires the *start address* record be the last of the sequence.

    Returns:
        :class:`SrecRecord` sequence: `records`.

    Raises:
        SequenceError: inconsistent record sequence.

    Examples:
        >>> from srec.records import Data16Record
        >>> from srec.sequence import validate_records
        >>> validate_records([Data16Record(123, b'abc')])
        Traceback (most recent call last):
            ...
        srec.errors.SequenceError: missing start record
    """

    last_index = len(records) - 1
    indices = {'header': [], 'data': [], 'count': [], 'start': []}

    for index, record in enumerate(records):
        record.validate()
        indices[_get_kind(record.TAG)].append(index)

    header_indices = indices['header']
    if header_required and not header_indices:
        raise SequenceError('missing header record')
    if header_first and any(index != 0 for index in header_indices):
        raise SequenceError('header record not first')

    data_records = [records[index] for index in indices['data']]
    data_tags = {record.TAG for record in data_records}
    if data_uniform and len(data_tags) > 1:
        raise SequenceError('data record tags not uniform')

    if data_ordering:
        endex = 0
        for record in data_records:
            address = int(record.address)
            if address < endex:
                raise SequenceError(f'unordered data record at address 0x{address:X}')
            endex = address + len(record.data)

    count_indices = indices['count']
    if len(count_indices) > 1:
        raise SequenceError('multiple count records')
    if count_indices:
        count_index = count_indices[0]
        declared = int(records[count_index].count)
        found = len(data_records)
        if declared != found:
            raise SequenceError(f'wrong data record count: {declared} declared, {found} found')
        if count_penultimate and count_index != last_index - 1:
            raise SequenceError('count record not penultimate')
    elif count_required:
        raise SequenceError('missing count record')

    start_indices = indices['start']
    if len(start_indices) > 1:
        raise SequenceError('multiple start records')
    if start_indices:
        start_record = records[start_indices[0]]
        if start_last and start_indices[0] != last_index:
            raise SequenceError('start record not last')
        if data_uniform and data_tags:
            data_tag, = data_tags
            if start_record.TAG != data_tag.get_tag_match():
                raise SequenceError('start record tag not uniform')
    elif start_required:
        raise SequenceError('missing start record')

    return records
