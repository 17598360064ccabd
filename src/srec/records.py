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

r"""Motorola S-record model.

Each line kind has its own record class, holding fixed-width integer fields
(:class:`Address16`, :class:`Address24`, :class:`Address32`,
:class:`Count16`, :class:`Count24`) and raw byte payloads.
Record objects are immutable values; equality compares type and fields.

See Also:
    `<https://en.wikipedia.org/wiki/SREC_(file_format)>`_
"""

import enum
import operator
from typing import Any
from typing import Mapping
from typing import Optional
from typing import Tuple
from typing import Type
from typing import Union

from .utils import AnyBytes
from .utils import checksum_of


class SrecTag(enum.IntEnum):
    r"""Motorola S-record tag."""

    HEADER = 0
    r"""Header string. Optional."""

    DATA_16 = 1
    r"""16-bit address data record."""

    DATA_24 = 2
    r"""24-bit address data record."""

    DATA_32 = 3
    r"""32-bit address data record."""

    COUNT_16 = 5
    r"""16-bit record count. Optional."""

    COUNT_24 = 6
    r"""24-bit record count. Optional."""

    START_32 = 7
    r"""32-bit start address. Terminates :attr:`DATA_32`."""

    START_24 = 8
    r"""24-bit start address. Terminates :attr:`DATA_24`."""

    START_16 = 9
    r"""16-bit start address. Terminates :attr:`DATA_16`."""

    @classmethod
    def fit_count_tag(cls, count: int) -> 'SrecTag':
        r"""Fits count record tag.

        Given the record sequence count, it fits the most compact *count* tag.

        Args:
            count (int):
                Record sequence *count*.

        Returns:
            :class:`SrecTag`: *Count* record tag.

        Raises:
            ValueError: invalid `count`.

        Examples:
            >>> from srec.records import SrecTag
            >>> SrecTag.fit_count_tag(0xFFFF)
            <SrecTag.COUNT_16: 5>
            >>> SrecTag.fit_count_tag(0xFFFFFF)
            <SrecTag.COUNT_24: 6>
            >>> SrecTag.fit_count_tag(0x1000000)
            Traceback (most recent call last):
                ...
            ValueError: count overflow
        """

        if count < 0:
            raise ValueError('count overflow')
        if count <= 0xFFFF:
            return cls.COUNT_16
        if count <= 0xFFFFFF:
            return cls.COUNT_24
        raise ValueError('count overflow')

    @classmethod
    def fit_data_tag(cls, address_max: int) -> 'SrecTag':
        r"""Fits data record tag.

        Given the maximum *address* of the involved *data* records, it fits the
        most compact *data* tag.

        Args:
            address_max (int):
                Maximum *address* of the involved *data* records.

        Returns:
            :class:`SrecTag`: *Data* record tag.

        Raises:
            ValueError: invalid `address_max`.

        Examples:
            >>> from srec.records import SrecTag
            >>> SrecTag.fit_data_tag(0xFFFF)
            <SrecTag.DATA_16: 1>
            >>> SrecTag.fit_data_tag(0xFFFFFF)
            <SrecTag.DATA_24: 2>
            >>> SrecTag.fit_data_tag(0xFFFFFFFF)
            <SrecTag.DATA_32: 3>
        """

        if address_max < 0:
            raise ValueError('address overflow')
        if address_max <= 0xFFFF:
            return cls.DATA_16
        if address_max <= 0xFFFFFF:
            return cls.DATA_24
        if address_max <= 0xFFFFFFFF:
            return cls.DATA_32
        raise ValueError('address overflow')

    @classmethod
    def fit_start_tag(cls, address: int) -> 'SrecTag':
        r"""Fits start address record tag.

        Given the *start address*, it fits the most compact *start address* tag.

        Args:
            address (int):
                Start address.

        Returns:
            :class:`SrecTag`: *Start address* record tag.

        Raises:
            ValueError: invalid `address`.

        Examples:
            >>> from srec.records import SrecTag
            >>> SrecTag.fit_start_tag(0xFFFF)
            <SrecTag.START_16: 9>
            >>> SrecTag.fit_start_tag(0x10000)
            <SrecTag.START_24: 8>
        """

        if address < 0:
            raise ValueError('address overflow')
        if address <= 0xFFFF:
            return cls.START_16
        if address <= 0xFFFFFF:
            return cls.START_24
        if address <= 0xFFFFFFFF:
            return cls.START_32
        raise ValueError('address overflow')

    def get_address_max(self) -> int:
        r"""Maximum value of the *address* field.

        Examples:
            >>> from srec.records import SrecTag
            >>> hex(SrecTag.DATA_32.get_address_max())
            '0xffffffff'
            >>> hex(SrecTag.COUNT_24.get_address_max())
            '0xffffff'
        """

        return (1 << (self.get_address_size() << 3)) - 1

    def get_address_size(self) -> int:
        r"""Size of the *address* field, in bytes.

        Examples:
            >>> from srec.records import SrecTag
            >>> SrecTag.DATA_32.get_address_size()
            4
            >>> SrecTag.START_24.get_address_size()
            3
            >>> SrecTag.HEADER.get_address_size()
            2
        """

        SIZES = (2, 2, 3, 4, 0, 2, 3, 4, 3, 2)
        return SIZES[self]

    def get_data_max(self) -> int:
        r"""Maximum size of the *data* field, in bytes.

        It is zero for tags not supporting any *data*.

        Examples:
            >>> from srec.records import SrecTag
            >>> SrecTag.DATA_16.get_data_max()
            252
            >>> SrecTag.DATA_32.get_data_max()
            250
            >>> SrecTag.START_32.get_data_max()
            0
        """

        SIZES = (2, 2, 3, 4, 0, 0, 0, 0, 0, 0)
        size = SIZES[self]
        if size:
            size = 0xFE - size
        return size

    def get_tag_match(self) -> Optional['SrecTag']:
        r"""Calculates the matching tag.

        Given *data* or *start address* records, it returns the matching tag.

        Returns:
            :class:`SrecTag`: Matching tag for *self*, or ``None``

        Examples:
            >>> from srec.records import SrecTag
            >>> SrecTag.DATA_16.get_tag_match()
            <SrecTag.START_16: 9>
            >>> SrecTag.START_32.get_tag_match()
            <SrecTag.DATA_32: 3>
            >>> SrecTag.HEADER.get_tag_match() is None
            True
        """

        MATCHES = (None, 9, 8, 7, None, None, None, 3, 2, 1)
        match = MATCHES[self]
        if match is None:
            return None
        return type(self)(match)

    def is_count(self) -> bool:

        return self in (SrecTag.COUNT_16, SrecTag.COUNT_24)

    def is_data(self) -> bool:

        return self in (SrecTag.DATA_16, SrecTag.DATA_24, SrecTag.DATA_32)

    def is_header(self) -> bool:

        return self == SrecTag.HEADER

    def is_start(self) -> bool:

        return self in (SrecTag.START_16, SrecTag.START_24, SrecTag.START_32)


class FixedWidthInt:
    r"""Unsigned integer with a fixed byte width.

    The value is checked against the width range upon construction; it is
    never truncated.

    Args:
        value (int):
            Any integer-like object (supporting ``__index__``).

    Raises:
        ValueError: value out of range.
    """

    __slots__ = ('_value',)

    SIZE: int = 0
    r"""Width, in bytes."""

    OVERFLOW_MESSAGE: str = 'value overflow'

    def __init__(self, value: int = 0):

        value = operator.index(value)
        if not 0 <= value <= self.get_max():
            raise ValueError(self.OVERFLOW_MESSAGE)
        self._value: int = value

    def __eq__(self, other: Any) -> bool:

        if type(other) is not type(self):
            return NotImplemented
        return self._value == other._value

    def __hash__(self) -> int:

        return hash((type(self).__name__, self._value))

    def __index__(self) -> int:

        return self._value

    def __int__(self) -> int:

        return self._value

    def __repr__(self) -> str:

        return f'{type(self).__name__}(0x{self._value:0{self.SIZE * 2}X})'

    @classmethod
    def from_bytes(cls, bytestr: AnyBytes) -> 'FixedWidthInt':
        r"""Builds from big-endian bytes.

        Args:
            bytestr (bytes):
                Exactly :attr:`SIZE` bytes, most significant first.

        Returns:
            :class:`FixedWidthInt`: Integer object.

        Examples:
            >>> from srec.records import Address24
            >>> Address24.from_bytes(b'\x12\x34\x56')
            Address24(0x123456)
        """

        if len(bytestr) != cls.SIZE:
            raise ValueError('size mismatch')
        return cls(int.from_bytes(bytestr, 'big'))

    @classmethod
    def get_max(cls) -> int:

        return (1 << (cls.SIZE << 3)) - 1

    def to_bytes(self) -> bytes:
        r"""Converts to big-endian bytes.

        Examples:
            >>> from srec.records import Address16
            >>> Address16(0x1234).to_bytes()
            b'\x124'
        """

        return self._value.to_bytes(self.SIZE, 'big')

    @property
    def value(self) -> int:
        r"""int: Plain integer value."""

        return self._value


class Address(FixedWidthInt):
    r"""Memory address."""

    __slots__ = ()

    OVERFLOW_MESSAGE = 'address overflow'


class Address16(Address):
    r"""16-bit address."""

    __slots__ = ()
    SIZE = 2


class Address24(Address):
    r"""24-bit address."""

    __slots__ = ()
    SIZE = 3


class Address32(Address):
    r"""32-bit address."""

    __slots__ = ()
    SIZE = 4


class Count(FixedWidthInt):
    r"""Data record count."""

    __slots__ = ()

    OVERFLOW_MESSAGE = 'count overflow'


class Count16(Count):
    r"""16-bit data record count."""

    __slots__ = ()
    SIZE = 2


class Count24(Count):
    r"""24-bit data record count."""

    __slots__ = ()
    SIZE = 3


def _coerce(value: Union[int, FixedWidthInt], kind: Type[FixedWidthInt]) -> FixedWidthInt:

    if isinstance(value, FixedWidthInt):
        if type(value) is not kind:
            raise TypeError(f'{kind.__name__} expected, got {type(value).__name__}')
        return value
    return kind(value)


class SrecRecord:
    r"""Motorola S-record record.

    Base class of the record kinds; each kind defines its own fields.
    Records are immutable and compared by kind and field values.
    """

    __slots__ = ()

    TAG: SrecTag = None  # override
    r"""Tag of the record kind."""

    FIELD_TYPE: Type[FixedWidthInt] = None  # override
    r"""Type of the *address* field, as serialized."""

    FIELDS: Tuple[str, ...] = ()
    r"""Names of the fields, for equality and representation."""

    def __eq__(self, other: Any) -> bool:

        if type(other) is not type(self):
            return NotImplemented
        return self._get_values() == other._get_values()

    def __hash__(self) -> int:

        return hash((type(self).__name__,) + self._get_values())

    def __repr__(self) -> str:

        fields = ', '.join(f'{key}={getattr(self, key)!r}' for key in self.FIELDS)
        return f'{type(self).__name__}({fields})'

    def _get_values(self) -> Tuple[Any, ...]:

        return tuple(getattr(self, key) for key in self.FIELDS)

    def compute_checksum(self) -> int:
        r"""Computes the checksum field value.

        Returns:
            int: Checksum of *count*, *address*, and *data* bytes.

        Examples:
            >>> from srec.records import Data16Record
            >>> hex(Data16Record(0x1234, b'abc').compute_checksum())
            '0x8d'
        """

        return checksum_of(self.get_body())

    def compute_count(self) -> int:
        r"""Computes the count field value.

        Returns:
            int: Number of *address*, *data*, and *checksum* bytes.

        Examples:
            >>> from srec.records import Data16Record, Start32Record
            >>> Data16Record(0x1234, b'abc').compute_count()
            6
            >>> Start32Record(0).compute_count()
            5
        """

        return self.TAG.get_address_size() + len(self.get_payload()) + 1

    @classmethod
    def from_fields(cls, address: AnyBytes, payload: AnyBytes) -> 'SrecRecord':
        r"""Builds a record from its serialized fields.

        Args:
            address (bytes):
                Big-endian *address* field bytes.

            payload (bytes):
                *Data* field bytes.

        Returns:
            :class:`SrecRecord`: Record object.
        """

        raise NotImplementedError()

    def get_address_field(self) -> FixedWidthInt:
        r"""Value serialized into the *address* field."""

        raise NotImplementedError()

    def get_body(self) -> bytes:
        r"""Bytes covered by the checksum.

        Returns:
            bytes: *count*, *address*, and *data* bytes.

        Examples:
            >>> from srec.records import Start16Record
            >>> Start16Record(0x1234).get_body()
            b'\x03\x124'
        """

        count = self.compute_count() & 0xFF
        return bytes((count,)) + self.get_address_field().to_bytes() + self.get_payload()

    def get_payload(self) -> bytes:
        r"""Bytes serialized into the *data* field."""

        return b''

    def validate(self) -> 'SrecRecord':
        r"""Validates the record.

        Returns:
            :class:`SrecRecord`: *self*.

        Raises:
            ValueError: invalid field value.
        """

        field = self.get_address_field()
        if type(field) is not self.FIELD_TYPE:
            raise TypeError(f'{self.FIELD_TYPE.__name__} expected')

        if len(self.get_payload()) > self.TAG.get_data_max():
            raise ValueError('data size overflow')

        return self


class HeaderRecord(SrecRecord):
    r"""Header record (``S0``).

    Args:
        data (bytes):
            Header byte string; :obj:`str` objects are ASCII encoded.

        address (int):
            16-bit *address* field, conventionally zero.

        validate (bool):
            Calls :meth:`validate` upon initialization.

    Examples:
        >>> from srec.records import HeaderRecord
        >>> HeaderRecord('HDR')
        HeaderRecord(data=b'HDR', address=Address16(0x0000))
        >>> HeaderRecord(b'HDR\0').text
        'HDR'
    """

    __slots__ = ('_address', '_data')

    TAG = SrecTag.HEADER
    FIELD_TYPE = Address16
    FIELDS = ('data', 'address')

    def __init__(
        self,
        data: Union[AnyBytes, str] = b'',
        address: Union[int, Address16] = 0,
        validate: bool = True,
    ):

        if isinstance(data, str):
            data = data.encode('ascii')
        self._address: Address16 = _coerce(address, Address16)
        self._data: bytes = bytes(data)

        if validate:
            self.validate()

    @property
    def address(self) -> Address16:
        r""":class:`Address16`: *Address* field."""

        return self._address

    @property
    def data(self) -> bytes:
        r"""bytes: Header byte string."""

        return self._data

    @property
    def text(self) -> str:
        r"""str: Header text, without trailing NUL characters."""

        return self._data.rstrip(b'\0').decode('utf-8', errors='replace')

    @classmethod
    def from_fields(cls, address: AnyBytes, payload: AnyBytes) -> 'HeaderRecord':

        return cls(payload, address=Address16.from_bytes(address))

    def get_address_field(self) -> FixedWidthInt:

        return self._address

    def get_payload(self) -> bytes:

        return self._data


class DataRecord(SrecRecord):
    r"""Data record.

    Args:
        address (int):
            Memory address of the first byte of `data`.

        data (bytes):
            Byte data.

        validate (bool):
            Calls :meth:`validate` upon initialization.
            When false, oversized `data` is accepted here, and rejected while
            encoding.
    """

    __slots__ = ('_address', '_data')

    FIELDS = ('address', 'data')

    def __init__(
        self,
        address: Union[int, Address],
        data: AnyBytes = b'',
        validate: bool = True,
    ):

        self._address: Address = _coerce(address, self.FIELD_TYPE)
        self._data: bytes = bytes(data)

        if validate:
            self.validate()

    @property
    def address(self) -> Address:
        r""":class:`Address`: Address of the first data byte."""

        return self._address

    @property
    def data(self) -> bytes:
        r"""bytes: Byte data."""

        return self._data

    @classmethod
    def from_fields(cls, address: AnyBytes, payload: AnyBytes) -> 'DataRecord':

        return cls(cls.FIELD_TYPE.from_bytes(address), payload)

    def get_address_field(self) -> FixedWidthInt:

        return self._address

    def get_payload(self) -> bytes:

        return self._data


class Data16Record(DataRecord):
    r"""16-bit address data record (``S1``).

    Examples:
        >>> from srec.records import Data16Record
        >>> Data16Record(0x1234, b'\x00\x01')
        Data16Record(address=Address16(0x1234), data=b'\x00\x01')
    """

    __slots__ = ()
    TAG = SrecTag.DATA_16
    FIELD_TYPE = Address16


class Data24Record(DataRecord):
    r"""24-bit address data record (``S2``)."""

    __slots__ = ()
    TAG = SrecTag.DATA_24
    FIELD_TYPE = Address24


class Data32Record(DataRecord):
    r"""32-bit address data record (``S3``)."""

    __slots__ = ()
    TAG = SrecTag.DATA_32
    FIELD_TYPE = Address32


class CountRecord(SrecRecord):
    r"""Record count record.

    Args:
        count (int):
            Number of data records; not checked against any actual count.
    """

    __slots__ = ('_count',)

    FIELDS = ('count',)

    def __init__(self, count: Union[int, Count]):

        self._count: Count = _coerce(count, self.FIELD_TYPE)

    @property
    def count(self) -> Count:
        r""":class:`Count`: Data record count."""

        return self._count

    @classmethod
    def from_fields(cls, address: AnyBytes, payload: AnyBytes) -> 'CountRecord':

        if payload:
            raise ValueError('unexpected data')
        return cls(cls.FIELD_TYPE.from_bytes(address))

    def get_address_field(self) -> FixedWidthInt:

        return self._count


class Count16Record(CountRecord):
    r"""16-bit record count record (``S5``)."""

    __slots__ = ()
    TAG = SrecTag.COUNT_16
    FIELD_TYPE = Count16


class Count24Record(CountRecord):
    r"""24-bit record count record (``S6``)."""

    __slots__ = ()
    TAG = SrecTag.COUNT_24
    FIELD_TYPE = Count24


class StartRecord(SrecRecord):
    r"""Start address (termination) record.

    Args:
        address (int):
            Start address.
    """

    __slots__ = ('_address',)

    FIELDS = ('address',)

    def __init__(self, address: Union[int, Address] = 0):

        self._address: Address = _coerce(address, self.FIELD_TYPE)

    @property
    def address(self) -> Address:
        r""":class:`Address`: Start address."""

        return self._address

    @classmethod
    def from_fields(cls, address: AnyBytes, payload: AnyBytes) -> 'StartRecord':

        if payload:
            raise ValueError('unexpected data')
        return cls(cls.FIELD_TYPE.from_bytes(address))

    def get_address_field(self) -> FixedWidthInt:

        return self._address


class Start32Record(StartRecord):
    r"""32-bit start address record (``S7``)."""

    __slots__ = ()
    TAG = SrecTag.START_32
    FIELD_TYPE = Address32


class Start24Record(StartRecord):
    r"""24-bit start address record (``S8``)."""

    __slots__ = ()
    TAG = SrecTag.START_24
    FIELD_TYPE = Address24


class Start16Record(StartRecord):
    r"""16-bit start address record (``S9``).

    Examples:
        >>> from srec.records import Start16Record
        >>> Start16Record(0x1234)
        Start16Record(address=Address16(0x1234))
    """

    __slots__ = ()
    TAG = SrecTag.START_16
    FIELD_TYPE = Address16


RECORD_TYPES: Mapping[SrecTag, Type[SrecRecord]] = {
    SrecTag.HEADER: HeaderRecord,
    SrecTag.DATA_16: Data16Record,
    SrecTag.DATA_24: Data24Record,
    SrecTag.DATA_32: Data32Record,
    SrecTag.COUNT_16: Count16Record,
    SrecTag.COUNT_24: Count24Record,
    SrecTag.START_32: Start32Record,
    SrecTag.START_24: Start24Record,
    SrecTag.START_16: Start16Record,
}
r"""Record class for each tag."""


def create_count(count: int, tag: Optional[SrecTag] = None) -> CountRecord:
    r"""Creates a record count record.

    Args:
        count (int):
            Number of preceding *data* records.

        tag (:class:`SrecTag`):
            Chosen *record count* tag.
            If ``None``, it uses the one returned by
            :meth:`SrecTag.fit_count_tag`.

    Returns:
        :class:`CountRecord`: Record count record object.

    Examples:
        >>> from srec.records import SrecTag, create_count
        >>> create_count(0x1234)
        Count16Record(count=Count16(0x1234))
        >>> create_count(0x1234, tag=SrecTag.COUNT_24)
        Count24Record(count=Count24(0x001234))
    """

    if tag is None:
        tag = SrecTag.fit_count_tag(count)
    elif not tag.is_count():
        raise ValueError('invalid count tag')

    return RECORD_TYPES[tag](count)


def create_data(
    address: int,
    data: AnyBytes,
    tag: Optional[SrecTag] = None,
) -> DataRecord:
    r"""Creates a data record.

    Args:
        address (int):
            Record address.

        data (bytes):
            Record byte data.

        tag (:class:`SrecTag`):
            Chosen *data* tag.
            If ``None``, it uses the one returned by
            :meth:`SrecTag.fit_data_tag`.

    Returns:
        :class:`DataRecord`: Data record object.

    Examples:
        >>> from srec.records import SrecTag, create_data
        >>> create_data(0x123456, b'abc')
        Data24Record(address=Address24(0x123456), data=b'abc')
        >>> create_data(0x1234, b'abc', tag=SrecTag.DATA_32)
        Data32Record(address=Address32(0x00001234), data=b'abc')
    """

    if tag is None:
        tag = SrecTag.fit_data_tag(address)
    elif not tag.is_data():
        raise ValueError('invalid data tag')

    return RECORD_TYPES[tag](address, data)


def create_header(data: Union[AnyBytes, str] = b'') -> HeaderRecord:
    r"""Creates a header record.

    Raises:
        ValueError: data size overflow.
    """

    return HeaderRecord(data)


def create_start(address: int = 0, tag: Optional[SrecTag] = None) -> StartRecord:
    r"""Creates a start address record.

    Args:
        address (int):
            Start address.

        tag (:class:`SrecTag`):
            Chosen *start* tag.
            If ``None``, it uses the one returned by
            :meth:`SrecTag.fit_start_tag`.

    Returns:
        :class:`StartRecord`: Start address record object.

    Examples:
        >>> from srec.records import SrecTag, create_start
        >>> create_start(0x1234)
        Start16Record(address=Address16(0x1234))
        >>> create_start(0x1234, tag=SrecTag.START_32)
        Start32Record(address=Address32(0x00001234))
    """

    if tag is None:
        tag = SrecTag.fit_start_tag(address)
    elif not tag.is_start():
        raise ValueError('invalid start tag')

    return RECORD_TYPES[tag](address)
