################################################################################
#  Licensed to the Apache Software Foundation (ASF) under one
#  or more contributor license agreements.  See the NOTICE file
#  distributed with this work for additional information
#  regarding copyright ownership.  The ASF licenses this file
#  to you under the Apache License, Version 2.0 (the
#  "License"); you may not use this file except in compliance
#  with the License.  You may obtain a copy of the License at
#
#      http://www.apache.org/licenses/LICENSE-2.0
#
#  Unless required by applicable law or agreed to in writing, software
#  distributed under the License is distributed on an "AS IS" BASIS,
#  WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
#  See the License for the specific language governing permissions and
# limitations under the License.
################################################################################
from typing import Optional, TypeVar

from pyfilesource.read.decoder import RecordDecoder
from pyfilesource.read.reader.file_based_reader import FileBasedReader

T = TypeVar('T')


class DelimitedRecordReader(FileBasedReader[T]):
    """
    Reads records terminated by a single delimiter byte; every record is a split point.

    A reader of a range that does not start at byte 0 steps back one byte and
    drops everything up to and including the next delimiter. The first record
    returned is then the first one starting at or after the start offset: if
    the byte before the start offset is itself a delimiter, only that byte is
    dropped.
    """

    def __init__(self, source, decoder: RecordDecoder[T], delimiter: bytes = b'\n',
                 buffer_size: int = 64 * 1024):
        super().__init__(source)
        if len(delimiter) != 1:
            raise ValueError(f"delimiter must be a single byte, got {delimiter!r}")
        if buffer_size <= 0:
            raise ValueError(f"buffer_size must be positive, got {buffer_size}")
        self._decoder = decoder
        self._delimiter = delimiter
        self._buffer_size = buffer_size
        self._buffer = b''
        self._position = 0
        self._next_offset = 0
        self._raw_offset = 0
        self._raw: Optional[bytes] = None
        self._current_offset = 0
        self._current_value: Optional[T] = None

    def _start_reading(self, channel):
        from pyfilesource.source.file_based_source import Mode

        self._next_offset = self.source.start_offset
        if self.source.mode == Mode.SUBRANGE_OF_SINGLE_FILE and self.source.start_offset > 0:
            # Start one byte back so a record beginning exactly at the start offset is kept.
            channel.seek(self.source.start_offset - 1)
            self._next_offset = self.source.start_offset - 1
            self._next_offset += self._read_line(None)

    def _read_line(self, out: Optional[bytearray]) -> int:
        """
        Consumes bytes up to and including the next delimiter, appending all
        but the delimiter to `out`. Returns the number of bytes consumed, 0 at
        the end of the channel.
        """
        consumed = 0
        while True:
            if self._position >= len(self._buffer):
                self._buffer = self._channel.read(self._buffer_size)
                self._position = 0
                if not self._buffer:
                    return consumed
            end = self._buffer.find(self._delimiter, self._position)
            if end < 0:
                if out is not None:
                    out += self._buffer[self._position:]
                consumed += len(self._buffer) - self._position
                self._position = len(self._buffer)
                continue
            if out is not None:
                out += self._buffer[self._position:end]
            consumed += end + 1 - self._position
            self._position = end + 1
            return consumed

    def _read_raw_record(self) -> bool:
        """Reads the next record's bytes into _raw, and its offset into _raw_offset."""
        self._raw_offset = self._next_offset
        out = bytearray()
        consumed = self._read_line(out)
        if consumed == 0:
            self._raw = None
            return False
        self._next_offset += consumed
        self._raw = bytes(out)
        return True

    def _read_next_record(self) -> bool:
        if not self._read_raw_record():
            return False
        self._current_offset = self._raw_offset
        self._current_value = self._decoder.decode(self._raw)
        return True

    def _is_at_split_point(self) -> bool:
        return True

    def _get_current_offset(self) -> int:
        return self._current_offset

    def _get_current_value(self) -> T:
        return self._current_value
