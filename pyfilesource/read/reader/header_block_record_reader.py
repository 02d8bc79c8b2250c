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
from pyfilesource.read.reader.delimited_record_reader import DelimitedRecordReader

T = TypeVar('T')


class HeaderBlockRecordReader(DelimitedRecordReader[T]):
    """
    Reads delimited records grouped in blocks, each block preceded by a header record.

    Headers are not returned as records, and only the first record of a block
    is a split point. E.g. if the header is "h" and the lines of the file are
    h, a, b, h, h, c then the records read are a, b, c, and a and c are split
    points.

    A split point reports the offset of its block's header rather than its
    own, so a block is read by the shard its header starts in, and a source
    split at that offset starts exactly at the header. Records before the
    first header of the range belong to a block owned by an earlier shard and
    are skipped.
    """

    def __init__(self, source, decoder: RecordDecoder[T], header: bytes, delimiter: bytes = b'\n',
                 buffer_size: int = 64 * 1024):
        super().__init__(source, decoder, delimiter, buffer_size)
        if not header:
            raise ValueError("header must not be empty")
        if delimiter in header:
            raise ValueError(f"header {header!r} must not contain the delimiter {delimiter!r}")
        self._header = header
        self._at_split_point = False
        self._block_offset: Optional[int] = None

    def _start_reading(self, channel):
        super()._start_reading(channel)

        # Ignore all records until the next header.
        while self._read_raw_record():
            if self._raw == self._header:
                self._block_offset = self._raw_offset
                return

    def _read_next_record(self) -> bool:
        # Consecutive headers delimit empty blocks, the last one opens the block read.
        block_offset, self._block_offset = self._block_offset, None
        while True:
            if not self._read_raw_record():
                return False
            if self._raw != self._header:
                break
            block_offset = self._raw_offset

        self._at_split_point = block_offset is not None
        self._current_offset = block_offset if self._at_split_point else self._raw_offset
        self._current_value = self._decoder.decode(self._raw)
        return True

    def _is_at_split_point(self) -> bool:
        return self._at_split_point
