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
from typing import Optional, TypeVar, Union

from pyfilesource.common.options import Options
from pyfilesource.common.options.source_options import SourceOptions
from pyfilesource.read.decoder import RecordDecoder, Utf8Decoder
from pyfilesource.read.reader.delimited_record_reader import DelimitedRecordReader
from pyfilesource.read.reader.file_based_reader import FileBasedReader
from pyfilesource.read.reader.header_block_record_reader import HeaderBlockRecordReader
from pyfilesource.source.file_based_source import FileBasedSource

T = TypeVar('T')


def _to_bytes(value: Union[str, bytes, None]) -> Optional[bytes]:
    if isinstance(value, str):
        return value.encode('utf-8')
    return value


class DelimitedTextSource(FileBasedSource[T]):
    """
    Source of delimiter-terminated records, by default UTF-8 lines.

    If `header` is None every record is a split point. Otherwise the file is
    considered to consist of blocks beginning with a `header` record, which is
    not returned, and the first record after a header is a split point.
    """

    def __init__(self, file_or_pattern: str, min_shard_size: int,
                 start_offset: int = 0, end_offset: int = FileBasedSource.OFFSET_INFINITY,
                 is_pattern: bool = False, decoder: Optional[RecordDecoder[T]] = None,
                 delimiter: Union[str, bytes] = b'\n', header: Union[str, bytes, None] = None,
                 buffer_size: int = 64 * 1024):
        super().__init__(file_or_pattern, min_shard_size, start_offset, end_offset, is_pattern)
        self._decoder = decoder or Utf8Decoder()
        self._delimiter = _to_bytes(delimiter)
        self._header = _to_bytes(header)
        self._buffer_size = buffer_size
        if len(self._delimiter) != 1:
            raise ValueError(f"delimiter must be a single byte, got {delimiter!r}")

    @staticmethod
    def from_options(file_or_pattern: str, options: Union[Options, dict], is_pattern: bool = True,
                     decoder: Optional[RecordDecoder] = None) -> 'DelimitedTextSource':
        if isinstance(options, dict):
            options = Options(options)
        source_options = SourceOptions(options)
        return DelimitedTextSource(
            file_or_pattern,
            source_options.split_min_size(),
            is_pattern=is_pattern,
            decoder=decoder,
            delimiter=source_options.record_delimiter(),
            header=source_options.record_block_header(),
            buffer_size=source_options.reader_buffer_size(),
        )

    @property
    def header(self) -> Optional[bytes]:
        return self._header

    @property
    def delimiter(self) -> bytes:
        return self._delimiter

    def get_decoder(self) -> RecordDecoder[T]:
        return self._decoder

    def create_for_subrange_of_file(self, file_name: str, start: int, end: int) -> 'DelimitedTextSource[T]':
        return DelimitedTextSource(
            file_name, self.min_shard_size, start, end,
            decoder=self._decoder,
            delimiter=self._delimiter,
            header=self._header,
            buffer_size=self._buffer_size,
        )

    def create_single_file_reader(self) -> FileBasedReader[T]:
        if self._header is None:
            return DelimitedRecordReader(self, self._decoder, self._delimiter, self._buffer_size)
        return HeaderBlockRecordReader(self, self._decoder, self._header, self._delimiter, self._buffer_size)

    def _key(self) -> tuple:
        return super()._key() + (self._delimiter, self._header, type(self._decoder), self._buffer_size)
