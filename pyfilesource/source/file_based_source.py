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
import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Generic, List, Tuple, TypeVar

from pyfilesource.common.range import ByteRange
from pyfilesource.read.decoder import RecordDecoder
from pyfilesource.read.reader.file_pattern_reader import FilePatternReader
from pyfilesource.read.reader.iface.source_reader import SourceReader
from pyfilesource.source.file_set_resolver import FileSetResolver
from pyfilesource.source.shard_planner import ShardPlanner
from pyfilesource.source.source_exception import InvalidRangeException

T = TypeVar('T')

logger = logging.getLogger(__name__)


class Mode(Enum):
    WHOLE_FILE_OR_PATTERN = "whole-file-or-pattern"
    SINGLE_FILE = "single-file"
    SUBRANGE_OF_SINGLE_FILE = "subrange-of-single-file"


class FileBasedSource(Generic[T], ABC):
    """
    Immutable description of what to read: a file pattern, a whole file, or a
    byte range [start_offset, end_offset) of one file.

    A pattern source expands to its matched files when it is estimated, split
    or read, and cannot be restricted to a byte range. Splitting and narrowing
    always create new sources, so a source can be shared freely between
    threads and shipped to other processes.
    """

    OFFSET_INFINITY = 2**63 - 1

    def __init__(self, file_or_pattern: str, min_shard_size: int, start_offset: int = 0,
                 end_offset: int = OFFSET_INFINITY, is_pattern: bool = False):
        if min_shard_size < 0:
            raise ValueError(f"min_shard_size must be non-negative, got {min_shard_size}")
        if start_offset < 0 or end_offset < 0:
            raise InvalidRangeException(
                f"Offsets must be non-negative, got [{start_offset}, {end_offset})", start_offset, end_offset)
        if start_offset > end_offset:
            raise InvalidRangeException(
                f"start_offset {start_offset} is after end_offset {end_offset}", start_offset, end_offset)
        if is_pattern and (start_offset != 0 or end_offset != self.OFFSET_INFINITY):
            raise InvalidRangeException(
                f"A file pattern cannot be restricted to a byte range, got {file_or_pattern} "
                f"with [{start_offset}, {end_offset})", start_offset, end_offset)

        self._file_or_pattern = file_or_pattern
        self._min_shard_size = min_shard_size
        self._start_offset = start_offset
        self._end_offset = end_offset
        self._is_pattern = is_pattern

    @property
    def file_or_pattern(self) -> str:
        return self._file_or_pattern

    @property
    def min_shard_size(self) -> int:
        return self._min_shard_size

    @property
    def start_offset(self) -> int:
        return self._start_offset

    @property
    def end_offset(self) -> int:
        return self._end_offset

    @property
    def is_pattern(self) -> bool:
        return self._is_pattern

    @property
    def mode(self) -> Mode:
        if self._is_pattern:
            return Mode.WHOLE_FILE_OR_PATTERN
        if self._start_offset == 0 and self._end_offset == self.OFFSET_INFINITY:
            return Mode.SINGLE_FILE
        return Mode.SUBRANGE_OF_SINGLE_FILE

    @abstractmethod
    def create_for_subrange_of_file(self, file_name: str, start: int, end: int) -> 'FileBasedSource[T]':
        """
        Creates a source of the same kind reading [start, end) of a single file.
        """

    @abstractmethod
    def create_single_file_reader(self):
        """
        Creates the reader of this source; only called on sources of a single file.
        """

    @abstractmethod
    def get_decoder(self) -> RecordDecoder[T]:
        pass

    def create_reader(self) -> SourceReader[T]:
        if self.mode == Mode.WHOLE_FILE_OR_PATTERN:
            return FilePatternReader(self)
        return self.create_single_file_reader()

    def get_estimated_size_bytes(self) -> int:
        """
        Sum of the matched file sizes for a pattern, otherwise the size of the
        byte range clipped to the file.
        """
        if self.mode == Mode.WHOLE_FILE_OR_PATTERN:
            return FileSetResolver.total_size(self._file_or_pattern)
        if self._end_offset != self.OFFSET_INFINITY:
            return self._end_offset - self._start_offset

        file_size = FileSetResolver.resolve_file(self._file_or_pattern).size
        clipped = ByteRange.intersection(ByteRange(self._start_offset, self._end_offset),
                                         ByteRange(0, file_size))
        return clipped.size() if clipped is not None else 0

    def split_into_shards(self, desired_shard_size: int) -> List['FileBasedSource[T]']:
        return ShardPlanner(self).split_into_shards(desired_shard_size)

    def split_at_offset(self, offset: int) -> Tuple['FileBasedSource[T]', 'FileBasedSource[T]']:
        """
        Returns new sources for [start_offset, offset) and [offset, end_offset),
        e.g. to hand the unread remainder of a reader at a split point to another worker.
        """
        if self.mode == Mode.WHOLE_FILE_OR_PATTERN:
            raise InvalidRangeException(f"Cannot split file pattern {self._file_or_pattern} at an offset")
        if not self._start_offset < offset < self._end_offset:
            raise InvalidRangeException(
                f"Split offset {offset} is not inside ({self._start_offset}, {self._end_offset})",
                self._start_offset, self._end_offset)
        primary = self.create_for_subrange_of_file(self._file_or_pattern, self._start_offset, offset)
        residual = self.create_for_subrange_of_file(self._file_or_pattern, offset, self._end_offset)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(f"Split {self} at {offset}")
        return primary, residual

    def _key(self) -> tuple:
        return (type(self), self._file_or_pattern, self._min_shard_size, self._start_offset,
                self._end_offset, self._is_pattern)

    def __eq__(self, other) -> bool:
        if not isinstance(other, FileBasedSource):
            return False
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __repr__(self) -> str:
        if self.mode == Mode.WHOLE_FILE_OR_PATTERN:
            return f"{type(self).__name__}({self._file_or_pattern})"
        end = "EOF" if self._end_offset == self.OFFSET_INFINITY else self._end_offset
        return f"{type(self).__name__}({self._file_or_pattern}, [{self._start_offset}, {end}))"
