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
from abc import abstractmethod
from enum import Enum
from typing import Optional, TypeVar

from pyfilesource.common.file_io_registry import FileIORegistry
from pyfilesource.read.reader.iface.source_reader import SourceReader
from pyfilesource.source.source_exception import (FileNotExistException,
                                                  IllegalReaderStateException)

T = TypeVar('T')


class ReaderState(Enum):
    UNSTARTED = "unstarted"
    READING = "reading"
    EXHAUSTED = "exhausted"
    FAILED = "failed"
    CLOSED = "closed"


class FileBasedReader(SourceReader[T]):
    """
    Reader of a single file, or of a byte range of it.

    The channel is opened positioned at the start offset of the source and
    handed to _start_reading(), where subclasses move to the first record
    owned by the range. Reading stops at the first split point at or past the
    end offset; records that are not split points are always returned, since
    they continue a block begun inside the range.
    """

    def __init__(self, source):
        from pyfilesource.source.file_based_source import FileBasedSource, Mode

        if source.mode == Mode.WHOLE_FILE_OR_PATTERN:
            raise ValueError(f"{type(self).__name__} reads a single file, got a file pattern source {source}")
        self.source: FileBasedSource = source
        self.logger = logging.getLogger(__name__)
        self._channel = None
        self._state = ReaderState.UNSTARTED

    @abstractmethod
    def _start_reading(self, channel):
        """
        Prepares reading from a channel positioned at the start offset of the source.
        """

    @abstractmethod
    def _read_next_record(self) -> bool:
        """
        Reads the next record from the channel, returning False at the end of the input.
        """

    @abstractmethod
    def _is_at_split_point(self) -> bool:
        pass

    @abstractmethod
    def _get_current_offset(self) -> int:
        pass

    @abstractmethod
    def _get_current_value(self) -> T:
        pass

    def get_source(self):
        return self.source

    def state(self) -> ReaderState:
        return self._state

    def start(self) -> bool:
        from pyfilesource.source.file_based_source import Mode

        if self._state != ReaderState.UNSTARTED:
            raise IllegalReaderStateException(f"start() called on a reader that is {self._state.value}")

        source = self.source
        path = source.file_or_pattern
        try:
            file_io = FileIORegistry.get(path)
            try:
                if source.mode == Mode.SUBRANGE_OF_SINGLE_FILE:
                    self._channel = file_io.new_seekable_input_stream(path, source.start_offset)
                else:
                    self._channel = file_io.new_input_stream(path)
            except FileNotExistException:
                raise
            except FileNotFoundError as e:
                raise FileNotExistException(path) from e
            if self.logger.isEnabledFor(logging.DEBUG):
                self.logger.debug(f"Opened {path} for range [{source.start_offset}, {source.end_offset})")
            self._start_reading(self._channel)
        except Exception:
            self._fail()
            raise
        return self._read_within_range()

    def advance(self) -> bool:
        if self._state == ReaderState.EXHAUSTED:
            return False
        if self._state != ReaderState.READING:
            raise IllegalReaderStateException(f"advance() called on a reader that is {self._state.value}")
        return self._read_within_range()

    def _read_within_range(self) -> bool:
        try:
            available = self._read_next_record()
        except Exception:
            self._fail()
            raise

        if not available or (self._is_at_split_point()
                             and self._get_current_offset() >= self.source.end_offset):
            self._state = ReaderState.EXHAUSTED
            self._release()
            return False
        self._state = ReaderState.READING
        return True

    def get_current(self) -> T:
        self._check_has_current("get_current")
        return self._get_current_value()

    def get_current_offset(self) -> int:
        self._check_has_current("get_current_offset")
        return self._get_current_offset()

    def is_at_split_point(self) -> bool:
        self._check_has_current("is_at_split_point")
        return self._is_at_split_point()

    def get_fraction_consumed(self) -> Optional[float]:
        """
        Progress through the byte range of the source, or None if it can't be told.
        """
        if self._state == ReaderState.UNSTARTED:
            return 0.0
        if self._state == ReaderState.EXHAUSTED:
            return 1.0
        start, end = self.source.start_offset, self.source.end_offset
        if self._state != ReaderState.READING or end == self.source.OFFSET_INFINITY:
            return None
        if end <= start:
            return 1.0
        consumed = (self._get_current_offset() - start) / (end - start)
        return min(1.0, max(0.0, consumed))

    def close(self):
        if self._state in (ReaderState.UNSTARTED, ReaderState.READING):
            self._state = ReaderState.CLOSED
        self._release()

    def _check_has_current(self, method: str):
        if self._state != ReaderState.READING:
            raise IllegalReaderStateException(
                f"{method}() requires a current record, but the reader is {self._state.value}")

    def _fail(self):
        self._state = ReaderState.FAILED
        self._release()

    def _release(self):
        if self._channel is not None:
            channel, self._channel = self._channel, None
            channel.close()
