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
import collections
import logging
from typing import Optional, TypeVar

from pyfilesource.read.reader.file_based_reader import FileBasedReader
from pyfilesource.read.reader.iface.source_reader import SourceReader
from pyfilesource.source.file_set_resolver import FileSetResolver
from pyfilesource.source.source_exception import IllegalReaderStateException

T = TypeVar('T')


class FilePatternReader(SourceReader[T]):
    """
    Reads every file a pattern source matches, one after another, each file in full.

    The pattern is resolved when the reader starts. Offsets and split points
    are those of the file currently being read.
    """

    def __init__(self, source):
        self.source = source
        self.logger = logging.getLogger(__name__)
        self.queue = collections.deque()
        self.current_reader: Optional[FileBasedReader[T]] = None
        self._started = False
        self._exhausted = False

    def start(self) -> bool:
        if self._started:
            raise IllegalReaderStateException("start() called on a reader that was already started")
        self._started = True

        matched = FileSetResolver.resolve(self.source.file_or_pattern)
        self.logger.info(f"Reading {len(matched)} files matching {self.source.file_or_pattern}")
        self.queue.extend(f.path for f in matched)
        return self._read_next()

    def advance(self) -> bool:
        if not self._started:
            raise IllegalReaderStateException("advance() called before start()")
        if self._exhausted:
            return False
        if self.current_reader is None:
            raise IllegalReaderStateException("advance() called on a closed reader")
        if self.current_reader.advance():
            return True
        return self._read_next()

    def _read_next(self) -> bool:
        while True:
            if self.current_reader is not None:
                self.current_reader.close()
                self.current_reader = None
            if not self.queue:
                self._exhausted = True
                return False
            path = self.queue.popleft()
            single_file_source = self.source.create_for_subrange_of_file(
                path, 0, self.source.OFFSET_INFINITY)
            self.current_reader = single_file_source.create_single_file_reader()
            if self.current_reader.start():
                return True

    def _current(self) -> FileBasedReader[T]:
        if self.current_reader is None:
            raise IllegalReaderStateException("The reader has no current record")
        return self.current_reader

    def get_current(self) -> T:
        return self._current().get_current()

    def get_current_offset(self) -> int:
        return self._current().get_current_offset()

    def is_at_split_point(self) -> bool:
        return self._current().is_at_split_point()

    def close(self):
        if self.current_reader is not None:
            self.current_reader.close()
            self.current_reader = None
        self.queue.clear()
