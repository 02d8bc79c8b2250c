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

from abc import ABC, abstractmethod
from typing import Generic, Iterator, TypeVar

T = TypeVar('T')


class SourceReader(Generic[T], ABC):
    """
    A forward-only cursor over the records of a source.

    A reader is owned by a single worker: start() is called once, then
    advance() until it returns False. get_current() is only valid after a call
    that returned True. Exhaustion and failures are terminal, and a reader is
    never restarted; reading again means creating a new reader from the source.
    """

    @abstractmethod
    def start(self) -> bool:
        """
        Opens the input and reads the first record. Returns whether a record is available.
        """

    @abstractmethod
    def advance(self) -> bool:
        """
        Reads the next record. Returns whether a record is available.
        """

    @abstractmethod
    def get_current(self) -> T:
        """
        Returns the current record, raising IllegalReaderStateException if there is none.
        """

    @abstractmethod
    def get_current_offset(self) -> int:
        """
        Returns the byte offset at which the current record starts.
        """

    @abstractmethod
    def is_at_split_point(self) -> bool:
        """
        Returns whether the unread remainder could become a new source starting at the current record.
        """

    @abstractmethod
    def close(self):
        """
        Closes the reader and releases its input. Calling it more than once has no effect.
        """

    def __iter__(self) -> Iterator[T]:
        try:
            available = self.start()
            while available:
                yield self.get_current()
                available = self.advance()
        finally:
            self.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
