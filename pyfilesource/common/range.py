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
from typing import List, Optional

import portion


class ByteRange:
    """
    A half-open byte range [start, end) based on the portion library.
    """

    def __init__(self, start: int, end: int):
        self.start = start
        self.end = end
        self._interval = portion.closedopen(start, end)

    def is_empty(self) -> bool:
        return self._interval.empty

    def size(self) -> int:
        return 0 if self.is_empty() else self.end - self.start

    @staticmethod
    def intersection(range1: 'ByteRange', range2: 'ByteRange') -> Optional['ByteRange']:
        """
        Returns the overlap of two ranges, or None if they don't overlap.
        """
        if range1 is None or range2 is None:
            return None

        intersect = range1._interval & range2._interval
        if intersect.empty:
            return None

        atomic = list(intersect)[0]
        return ByteRange(atomic.lower, atomic.upper)

    @staticmethod
    def covers_contiguously(ranges: List['ByteRange'], expected: 'ByteRange') -> bool:
        """True if `ranges`, in order, tile `expected` without gaps or overlaps."""
        position = expected.start
        union = portion.empty()
        for r in ranges:
            if r.start != position or r.is_empty():
                return False
            union = union | r._interval
            position = r.end
        return position == expected.end and union == expected._interval

    def __eq__(self, other) -> bool:
        if not isinstance(other, ByteRange):
            return False
        return self.start == other.start and self.end == other.end

    def __hash__(self) -> int:
        return hash((self.start, self.end))

    def __repr__(self):
        return f"ByteRange({self.start}, {self.end})"

    def __str__(self):
        return f"[{self.start}, {self.end})"
