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
"""
Human readable byte sizes used by shard planning and reader buffers.

A pure number is interpreted as bytes; otherwise one of the binary units
b, k/kb, m/mb, g/gb, t/tb (case insensitive) may follow the number,
optionally separated by whitespace, e.g. "64mb" or "1 kb".
"""

import re

_UNITS = {
    "": 1,
    "b": 1,
    "bytes": 1,
    "k": 1 << 10,
    "kb": 1 << 10,
    "kibibytes": 1 << 10,
    "m": 1 << 20,
    "mb": 1 << 20,
    "mebibytes": 1 << 20,
    "g": 1 << 30,
    "gb": 1 << 30,
    "gibibytes": 1 << 30,
    "t": 1 << 40,
    "tb": 1 << 40,
    "tebibytes": 1 << 40,
}

_PATTERN = re.compile(r'^(\d+)\s*([a-zA-Z]*)$')


class MemorySize:
    """A number of bytes, parsed from or rendered to a unit expression."""

    def __init__(self, bytes: int):
        if bytes < 0:
            raise ValueError("bytes must be >= 0")
        self.bytes = bytes

    @staticmethod
    def of_bytes(bytes: int) -> 'MemorySize':
        return MemorySize(bytes)

    @staticmethod
    def of_kibi_bytes(kibi_bytes: int) -> 'MemorySize':
        return MemorySize(kibi_bytes << 10)

    @staticmethod
    def of_mebi_bytes(mebi_bytes: int) -> 'MemorySize':
        return MemorySize(mebi_bytes << 20)

    def get_bytes(self) -> int:
        return self.bytes

    @staticmethod
    def parse(text: str) -> 'MemorySize':
        return MemorySize(MemorySize.parse_bytes(text))

    @staticmethod
    def parse_bytes(text: str) -> int:
        """
        Parses a size expression into a number of bytes.

        Raises:
            ValueError: If the expression is empty, malformed or uses an unknown unit.
        """
        if text is None:
            raise ValueError("text cannot be None")
        trimmed = text.strip()
        if not trimmed:
            raise ValueError("argument is an empty- or whitespace-only string")

        match = _PATTERN.match(trimmed)
        if not match:
            raise ValueError(f"cannot parse memory size: '{text}'")

        unit = match.group(2).lower()
        if unit not in _UNITS:
            raise ValueError(
                f"Memory size unit '{unit}' does not match any of the recognized units: "
                f"{sorted(u for u in _UNITS if u)}")
        return int(match.group(1)) * _UNITS[unit]

    def __eq__(self, other) -> bool:
        if not isinstance(other, MemorySize):
            return False
        return self.bytes == other.bytes

    def __hash__(self) -> int:
        return hash(self.bytes)

    def __lt__(self, other: 'MemorySize') -> bool:
        return self.bytes < other.bytes

    def __str__(self) -> str:
        if self.bytes == 0:
            return "0 bytes"
        for name, multiplier in (("tb", 1 << 40), ("gb", 1 << 30), ("mb", 1 << 20), ("kb", 1 << 10)):
            if self.bytes % multiplier == 0:
                return f"{self.bytes // multiplier} {name}"
        return f"{self.bytes} bytes"

    def __repr__(self) -> str:
        return f"MemorySize({self.bytes})"
