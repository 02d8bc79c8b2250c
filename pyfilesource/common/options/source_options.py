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
from typing import Optional

from pyfilesource.common.memory_size import MemorySize
from pyfilesource.common.options import Options
from pyfilesource.common.options.config_option import ConfigOption
from pyfilesource.common.options.config_options import ConfigOptions


class SourceOptions:
    """Options for planning and reading file based sources."""

    SOURCE_SPLIT_TARGET_SIZE: ConfigOption[MemorySize] = (
        ConfigOptions.key("source.split.target-size")
        .memory_type()
        .default_value(MemorySize.of_mebi_bytes(64))
        .with_description("Desired size of a shard when splitting a source.")
    )

    SOURCE_SPLIT_MIN_SIZE: ConfigOption[MemorySize] = (
        ConfigOptions.key("source.split.min-size")
        .memory_type()
        .default_value(MemorySize.of_mebi_bytes(1))
        .with_description("Files smaller than this are never split, and no shard is planned "
                          "smaller than this size.")
    )

    RECORD_DELIMITER: ConfigOption[str] = (
        ConfigOptions.key("source.record.delimiter")
        .string_type()
        .default_value("\n")
        .with_description("Single byte that terminates each record.")
    )

    RECORD_BLOCK_HEADER: ConfigOption[str] = (
        ConfigOptions.key("source.record.block-header")
        .string_type()
        .no_default_value()
        .with_description("Marker record that starts each block. When set, only the first "
                          "record of a block is a split point.")
    )

    READER_BUFFER_SIZE: ConfigOption[MemorySize] = (
        ConfigOptions.key("source.reader.buffer-size")
        .memory_type()
        .default_value(MemorySize.of_kibi_bytes(64))
        .with_description("Size of the read-ahead buffer used to scan for delimiters.")
    )

    READ_PARALLELISM: ConfigOption[int] = (
        ConfigOptions.key("source.read.parallelism")
        .int_type()
        .default_value(8)
        .with_description("Number of threads used to read shards in parallel.")
    )

    def __init__(self, options: Options):
        self.options = options

    @staticmethod
    def from_dict(options: dict) -> 'SourceOptions':
        return SourceOptions(Options(options))

    def split_target_size(self, default=None) -> int:
        return self.options.get(SourceOptions.SOURCE_SPLIT_TARGET_SIZE, default).get_bytes()

    def split_min_size(self, default=None) -> int:
        return self.options.get(SourceOptions.SOURCE_SPLIT_MIN_SIZE, default).get_bytes()

    def record_delimiter(self, default=None) -> bytes:
        return self.options.get(SourceOptions.RECORD_DELIMITER, default).encode('utf-8')

    def record_block_header(self, default=None) -> Optional[bytes]:
        header = self.options.get(SourceOptions.RECORD_BLOCK_HEADER, default)
        return header.encode('utf-8') if header is not None else None

    def reader_buffer_size(self, default=None) -> int:
        return self.options.get(SourceOptions.READER_BUFFER_SIZE, default).get_bytes()

    def read_parallelism(self, default=None) -> int:
        return self.options.get(SourceOptions.READ_PARALLELISM, default)
