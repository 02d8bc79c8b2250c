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
from typing import List

from pyfilesource.common.range import ByteRange
from pyfilesource.source.file_set_resolver import FileSetResolver, MatchedFile


class ShardPlanner:
    """
    Partitions the files of a source into contiguous byte-range shards.

    Shard boundaries are plain byte offsets; readers move them onto record
    boundaries when they start.
    """

    def __init__(self, source):
        from pyfilesource.source.file_based_source import FileBasedSource

        self.source: FileBasedSource = source
        self.logger = logging.getLogger(__name__)

    def split_into_shards(self, desired_shard_size: int) -> List:
        if desired_shard_size <= 0:
            raise ValueError(f"desired_shard_size must be positive, got {desired_shard_size}")

        source = self.source
        requested = ByteRange(source.start_offset, source.end_offset)
        shards = []
        for matched_file in self._resolve_files():
            clipped = ByteRange.intersection(requested, ByteRange(0, matched_file.size))
            if clipped is None:
                if self.logger.isEnabledFor(logging.DEBUG):
                    self.logger.debug(f"Skipping {matched_file.path}: nothing to read in {requested}")
                continue
            for shard_range in self.compute_shard_ranges(clipped, desired_shard_size, source.min_shard_size):
                shards.append(source.create_for_subrange_of_file(
                    matched_file.path, shard_range.start, shard_range.end))

        self.logger.info(f"Split {source.file_or_pattern} into {len(shards)} shards "
                         f"(desired shard size {desired_shard_size} bytes)")
        return shards

    def _resolve_files(self) -> List[MatchedFile]:
        source = self.source
        if source.is_pattern:
            return FileSetResolver.resolve(source.file_or_pattern)
        return [FileSetResolver.resolve_file(source.file_or_pattern)]

    @staticmethod
    def compute_shard_ranges(byte_range: ByteRange, desired_shard_size: int,
                             min_shard_size: int) -> List[ByteRange]:
        """
        Cuts a non-empty range into round(size / shard_size) (at least one)
        contiguous, non-empty pieces of near-equal size. The minimum shard
        size also floors the desired one, and a range smaller than it is
        never cut.
        """
        size = byte_range.size()
        if size < min_shard_size:
            return [byte_range]

        shard_size = max(desired_shard_size, min_shard_size, 1)
        # round half up
        shard_count = max(1, (2 * size + shard_size) // (2 * shard_size))
        bounds = [byte_range.start + i * size // shard_count for i in range(shard_count)]
        bounds.append(byte_range.end)
        return [ByteRange(bounds[i], bounds[i + 1]) for i in range(shard_count)]
