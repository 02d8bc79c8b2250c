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

import os
import shutil
import tempfile
import unittest

from parameterized import parameterized

from pyfilesource.common.file_io_registry import FileIORegistry
from pyfilesource.common.range import ByteRange
from pyfilesource.source.delimited_text_source import DelimitedTextSource
from pyfilesource.source.file_based_source import FileBasedSource, Mode
from pyfilesource.source.shard_planner import ShardPlanner

INF = FileBasedSource.OFFSET_INFINITY


class ShardPlannerTest(unittest.TestCase):

    def setUp(self):
        self.tempdir = tempfile.mkdtemp()
        FileIORegistry.initialize()

    def tearDown(self):
        FileIORegistry.teardown()
        shutil.rmtree(self.tempdir, ignore_errors=True)

    def _create_file(self, file_name: str, size: int) -> str:
        path = os.path.join(self.tempdir, file_name)
        with open(path, 'wb') as f:
            f.write((b"abcdefg\n" * (size // 8 + 1))[:size])
        return path

    @staticmethod
    def _ranges(shards):
        return [ByteRange(s.start_offset, s.end_offset) for s in shards]

    @parameterized.expand([
        (size, desired, min_size)
        for size in (1, 7, 100, 1000, 4095, 4096, 4097, 40000, 123457)
        for desired in (1, 100, 400, 4096, 1 << 20)
        for min_size in (0, 1, 512)
    ])
    def test_compute_shard_ranges(self, size, desired, min_size):
        byte_range = ByteRange(1000, 1000 + size)
        ranges = ShardPlanner.compute_shard_ranges(byte_range, desired, min_size)

        self.assertTrue(ByteRange.covers_contiguously(ranges, byte_range))
        if size < min_size:
            self.assertEqual(ranges, [byte_range])
        else:
            shard_size = max(desired, min_size, 1)
            self.assertEqual(len(ranges), max(1, int(size / shard_size + 0.5)))
        sizes = [r.size() for r in ranges]
        self.assertLessEqual(max(sizes) - min(sizes), 1)

    def test_shard_count_rounds_half_up(self):
        self.assertEqual(len(ShardPlanner.compute_shard_ranges(ByteRange(0, 40000), 4096, 1)), 10)
        self.assertEqual(len(ShardPlanner.compute_shard_ranges(ByteRange(0, 1000), 400, 1)), 3)
        self.assertEqual(len(ShardPlanner.compute_shard_ranges(ByteRange(0, 1000), 300, 1)), 3)
        self.assertEqual(len(ShardPlanner.compute_shard_ranges(ByteRange(0, 1000), 5000, 1)), 1)

    def test_split_single_file(self):
        path = self._create_file("file", 40000)
        source = DelimitedTextSource(path, 1024)

        with self.assertLogs('pyfilesource.source.shard_planner', level='INFO') as cm:
            shards = source.split_into_shards(4096)
        self.assertEqual(len(shards), 10)
        self.assertIn("into 10 shards", cm.output[0])

        self.assertTrue(ByteRange.covers_contiguously(self._ranges(shards), ByteRange(0, 40000)))
        for shard in shards:
            self.assertEqual(shard.file_or_pattern, path)
            self.assertEqual(shard.mode, Mode.SUBRANGE_OF_SINGLE_FILE)
            self.assertEqual(shard.min_shard_size, 1024)
        self.assertEqual(sum(s.get_estimated_size_bytes() for s in shards), 40000)

    def test_min_shard_size_floors_desired_size(self):
        path = self._create_file("file", 10000)

        shards = DelimitedTextSource(path, 2500).split_into_shards(100)
        self.assertEqual(self._ranges(shards),
                         [ByteRange(0, 2500), ByteRange(2500, 5000), ByteRange(5000, 7500), ByteRange(7500, 10000)])

    def test_file_smaller_than_min_shard_size_is_not_split(self):
        path = self._create_file("file", 1000)

        shards = DelimitedTextSource(path, 1 << 20).split_into_shards(10)
        self.assertEqual(self._ranges(shards), [ByteRange(0, 1000)])

    def test_empty_file_has_no_shards(self):
        path = self._create_file("file", 0)

        self.assertEqual(DelimitedTextSource(path, 1).split_into_shards(10), [])

    def test_split_subrange(self):
        path = self._create_file("file", 4000)

        shards = DelimitedTextSource(path, 1, 1000, 3000).split_into_shards(500)
        self.assertEqual(len(shards), 4)
        self.assertTrue(ByteRange.covers_contiguously(self._ranges(shards), ByteRange(1000, 3000)))

    def test_split_subrange_clipped_to_file(self):
        path = self._create_file("file", 4000)

        shards = DelimitedTextSource(path, 1, 3000, INF).split_into_shards(500)
        self.assertEqual(self._ranges(shards), [ByteRange(3000, 3500), ByteRange(3500, 4000)])
        self.assertEqual(DelimitedTextSource(path, 1, 5000, 6000).split_into_shards(500), [])

    def test_split_file_pattern(self):
        self._create_file("file1", 1000)
        self._create_file("file2", 0)
        self._create_file("file3", 3000)
        self._create_file("other", 5000)

        source = DelimitedTextSource(os.path.join(self.tempdir, "file*"), 1, is_pattern=True)
        shards = source.split_into_shards(1000)

        self.assertEqual([os.path.basename(s.file_or_pattern) for s in shards],
                         ["file1", "file3", "file3", "file3"])
        self.assertTrue(all(s.mode == Mode.SUBRANGE_OF_SINGLE_FILE for s in shards))
        self.assertEqual(sum(s.get_estimated_size_bytes() for s in shards), source.get_estimated_size_bytes())

    def test_split_keeps_record_format(self):
        path = self._create_file("file", 4000)

        source = DelimitedTextSource(path, 1, delimiter=b"\t", header="h", buffer_size=128)
        for shard in source.split_into_shards(1000):
            self.assertEqual(shard.delimiter, b"\t")
            self.assertEqual(shard.header, b"h")
            self.assertIs(shard.get_decoder(), source.get_decoder())

    def test_invalid_desired_shard_size(self):
        path = self._create_file("file", 100)

        with self.assertRaises(ValueError):
            DelimitedTextSource(path, 1).split_into_shards(0)
        with self.assertRaises(ValueError):
            DelimitedTextSource(path, 1).split_into_shards(-10)


if __name__ == '__main__':
    unittest.main()
