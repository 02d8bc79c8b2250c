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

import pyarrow as pa

from pyfilesource.common.file_io_registry import FileIORegistry
from pyfilesource.common.options import Options
from pyfilesource.read.decoder import BytesDecoder
from pyfilesource.read.read_builder import ReadBuilder
from pyfilesource.read.source_read import RECORD_COLUMN
from pyfilesource.source.delimited_text_source import DelimitedTextSource


class ReadBuilderTest(unittest.TestCase):

    @classmethod
    def setUpClass(cls):
        cls.tempdir = tempfile.mkdtemp()
        cls.data = [f"{i:07d}" for i in range(5000)]
        cls.path = os.path.join(cls.tempdir, "file1")
        with open(cls.path, 'w', encoding='utf-8', newline='') as f:
            for line in cls.data:
                f.write(line + '\n')
        cls.data2 = [f"x{i}" for i in range(100)]
        with open(os.path.join(cls.tempdir, "file2"), 'w', encoding='utf-8', newline='') as f:
            for line in cls.data2:
                f.write(line + '\n')

    @classmethod
    def tearDownClass(cls):
        shutil.rmtree(cls.tempdir, ignore_errors=True)

    def setUp(self):
        FileIORegistry.initialize()

    def tearDown(self):
        FileIORegistry.teardown()

    def test_plan_with_target_shard_size(self):
        source = DelimitedTextSource(self.path, 1024)
        plan = ReadBuilder(source).with_target_shard_size(4096).new_scan().plan()

        self.assertEqual(len(plan.shards()), 10)
        self.assertEqual(plan.estimated_size_bytes(), 40000)

    def test_plan_with_options(self):
        source = DelimitedTextSource(self.path, 1024)
        options = Options({"source.split.target-size": "8kb"})

        self.assertEqual(len(ReadBuilder(source, options).new_scan().plan().shards()), 5)
        self.assertEqual(len(ReadBuilder(source).new_scan().plan().shards()), 1)

    def test_to_iterator(self):
        read_builder = ReadBuilder(DelimitedTextSource(self.path, 1024)).with_target_shard_size(1000)
        shards = read_builder.new_scan().plan().shards()

        self.assertEqual(list(read_builder.new_read().to_iterator(shards)), self.data)

    def test_to_arrow(self):
        read_builder = ReadBuilder(DelimitedTextSource(self.path, 1024)).with_target_shard_size(3000)
        shards = read_builder.new_scan().plan().shards()

        table = read_builder.new_read().to_arrow(shards)
        self.assertEqual(table.schema, pa.schema([(RECORD_COLUMN, pa.string())]))
        self.assertEqual(table.num_rows, 5000)
        self.assertEqual(table.column(RECORD_COLUMN).to_pylist(), self.data)

    def test_to_arrow_bytes(self):
        source = DelimitedTextSource(os.path.join(self.tempdir, "file2"), 1, decoder=BytesDecoder())
        read_builder = ReadBuilder(source)

        table = read_builder.new_read().to_arrow(read_builder.new_scan().plan().shards())
        self.assertEqual(table.schema.field(RECORD_COLUMN).type, pa.binary())
        self.assertEqual(table.column(RECORD_COLUMN).to_pylist(), [d.encode() for d in self.data2])

    def test_to_arrow_without_shards(self):
        table = ReadBuilder(DelimitedTextSource(self.path, 1)).new_read().to_arrow([])

        self.assertEqual(table.num_rows, 0)
        self.assertEqual(table.schema.names, [RECORD_COLUMN])

    def test_read_parallel(self):
        read_builder = ReadBuilder(DelimitedTextSource(self.path, 1)).with_target_shard_size(777)
        shards = read_builder.new_scan().plan().shards()
        self.assertGreater(len(shards), 50)

        self.assertEqual(read_builder.new_read().read_parallel(shards, max_workers=4), self.data)

    def test_read_parallel_file_pattern(self):
        options = Options({"source.read.parallelism": "2"})
        source = DelimitedTextSource(os.path.join(self.tempdir, "file*"), 1, is_pattern=True)
        read_builder = ReadBuilder(source, options).with_target_shard_size(2048)
        shards = read_builder.new_scan().plan().shards()

        self.assertEqual(read_builder.new_read().read_parallel(shards), self.data + self.data2)


if __name__ == '__main__':
    unittest.main()
