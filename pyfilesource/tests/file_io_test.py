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
from unittest import mock

import fsspec
from pyarrow.fs import LocalFileSystem, S3FileSystem

from pyfilesource.common.file_io import FileIO
from pyfilesource.common.file_io_registry import FileIORegistry
from pyfilesource.common.options import Options
from pyfilesource.filesystem.fsspec_file_io import FsspecFileIO
from pyfilesource.filesystem.local_file_io import LocalFileIO
from pyfilesource.source.delimited_text_source import DelimitedTextSource
from pyfilesource.source.source_exception import (FileIOConfigurationException,
                                                  UnsupportedSchemeException)


class FileIOTest(unittest.TestCase):

    def setUp(self):
        self.tempdir = tempfile.mkdtemp()
        for name, content in (("a1.txt", b"a1\n"), ("a2.txt", b"a2\nlonger\n"), ("b.txt", b"b\n")):
            with open(os.path.join(self.tempdir, name), 'wb') as f:
                f.write(content)
        os.mkdir(os.path.join(self.tempdir, "a_dir"))

    def tearDown(self):
        shutil.rmtree(self.tempdir, ignore_errors=True)

    def _path(self, name: str) -> str:
        return os.path.join(self.tempdir, name)

    def test_s3_filesystem_path_conversion(self):
        file_io = FileIO("s3://bucket/warehouse", Options.from_none())
        self.assertIsInstance(file_io.filesystem, S3FileSystem)

        self.assertEqual(file_io.to_filesystem_path("s3://my-bucket/path/to/file.txt"),
                         "my-bucket/path/to/file.txt")
        self.assertEqual(file_io.to_filesystem_path("oss://my-bucket/path/to/file.txt"),
                         "my-bucket/path/to/file.txt")
        self.assertEqual(file_io.to_filesystem_path("s3://my-bucket"), "my-bucket")
        self.assertEqual(file_io.to_filesystem_path("s3:///path/to/file.txt"), "path/to/file.txt")
        self.assertEqual(file_io.to_filesystem_path("oss:///"), ".")
        self.assertEqual(file_io.to_filesystem_path("bucket/path/to/file.txt"), "bucket/path/to/file.txt")

    def test_local_filesystem_path_conversion(self):
        file_io = FileIO("file:///tmp/warehouse", Options.from_none())
        self.assertIsInstance(file_io.filesystem, LocalFileSystem)

        self.assertEqual(file_io.to_filesystem_path("file:///tmp/path/to/file.txt"), "/tmp/path/to/file.txt")
        self.assertEqual(file_io.to_filesystem_path("file://"), ".")
        self.assertEqual(file_io.to_filesystem_path("file:///"), "/")
        self.assertEqual(file_io.to_filesystem_path("/tmp/path/to/file.txt"), "/tmp/path/to/file.txt")
        self.assertEqual(file_io.to_filesystem_path("relative/path/to/file.txt"), "relative/path/to/file.txt")

    def test_unrecognized_scheme(self):
        with self.assertRaises(ValueError):
            FileIO("hdfs://namenode/warehouse", Options.from_none())

    def test_has_wildcard(self):
        self.assertTrue(FileIO.has_wildcard("/data/*.txt"))
        self.assertTrue(FileIO.has_wildcard("/data/file?"))
        self.assertTrue(FileIO.has_wildcard("/data/file[12]"))
        self.assertFalse(FileIO.has_wildcard("/data/file.txt"))

    def test_non_wildcard_prefix(self):
        self.assertEqual(FileIO._non_wildcard_prefix("/data/logs/*.txt"), "/data/logs")
        self.assertEqual(FileIO._non_wildcard_prefix("/data/*/x.txt"), "/data")
        self.assertEqual(FileIO._non_wildcard_prefix("/file*"), "/")
        self.assertEqual(FileIO._non_wildcard_prefix("file*"), "")

    def test_pyarrow_match(self):
        file_io = FileIO("file:///", Options.from_none())

        self.assertEqual(file_io.match(self._path("a*")), [self._path("a1.txt"), self._path("a2.txt")])
        self.assertEqual(file_io.match(self._path("?.txt")), [self._path("b.txt")])
        self.assertEqual(file_io.match("file://" + self._path("a[2]*")), ["file://" + self._path("a2.txt")])
        self.assertEqual(file_io.match(self._path("c*")), [])
        self.assertEqual(file_io.match(self._path("b.txt")), [self._path("b.txt")])
        self.assertEqual(file_io.match(self._path("c.txt")), [])
        self.assertEqual(file_io.match(self._path("a_dir")), [])

    def _create_tree(self):
        for name in ("tree/a/x.txt", "tree/a/b/x.txt", "tree/c/x.txt", "tree/x.txt"):
            os.makedirs(os.path.dirname(self._path(name)), exist_ok=True)
            with open(self._path(name), 'wb') as f:
                f.write(b"x\n")

    def test_pyarrow_match_nested(self):
        self._create_tree()
        file_io = FileIO("file:///", Options.from_none())

        self.assertEqual(file_io.match(self._path("tree/*/x.txt")),
                         [self._path("tree/a/x.txt"), self._path("tree/c/x.txt")])
        self.assertEqual(file_io.match("file://" + self._path("tree/*/x.txt")),
                         ["file://" + self._path("tree/a/x.txt"), "file://" + self._path("tree/c/x.txt")])
        self.assertEqual(file_io.match(self._path("tree/*/*/x.txt")), [self._path("tree/a/b/x.txt")])
        self.assertEqual(file_io.match(self._path("tree/*")), [self._path("tree/x.txt")])

    def test_local_match_nested(self):
        self._create_tree()
        file_io = LocalFileIO()

        self.assertEqual(file_io.match(self._path("tree/*/x.txt")),
                         [self._path("tree/a/x.txt"), self._path("tree/c/x.txt")])
        self.assertEqual(file_io.match(self._path("tree/*/*/x.txt")), [self._path("tree/a/b/x.txt")])
        self.assertEqual(file_io.match(self._path("tree/*")), [self._path("tree/x.txt")])

    def test_pyarrow_file_access(self):
        file_io = FileIO("file:///", Options.from_none())

        self.assertTrue(file_io.exists(self._path("a_dir")))
        self.assertFalse(file_io.is_file(self._path("a_dir")))
        self.assertEqual(file_io.get_file_size(self._path("a2.txt")), 10)
        with self.assertRaises(FileNotFoundError):
            file_io.get_file_size(self._path("missing"))

        stream = file_io.new_seekable_input_stream(self._path("a2.txt"), 3)
        try:
            self.assertEqual(stream.read(), b"longer\n")
        finally:
            stream.close()

    def test_local_match(self):
        file_io = LocalFileIO()

        self.assertEqual(file_io.match(self._path("a*")), [self._path("a1.txt"), self._path("a2.txt")])
        self.assertEqual(file_io.match("file://" + self._path("*.txt")),
                         ["file://" + self._path(n) for n in ("a1.txt", "a2.txt", "b.txt")])
        self.assertEqual(file_io.match(self._path("z*")), [])
        self.assertEqual(file_io.match(self._path("b.txt")), [self._path("b.txt")])
        self.assertEqual(file_io.match(self._path("missing.txt")), [])

    def test_local_file_access(self):
        file_io = LocalFileIO()

        self.assertTrue(file_io.is_file("file://" + self._path("a1.txt")))
        self.assertEqual(file_io.get_file_size(self._path("a2.txt")), 10)
        with self.assertRaises(FileNotFoundError):
            file_io.new_input_stream(self._path("missing"))
        with file_io.new_seekable_input_stream(self._path("a2.txt"), 3) as stream:
            self.assertEqual(stream.read(), b"longer\n")

    def test_read_through_pyarrow_file_io(self):
        FileIORegistry.initialize()
        try:
            FileIORegistry.register("file", FileIO("file:///", Options.from_none()))

            source = DelimitedTextSource(self._path("a*"), 1, is_pattern=True)
            self.assertEqual(list(source.create_reader()), ["a1", "a2", "longer"])
            records = []
            for shard in source.split_into_shards(2):
                records.extend(shard.create_reader())
            self.assertEqual(records, ["a1", "a2", "longer"])
        finally:
            FileIORegistry.teardown()


class FsspecFileIOTest(unittest.TestCase):

    ROOT = "/pyfilesource-test"

    def setUp(self):
        self.fs = fsspec.filesystem("memory")
        self.fs.pipe(f"{self.ROOT}/file1", b"one\ntwo\n")
        self.fs.pipe(f"{self.ROOT}/file2", b"three\nfour\nfive\n")
        self.fs.pipe(f"{self.ROOT}/other", b"six\n")
        FileIORegistry.initialize()
        FileIORegistry.register("memory", lambda: FsspecFileIO("memory"))

    def tearDown(self):
        FileIORegistry.teardown()
        self.fs.rm(self.ROOT, recursive=True)

    def test_match(self):
        file_io = FileIORegistry.get("memory://")

        matched = file_io.match(f"memory://{self.ROOT}/file*")
        self.assertEqual(len(matched), 2)
        self.assertTrue(all(p.startswith("memory://") for p in matched))
        self.assertTrue(matched[0].endswith("file1"))
        self.assertTrue(matched[1].endswith("file2"))
        self.assertEqual(file_io.match(f"memory://{self.ROOT}/missing"), [])
        self.assertEqual(file_io.get_file_size(matched[1]), 16)

    def test_read_pattern(self):
        source = DelimitedTextSource(f"memory://{self.ROOT}/file*", 1, is_pattern=True)

        self.assertEqual(source.get_estimated_size_bytes(), 24)
        self.assertEqual(list(source.create_reader()), ["one", "two", "three", "four", "five"])

        records = []
        for shard in source.split_into_shards(5):
            records.extend(shard.create_reader())
        self.assertEqual(records, ["one", "two", "three", "four", "five"])


class FileIORegistryTest(unittest.TestCase):

    def tearDown(self):
        FileIORegistry.teardown()

    def test_not_initialized(self):
        FileIORegistry.teardown()

        self.assertFalse(FileIORegistry.is_initialized())
        with self.assertRaises(FileIOConfigurationException):
            FileIORegistry.get("/tmp/file")
        with self.assertRaises(FileIOConfigurationException):
            FileIORegistry.register("mocked", LocalFileIO())
        with self.assertRaises(FileIOConfigurationException):
            DelimitedTextSource("/tmp/file", 1).get_estimated_size_bytes()

    def test_default_schemes(self):
        FileIORegistry.initialize()

        self.assertIsInstance(FileIORegistry.get("/tmp/file"), LocalFileIO)
        self.assertIsInstance(FileIORegistry.get("file:///tmp/file"), LocalFileIO)
        self.assertIs(FileIORegistry.get("/tmp/a"), FileIORegistry.get("/tmp/b"))
        self.assertIsInstance(FileIORegistry.get("s3://bucket/key").filesystem, S3FileSystem)

    def test_unsupported_scheme(self):
        FileIORegistry.initialize()

        with self.assertRaises(UnsupportedSchemeException) as cm:
            FileIORegistry.get("hdfs://namenode/file")
        self.assertEqual(cm.exception.scheme, "hdfs")
        with self.assertRaises(UnsupportedSchemeException):
            DelimitedTextSource("hdfs://namenode/file*", 1, is_pattern=True).split_into_shards(10)

    def test_factory_is_instantiated_once(self):
        FileIORegistry.initialize()
        factory = mock.Mock(return_value=LocalFileIO())
        FileIORegistry.register("mocked", factory)

        self.assertIs(FileIORegistry.get("mocked://a"), FileIORegistry.get("mocked://b"))
        factory.assert_called_once_with()

        FileIORegistry.unregister("mocked")
        with self.assertRaises(UnsupportedSchemeException):
            FileIORegistry.get("mocked://a")

    def test_scheme_of(self):
        self.assertEqual(FileIORegistry.scheme_of("/tmp/file"), "file")
        self.assertEqual(FileIORegistry.scheme_of("relative/file"), "file")
        self.assertEqual(FileIORegistry.scheme_of("C:\\data\\file"), "file")
        self.assertEqual(FileIORegistry.scheme_of("file:///tmp/file"), "file")
        self.assertEqual(FileIORegistry.scheme_of("s3a://bucket/key"), "s3a")


if __name__ == '__main__':
    unittest.main()
