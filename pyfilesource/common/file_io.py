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
import fnmatch
import logging
import os
import re
from typing import Any, Dict, List, Optional
from urllib.parse import urlparse

import pyarrow
import pyarrow.fs
from packaging.version import parse
from pyarrow._fs import FileSystem

from pyfilesource.common.options import Options
from pyfilesource.common.options.config import OssOptions, S3Options

WILDCARD_CHARS = ('*', '?', '[')


class FileIO:
    """
    Channel provider backed by a pyarrow FileSystem chosen by the scheme of `path`.

    A FileIO answers the questions a source asks of storage: which files a
    pattern denotes, how large a file is, and a readable (optionally
    positioned) binary stream for it.
    """

    def __init__(self, path: str, options: Optional[Options] = None):
        self.properties = options or Options.from_none()
        self.logger = logging.getLogger(__name__)
        self.scheme, _, _ = self.parse_location(path)
        if self.scheme in {"oss"}:
            self.filesystem = self._initialize_oss_fs()
        elif self.scheme in {"s3", "s3a", "s3n"}:
            self.filesystem = self._initialize_s3_fs()
        elif self.scheme in {"file"}:
            self.filesystem = self._initialize_local_fs()
        else:
            raise ValueError(f"Unrecognized filesystem type in URI: {self.scheme}")

    @staticmethod
    def parse_location(location: str):
        uri = urlparse(location)
        if not uri.scheme or len(uri.scheme) == 1:
            return "file", uri.netloc, os.path.abspath(location)
        return uri.scheme, uri.netloc, f"{uri.netloc}{uri.path}"

    @staticmethod
    def has_wildcard(path: str) -> bool:
        return any(c in path for c in WILDCARD_CHARS)

    @staticmethod
    def _create_s3_retry_config(
            max_attempts: int = 10,
            request_timeout: int = 60,
            connect_timeout: int = 60
    ) -> Dict[str, Any]:
        """
        AwsStandardS3RetryStrategy and timeout parameters are only available
        in PyArrow >= 8.0.0.
        """
        if parse(pyarrow.__version__) < parse("8.0.0"):
            return {}
        config = {
            'request_timeout': request_timeout,
            'connect_timeout': connect_timeout,
            'retry_strategy': pyarrow.fs.AwsStandardS3RetryStrategy(max_attempts=max_attempts),
        }
        return config

    def _initialize_oss_fs(self) -> FileSystem:
        from pyarrow.fs import S3FileSystem

        client_kwargs = {
            "access_key": self.properties.get(OssOptions.OSS_ACCESS_KEY_ID),
            "secret_key": self.properties.get(OssOptions.OSS_ACCESS_KEY_SECRET),
            "session_token": self.properties.get(OssOptions.OSS_SECURITY_TOKEN),
            "region": self.properties.get(OssOptions.OSS_REGION),
            "endpoint_override": self.properties.get(OssOptions.OSS_ENDPOINT),
            "force_virtual_addressing": True,
        }
        client_kwargs.update(self._create_s3_retry_config())
        return S3FileSystem(**client_kwargs)

    def _initialize_s3_fs(self) -> FileSystem:
        from pyarrow.fs import S3FileSystem

        client_kwargs = {
            "endpoint_override": self.properties.get(S3Options.S3_ENDPOINT),
            "access_key": self.properties.get(S3Options.S3_ACCESS_KEY_ID),
            "secret_key": self.properties.get(S3Options.S3_ACCESS_KEY_SECRET),
            "session_token": self.properties.get(S3Options.S3_SECURITY_TOKEN),
            "region": self.properties.get(S3Options.S3_REGION),
            "force_virtual_addressing": True,
        }
        client_kwargs.update(self._create_s3_retry_config())
        return S3FileSystem(**client_kwargs)

    def _initialize_local_fs(self) -> FileSystem:
        from pyarrow.fs import LocalFileSystem

        return LocalFileSystem()

    def match(self, pattern: str) -> List[str]:
        """
        Returns the regular files `pattern` denotes, sorted. A literal path
        matches itself if it exists; an unmatched pattern yields an empty list.
        """
        if self.logger.isEnabledFor(logging.DEBUG):
            self.logger.debug(f"Invoking match for {pattern}")

        if not self.has_wildcard(pattern):
            return [pattern] if self.is_file(pattern) else []

        fs_pattern = self.to_filesystem_path(pattern)
        base_dir = self._non_wildcard_prefix(fs_pattern)
        remainder = fs_pattern[len(base_dir):].lstrip('/')
        selector = pyarrow.fs.FileSelector(base_dir or '.', recursive='/' in remainder, allow_not_found=True)
        pattern_segments = fs_pattern.split('/')
        matched = sorted(
            info.path for info in self.filesystem.get_file_info(selector)
            if info.type == pyarrow.fs.FileType.File
            and self._matches_segments(info.path.split('/'), pattern_segments)
        )
        if urlparse(pattern).scheme == self.scheme:
            return [f"{self.scheme}://{p}" for p in matched]
        return matched

    @staticmethod
    def _matches_segments(path_segments: List[str], pattern_segments: List[str]) -> bool:
        # Wildcards never match across '/'
        if len(path_segments) != len(pattern_segments):
            return False
        return all(fnmatch.fnmatchcase(p, q) for p, q in zip(path_segments, pattern_segments))

    @staticmethod
    def _non_wildcard_prefix(fs_pattern: str) -> str:
        first = min(fs_pattern.index(c) for c in WILDCARD_CHARS if c in fs_pattern)
        head = fs_pattern[:first]
        if '/' not in head:
            return ''
        return head.rsplit('/', 1)[0] or '/'

    def get_file_status(self, path: str):
        path_str = self.to_filesystem_path(path)
        return self.filesystem.get_file_info([path_str])[0]

    def exists(self, path: str) -> bool:
        return self.get_file_status(path).type != pyarrow.fs.FileType.NotFound

    def is_file(self, path: str) -> bool:
        return self.get_file_status(path).type == pyarrow.fs.FileType.File

    def get_file_size(self, path: str) -> int:
        file_info = self.get_file_status(path)
        if file_info.type == pyarrow.fs.FileType.NotFound:
            raise FileNotFoundError(f"File {path} does not exist")
        if file_info.size is None:
            raise ValueError(f"File size not available for {path}")
        return file_info.size

    def new_input_stream(self, path: str):
        if self.logger.isEnabledFor(logging.DEBUG):
            self.logger.debug(f"Invoking new_input_stream for {path}")
        return self.filesystem.open_input_file(self.to_filesystem_path(path))

    def new_seekable_input_stream(self, path: str, start_offset: int):
        stream = self.new_input_stream(path)
        try:
            stream.seek(start_offset)
        except Exception:
            stream.close()
            raise
        return stream

    def to_filesystem_path(self, path: str) -> str:
        from pyarrow.fs import S3FileSystem

        parsed = urlparse(path)
        if not parsed.scheme or len(parsed.scheme) == 1:
            # No scheme, or a Windows drive letter
            return str(path)

        normalized_path = re.sub(r'/+', '/', parsed.path) if parsed.path else ''
        if isinstance(self.filesystem, S3FileSystem):
            # For S3, return "bucket/path" format
            path_part = normalized_path.lstrip('/')
            if parsed.netloc:
                return f"{parsed.netloc}/{path_part}" if path_part else parsed.netloc
            return path_part if path_part else '.'

        return normalized_path if normalized_path else '.'
