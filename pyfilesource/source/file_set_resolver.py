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
from dataclasses import dataclass
from typing import List

from pyfilesource.common.file_io import FileIO
from pyfilesource.common.file_io_registry import FileIORegistry
from pyfilesource.source.source_exception import FileNotExistException

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MatchedFile:
    """An existing regular file a path or pattern resolved to."""
    path: str
    size: int


class FileSetResolver:
    """
    Expands a literal path or glob pattern into the files it denotes.

    Nothing is cached between calls: every resolve() asks the FileIO again, so
    an estimation and a later split observe the file-set as it is at that time.
    """

    @staticmethod
    def resolve(file_or_pattern: str) -> List[MatchedFile]:
        file_io = FileIORegistry.get(file_or_pattern)
        paths = file_io.match(file_or_pattern)
        if not paths and not FileIO.has_wildcard(file_or_pattern):
            raise FileNotExistException(file_or_pattern)

        # A provider may match paths served by another scheme, e.g. a mocked
        # pattern expanding to local files.
        matched = [MatchedFile(path, FileIORegistry.get(path).get_file_size(path)) for path in paths]
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(f"Resolved {file_or_pattern} to {len(matched)} files")
        return matched

    @staticmethod
    def total_size(file_or_pattern: str) -> int:
        return sum(f.size for f in FileSetResolver.resolve(file_or_pattern))

    @staticmethod
    def resolve_file(path: str) -> MatchedFile:
        """Looks up a single concrete file, without interpreting wildcards."""
        file_io = FileIORegistry.get(path)
        if not file_io.is_file(path):
            raise FileNotExistException(path)
        return MatchedFile(path, file_io.get_file_size(path))
