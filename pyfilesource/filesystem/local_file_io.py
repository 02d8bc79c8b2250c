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
import glob
import logging
import os
from pathlib import Path
from typing import List, Optional
from urllib.parse import urlparse

from pyfilesource.common.file_io import FileIO
from pyfilesource.common.options import Options


class LocalFileIO(FileIO):
    """
    Local file system implementation of FileIO, serving scheme-less paths and `file://` URIs.
    """

    def __init__(self, options: Optional[Options] = None):
        self.logger = logging.getLogger(__name__)
        self.properties = options or Options.from_none()
        self.scheme = "file"

    @staticmethod
    def create():
        return LocalFileIO()

    def _to_file(self, path: str) -> Path:
        parsed = urlparse(path)
        local_path = parsed.path if parsed.scheme == "file" else path

        if not local_path:
            return Path(".")

        return Path(local_path)

    def match(self, pattern: str) -> List[str]:
        if self.logger.isEnabledFor(logging.DEBUG):
            self.logger.debug(f"Invoking match for {pattern}")

        if not self.has_wildcard(pattern):
            return [pattern] if self.is_file(pattern) else []

        local_pattern = str(self._to_file(pattern))
        matched = sorted(p for p in glob.glob(local_pattern) if os.path.isfile(p))
        if pattern.startswith('file://'):
            return [f"file://{p}" for p in matched]
        return matched

    def exists(self, path: str) -> bool:
        return self._to_file(path).exists()

    def is_file(self, path: str) -> bool:
        return self._to_file(path).is_file()

    def get_file_size(self, path: str) -> int:
        file_path = self._to_file(path)
        if not file_path.exists():
            raise FileNotFoundError(f"File {path} does not exist")
        return file_path.stat().st_size

    def new_input_stream(self, path: str):
        if self.logger.isEnabledFor(logging.DEBUG):
            self.logger.debug(f"Invoking new_input_stream for {path}")

        file_path = self._to_file(path)
        if not file_path.exists():
            raise FileNotFoundError(f"File {path} does not exist")

        return open(file_path, 'rb')

    def to_filesystem_path(self, path: str) -> str:
        return str(self._to_file(path))
