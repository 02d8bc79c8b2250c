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
from typing import List, Optional

import fsspec
from fsspec import AbstractFileSystem

from pyfilesource.common.file_io import FileIO
from pyfilesource.common.options import Options


class FsspecFileIO(FileIO):
    """
    FileIO over any fsspec protocol, e.g. ``memory`` or a cloud store whose
    fsspec driver is installed. Paths returned by match carry the protocol so
    they resolve back to this FileIO through the registry.
    """

    def __init__(self, protocol: str, options: Optional[Options] = None, **storage_options):
        self.logger = logging.getLogger(__name__)
        self.properties = options or Options.from_none()
        self.scheme = protocol
        self.filesystem: AbstractFileSystem = fsspec.filesystem(protocol, **storage_options)

    def match(self, pattern: str) -> List[str]:
        if self.logger.isEnabledFor(logging.DEBUG):
            self.logger.debug(f"Invoking match for {pattern}")

        if not self.has_wildcard(pattern):
            return [pattern] if self.is_file(pattern) else []

        matched = sorted(
            path for path, info in self.filesystem.glob(pattern, detail=True).items()
            if info.get("type") == "file"
        )
        return [self.filesystem.unstrip_protocol(p) for p in matched]

    def exists(self, path: str) -> bool:
        return self.filesystem.exists(path)

    def is_file(self, path: str) -> bool:
        return self.filesystem.isfile(path)

    def get_file_size(self, path: str) -> int:
        if not self.filesystem.exists(path):
            raise FileNotFoundError(f"File {path} does not exist")
        return self.filesystem.size(path)

    def new_input_stream(self, path: str):
        if self.logger.isEnabledFor(logging.DEBUG):
            self.logger.debug(f"Invoking new_input_stream for {path}")
        return self.filesystem.open(path, 'rb')

    def to_filesystem_path(self, path: str) -> str:
        return self.filesystem._strip_protocol(path)
