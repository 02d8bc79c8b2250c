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

from pyfilesource.common.options import Options
from pyfilesource.read.source_read import SourceRead
from pyfilesource.read.source_scan import SourceScan


class ReadBuilder:
    """Entry point for planning and reading a file based source."""

    def __init__(self, source, options: Optional[Options] = None):
        from pyfilesource.source.file_based_source import FileBasedSource

        self.source: FileBasedSource = source
        self.options = options or Options.from_none()
        self._target_shard_size: Optional[int] = None

    def with_target_shard_size(self, size: int) -> 'ReadBuilder':
        """
        Set the desired size of a shard in bytes.
        This overrides the option 'source.split.target-size'.

        Example:
            builder.with_target_shard_size(256 * 1024 * 1024)  # 256MB
        """
        self._target_shard_size = size
        return self

    def new_scan(self) -> SourceScan:
        return SourceScan(self.source, self.options, self._target_shard_size)

    def new_read(self) -> SourceRead:
        return SourceRead(self.options)
