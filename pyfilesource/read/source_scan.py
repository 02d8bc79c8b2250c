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
from pyfilesource.common.options.source_options import SourceOptions
from pyfilesource.read.plan import Plan


class SourceScan:
    """Plans the shards of a source."""

    def __init__(self, source, options: Optional[Options] = None, target_shard_size: Optional[int] = None):
        from pyfilesource.source.file_based_source import FileBasedSource

        self.source: FileBasedSource = source
        self.options = SourceOptions(options or Options.from_none())
        self.target_shard_size = target_shard_size

    def plan(self) -> Plan:
        target_shard_size = self.target_shard_size or self.options.split_target_size()
        shards = self.source.split_into_shards(target_shard_size)
        return Plan(shards)
