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
from concurrent.futures import ThreadPoolExecutor
from typing import Iterator, List, Optional

import pyarrow

from pyfilesource.common.options import Options
from pyfilesource.common.options.source_options import SourceOptions

RECORD_COLUMN = "record"


class SourceRead:
    """Reads the records of planned shards."""

    def __init__(self, options: Optional[Options] = None):
        self.options = SourceOptions(options or Options.from_none())

    def to_iterator(self, shards: List) -> Iterator:
        def _record_generator():
            for shard in shards:
                yield from shard.create_reader()

        return _record_generator()

    def to_arrow_batch_reader(self, shards: List) -> pyarrow.RecordBatchReader:
        schema = self._schema(shards)
        batch_iterator = self._arrow_batch_generator(shards, schema)
        return pyarrow.RecordBatchReader.from_batches(schema, batch_iterator)

    def to_arrow(self, shards: List) -> pyarrow.Table:
        return self.to_arrow_batch_reader(shards).read_all()

    def read_parallel(self, shards: List, max_workers: Optional[int] = None) -> List:
        """
        Reads each shard with its own reader on a thread pool, returning all
        records in shard order.
        """
        max_workers = max_workers or self.options.read_parallelism()

        def _read_shard(shard) -> List:
            return list(shard.create_reader())

        records = []
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            for shard_records in executor.map(_read_shard, shards):
                records.extend(shard_records)
        return records

    def _arrow_batch_generator(self, shards: List, schema: pyarrow.Schema) -> Iterator[pyarrow.RecordBatch]:
        chunk_size = 65536

        for shard in shards:
            chunk = []
            for record in shard.create_reader():
                chunk.append(record)
                if len(chunk) >= chunk_size:
                    yield pyarrow.RecordBatch.from_pydict({RECORD_COLUMN: chunk}, schema=schema)
                    chunk = []
            if chunk:
                yield pyarrow.RecordBatch.from_pydict({RECORD_COLUMN: chunk}, schema=schema)

    @staticmethod
    def _schema(shards: List) -> pyarrow.Schema:
        arrow_type = shards[0].get_decoder().arrow_type() if shards else pyarrow.string()
        return pyarrow.schema([(RECORD_COLUMN, arrow_type)])
