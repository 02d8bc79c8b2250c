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

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

import pyarrow

from pyfilesource.source.source_exception import RecordDecodeException

T = TypeVar('T')


class RecordDecoder(Generic[T], ABC):
    """
    Turns the raw bytes of one delimited record, delimiter excluded, into a value.
    """

    @abstractmethod
    def decode(self, raw: bytes) -> T:
        """
        Decodes one record. Raises RecordDecodeException if the bytes are not a valid record.
        """

    @abstractmethod
    def arrow_type(self) -> pyarrow.DataType:
        """
        The arrow type of decoded values, used when reading into arrow tables.
        """


class BytesDecoder(RecordDecoder[bytes]):

    def decode(self, raw: bytes) -> bytes:
        return raw

    def arrow_type(self) -> pyarrow.DataType:
        return pyarrow.binary()


class Utf8Decoder(RecordDecoder[str]):

    def __init__(self, errors: str = 'strict'):
        self.errors = errors

    def decode(self, raw: bytes) -> str:
        try:
            return raw.decode('utf-8', self.errors)
        except UnicodeDecodeError as e:
            raise RecordDecodeException(raw, e) from e

    def arrow_type(self) -> pyarrow.DataType:
        return pyarrow.string()
