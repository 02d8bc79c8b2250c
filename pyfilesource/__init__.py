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

from pyfilesource.common.file_io_registry import FileIORegistry
from pyfilesource.read.decoder import BytesDecoder, RecordDecoder, Utf8Decoder
from pyfilesource.read.read_builder import ReadBuilder
from pyfilesource.source.delimited_text_source import DelimitedTextSource
from pyfilesource.source.file_based_source import FileBasedSource, Mode
from pyfilesource.source.source_exception import (FileNotExistException,
                                                  IllegalReaderStateException,
                                                  InvalidRangeException,
                                                  SourceException)

__all__ = [
    'FileIORegistry',
    'FileBasedSource',
    'Mode',
    'DelimitedTextSource',
    'ReadBuilder',
    'RecordDecoder',
    'Utf8Decoder',
    'BytesDecoder',
    'SourceException',
    'FileNotExistException',
    'InvalidRangeException',
    'IllegalReaderStateException',
]
