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


class SourceException(Exception):
    """Base exception of file based sources"""


class FileNotExistException(SourceException, FileNotFoundError):
    """A literal (non-pattern) path does not exist"""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"File {path} does not exist")


class InvalidRangeException(SourceException, ValueError):
    """Negative or inverted offsets, or a pattern combined with an explicit byte range"""

    def __init__(self, message: str, start_offset: int = None, end_offset: int = None):
        self.start_offset = start_offset
        self.end_offset = end_offset
        super().__init__(message)


class IllegalReaderStateException(SourceException, RuntimeError):
    """A reader method was called out of protocol order"""


class RecordDecodeException(SourceException):
    """The raw bytes of a record could not be decoded"""

    def __init__(self, raw: bytes, cause: Exception):
        self.raw = raw
        super().__init__(f"Failed to decode record of {len(raw)} bytes: {cause}")


class FileIOConfigurationException(SourceException):
    """The channel provider registry is missing or misconfigured"""


class UnsupportedSchemeException(FileIOConfigurationException):
    """No channel provider is registered for a path scheme"""

    def __init__(self, scheme: str, path: str):
        self.scheme = scheme
        self.path = path
        super().__init__(f"No FileIO registered for scheme '{scheme}' of path {path}")
