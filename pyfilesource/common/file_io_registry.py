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
import threading
from typing import Callable, Dict, Optional, Union
from urllib.parse import urlparse

from pyfilesource.common.file_io import FileIO
from pyfilesource.common.options import Options
from pyfilesource.source.source_exception import (FileIOConfigurationException,
                                                  UnsupportedSchemeException)

logger = logging.getLogger(__name__)


class FileIORegistry:
    """
    Process-wide mapping from path scheme to the FileIO serving it.

    The registry must be initialized before any source is resolved, estimated,
    split or read, and a path whose scheme has no registered FileIO is a
    configuration error. Factories are instantiated on first lookup.
    """

    _lock = threading.Lock()
    _factories: Dict[str, Callable[[], FileIO]] = {}
    _instances: Dict[str, FileIO] = {}
    _initialized = False

    @classmethod
    def initialize(cls, options: Optional[Options] = None):
        """Registers the default FileIOs: local files, plus S3 and OSS through pyarrow."""
        from pyfilesource.filesystem.local_file_io import LocalFileIO

        options = options or Options.from_none()
        with cls._lock:
            cls._factories = {"file": lambda: LocalFileIO(options)}
            for scheme in ("s3", "s3a", "s3n", "oss"):
                cls._factories[scheme] = cls._pyarrow_factory(scheme, options)
            cls._instances = {}
            cls._initialized = True
        logger.info(f"Initialized FileIO registry with schemes {sorted(cls._factories)}")

    @staticmethod
    def _pyarrow_factory(scheme: str, options: Options) -> Callable[[], FileIO]:
        return lambda: FileIO(f"{scheme}://", options)

    @classmethod
    def teardown(cls):
        with cls._lock:
            cls._factories = {}
            cls._instances = {}
            cls._initialized = False

    @classmethod
    def is_initialized(cls) -> bool:
        return cls._initialized

    @classmethod
    def register(cls, scheme: str, file_io: Union[FileIO, Callable[[], FileIO]]):
        """Registers a FileIO, or a factory creating one, for `scheme`, replacing any previous one."""
        with cls._lock:
            cls._check_initialized()
            if isinstance(file_io, FileIO):
                cls._factories[scheme] = lambda: file_io
                cls._instances[scheme] = file_io
            else:
                cls._factories[scheme] = file_io
                cls._instances.pop(scheme, None)

    @classmethod
    def unregister(cls, scheme: str):
        with cls._lock:
            cls._factories.pop(scheme, None)
            cls._instances.pop(scheme, None)

    @classmethod
    def get(cls, path: str) -> FileIO:
        scheme = cls.scheme_of(path)
        with cls._lock:
            cls._check_initialized()
            file_io = cls._instances.get(scheme)
            if file_io is None:
                factory = cls._factories.get(scheme)
                if factory is None:
                    raise UnsupportedSchemeException(scheme, path)
                file_io = factory()
                cls._instances[scheme] = file_io
            return file_io

    @staticmethod
    def scheme_of(path: str) -> str:
        scheme = urlparse(path).scheme
        # Single letters are Windows drive letters, not schemes
        if not scheme or len(scheme) == 1:
            return "file"
        return scheme

    @classmethod
    def _check_initialized(cls):
        if not cls._initialized:
            raise FileIOConfigurationException(
                "FileIORegistry is not initialized, call FileIORegistry.initialize() first")
