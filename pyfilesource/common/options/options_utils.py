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

from typing import Any, Callable, Dict, Type

from pyfilesource.common.memory_size import MemorySize

_TRUE_STRINGS = ('true', '1', 'yes', 'on')
_FALSE_STRINGS = ('false', '0', 'no', 'off')


class OptionsUtils:
    """
    Converts raw option values, usually the strings of a user supplied dict,
    to the type declared by their ConfigOption.
    """

    @staticmethod
    def convert_value(value: Any, target_type: Type) -> Any:
        """
        Raises:
            ValueError: If the value can't be converted, or the type has no converter.
        """
        if value is None:
            return None
        # bool is an int subclass, but True is not a valid size or count
        if isinstance(value, bool) and target_type is not bool:
            raise ValueError(f"Cannot convert boolean {value} to {target_type.__name__}")
        if isinstance(value, target_type):
            return value

        converter = _CONVERTERS.get(target_type)
        if converter is None:
            raise ValueError(f"Unsupported option type: {target_type}")
        return converter(value)

    @staticmethod
    def convert_to_string(value: Any) -> str:
        if isinstance(value, MemorySize):
            return str(value.get_bytes())
        return str(value)

    @staticmethod
    def convert_to_boolean(value: Any) -> bool:
        if isinstance(value, str):
            normalized = value.strip().lower()
            if normalized in _TRUE_STRINGS:
                return True
            if normalized in _FALSE_STRINGS:
                return False
            raise ValueError(f"Cannot convert '{value}' to boolean")
        if isinstance(value, int):
            return value != 0
        raise ValueError(f"Cannot convert {type(value).__name__} to boolean")

    @staticmethod
    def convert_to_int(value: Any) -> int:
        if isinstance(value, str):
            return int(value.strip())
        if isinstance(value, float) and value.is_integer():
            return int(value)
        raise ValueError(f"Cannot convert {value!r} to int")

    @staticmethod
    def convert_to_memory_size(value: Any) -> MemorySize:
        """Accepts a byte count or a size expression such as "64mb"."""
        if isinstance(value, int):
            return MemorySize.of_bytes(value)
        if isinstance(value, str):
            return MemorySize.parse(value)
        raise ValueError(f"Cannot convert {type(value).__name__} to MemorySize")


_CONVERTERS: Dict[Type, Callable[[Any], Any]] = {
    str: OptionsUtils.convert_to_string,
    bool: OptionsUtils.convert_to_boolean,
    int: OptionsUtils.convert_to_int,
    MemorySize: OptionsUtils.convert_to_memory_size,
}
