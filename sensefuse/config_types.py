"""Typed configuration entries and groups that load from JSON-like data."""

import threading
from collections.abc import Mapping

from sensefuse.event_handlers import EventHandlerList


class ConfigError(Exception):
    """Raised when configuration data does not fit the configuration layout."""


class _ValueType:
    """Describes how raw configuration data is converted for one entry type."""

    __slots__ = ("name", "default", "convert")

    def __init__(self, name, default, convert):
        self.name = name
        self.default = default
        self.convert = convert

    def __repr__(self):
        return f"<config type {self.name}>"


def _to_bool(value):
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        text = value.strip().lower()
        if text in ("true", "1"):
            return True
        if text in ("false", "0"):
            return False
    elif isinstance(value, int) and value in (0, 1):
        return bool(value)
    raise ValueError(f"not a boolean: {value!r}")


def _int_range(low, high):
    def convert(value):
        if isinstance(value, bool):
            raise ValueError("boolean is not an integer")
        if isinstance(value, float):
            if not value.is_integer():
                raise ValueError(f"not an integer: {value!r}")
            value = int(value)
        elif isinstance(value, str):
            value = int(value.strip())
        elif not isinstance(value, int):
            raise ValueError(f"not an integer: {value!r}")
        if not low <= value <= high:
            raise ValueError(f"{value} outside [{low}, {high}]")
        return value

    return convert


def _to_float(value):
    if isinstance(value, bool):
        raise ValueError("boolean is not a number")
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        return float(value.strip())
    raise ValueError(f"not a number: {value!r}")


def _to_str(value):
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    raise ValueError(f"not a string: {value!r}")


BOOL = _ValueType("bool", False, _to_bool)
INT = _ValueType("int", 0, _int_range(-(2**31), 2**31 - 1))
UINT = _ValueType("unsigned int", 0, _int_range(0, 2**32 - 1))
UINT16 = _ValueType("uint16", 0, _int_range(0, 2**16 - 1))
SIZE = _ValueType("size", 0, _int_range(0, 2**64 - 1))
FLOAT = _ValueType("float", 0.0, _to_float)
STRING = _ValueType("string", "", _to_str)

_BY_PYTHON_TYPE = {bool: BOOL, int: INT, float: FLOAT, str: STRING}


class ConfigEntry:
    """A single typed configuration value; calling the entry returns the value."""

    def __init__(self, name, parent, value_type):
        if isinstance(value_type, type):
            try:
                value_type = _BY_PYTHON_TYPE[value_type]
            except KeyError:
                raise TypeError(f"unsupported configuration type {value_type!r}") from None
        elif not isinstance(value_type, _ValueType):
            raise TypeError(f"unsupported configuration type {value_type!r}")
        self.name = name
        self._type = value_type
        self._value = value_type.default
        self._lock = threading.Lock()
        self._handlers = EventHandlerList()
        if parent is not None:
            parent.register_entry(name, self)

    def __call__(self):
        with self._lock:
            return self._value

    def is_group(self):
        """Entries are never groups."""
        return False

    def set(self, value):
        """Convert and store ``value``, then notify handlers with the new value."""
        try:
            converted = self._type.convert(value)
        except (ValueError, TypeError) as exc:
            raise ConfigError(
                f"invalid value {value!r} for {self.name!r} ({self._type.name})"
            ) from exc
        with self._lock:
            self._value = converted
        self._handlers.invoke(converted)

    def can_set(self, value):
        """Return whether ``value`` can be converted to this entry's type."""
        try:
            self._type.convert(value)
        except (ValueError, TypeError):
            return False
        return True

    def get_node(self):
        """Return the current value as JSON-compatible data."""
        return self()

    def add_handler(self, handler):
        """Call ``handler(value)`` whenever this entry is set; returns a removal handle."""
        return self._handlers.add(handler)

    def remove_handler(self, handle):
        """Remove a handler added with :meth:`add_handler`."""
        self._handlers.remove(handle)


class ConfigGroup:
    """A named collection of entries and nested groups."""

    def __init__(self, name, parent):
        self.name = name
        self._entries = {}
        self._handlers = EventHandlerList()
        if parent is not None:
            parent.register_entry(name, self)

    def register_entry(self, name, entry):
        """Add a member entry or group under ``name``."""
        if name in self._entries:
            raise ConfigError(f"duplicate configuration entry {name!r} in {self.name!r}")
        self._entries[name] = entry

    def is_group(self):
        """Groups are always groups."""
        return True

    def can_set(self, value):
        """Return whether every key of ``value`` names a member that accepts its data."""
        if not isinstance(value, Mapping):
            return False
        return all(
            key in self._entries and self._entries[key].can_set(sub)
            for key, sub in value.items()
        )

    def set(self, value):
        """Update the members named in ``value``; nothing changes if any part is invalid."""
        if not self.can_set(value):
            raise ConfigError(f"invalid configuration data for group {self.name!r}")
        for key, sub in value.items():
            self._entries[key].set(sub)
        if value:
            self._handlers.invoke()

    def get_node(self):
        """Return the members as a nested dictionary."""
        return {name: entry.get_node() for name, entry in self._entries.items()}

    def add_handler(self, handler):
        """Call ``handler()`` whenever members of this group are set; returns a removal handle."""
        return self._handlers.add(handler)

    def remove_handler(self, handle):
        """Remove a handler added with :meth:`add_handler`."""
        self._handlers.remove(handle)