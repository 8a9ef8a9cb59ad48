"""Dictionary-style access to restructured metadata for legacy callers.

Older consumers treat metadata objects as plain dictionaries: they index
them, iterate them, merge into them and delete from them. `HashImitatable`
lets an object with declared attributes answer those calls while keeping
its attributes as the source of truth. Reads and writes of a declared name
go through the attribute; any other name lives in an extras dictionary.

Every other dictionary operation is applied generically: the object is
rendered to a plain dict (leaving out declared attributes that were never
assigned, so implicit defaults are not resurrected), the `dict` method runs
on that copy, and the resulting entries are written back. Entries the
operation removed are removed from the object as well.

`LegacyExampleGroupHash` applies the same machinery to a group's metadata
record so the old nested `example_group` layout keeps working:

    >>> legacy = LegacyExampleGroupHash(group_metadata)
    >>> legacy["described_class"] = Widget        # writes group_metadata
    >>> legacy["example_group"]["full_description"]  # reads the parent
"""

from collections.abc import Mapping, MutableMapping
from typing import Any, Dict, Optional, Tuple

from .types import EXAMPLE_GROUP_KEY, PARENT_GROUP_KEY


class HashImitatable:
    """Mixin that makes a class with declared attributes imitate a dict.

    Subclasses list their dictionary-visible attributes in
    `hash_attribute_names` and declare each one as a class attribute holding
    its default. An attribute counts as assigned once set on the instance.
    """

    hash_attribute_names: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        result = dict(self._extra_hash_attributes)
        for name in self.hash_attribute_names:
            result[name] = self._get_value(name)
        return result

    def __getitem__(self, key: Any) -> Any:
        self.issue_deprecation('__getitem__', key)

        if self._directly_supports_attribute(key):
            return self._get_value(key)
        return self._extra_hash_attributes.get(key)

    def __setitem__(self, key: Any, value: Any) -> None:
        self.issue_deprecation('__setitem__', key, value)
        self._store(key, value)

    def __eq__(self, other: Any) -> bool:
        self.issue_deprecation('__eq__', other)
        if isinstance(other, HashImitatable):
            other = other.to_dict()
        if not isinstance(other, Mapping):
            return NotImplemented
        return self.to_dict() == dict(other)

    __hash__ = None  # type: ignore[assignment]

    def __or__(self, other: Any) -> Dict[Any, Any]:
        """Merge into a new plain dict, like `dict | other`."""
        if not isinstance(other, Mapping):
            return NotImplemented
        self.issue_deprecation('__or__', other)
        merged = self.to_dict()
        merged.update(other)
        return merged

    def __ior__(self, other: Any) -> 'HashImitatable':
        self.update(other)
        return self

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.to_dict()!r})"

    def issue_deprecation(self, method_name: str, *args: Any) -> None:
        """Hook called on every dictionary-style access; no-op by default."""

    @property
    def _extra_hash_attributes(self) -> Dict[Any, Any]:
        extras = self.__dict__.get('_extras')
        if extras is None:
            extras = self.__dict__['_extras'] = {}
        return extras

    def _directly_supports_attribute(self, name: Any) -> bool:
        return name in self.hash_attribute_names

    def _attribute_assigned(self, name: str) -> bool:
        return name in self.__dict__

    def _get_value(self, name: str) -> Any:
        return getattr(self, name)

    def _set_value(self, name: str, value: Any) -> None:
        setattr(self, name, value)

    def _remove_value(self, name: str) -> None:
        self.__dict__.pop(name, None)

    def _store(self, key: Any, value: Any) -> None:
        if self._directly_supports_attribute(key):
            self._set_value(key, value)
        else:
            self._extra_hash_attributes[key] = value

    def _discard(self, key: Any) -> None:
        if self._directly_supports_attribute(key):
            self._remove_value(key)
        else:
            self._extra_hash_attributes.pop(key, None)

    def _assigned_dict(self) -> Dict[Any, Any]:
        result = self.to_dict()
        for name in self.hash_attribute_names:
            if not self._attribute_assigned(name):
                result.pop(name, None)
        return result

    def _apply(self, operation: Any, *args: Any, **kwargs: Any) -> Any:
        before = self._assigned_dict()
        working = dict(before)
        result = operation(working, *args, **kwargs)

        # apply mutations back to the object
        for name, value in working.items():
            self._store(name, value)
        for name in before:
            if name not in working:
                self._discard(name)

        return result


def _delete_item(mapping: Dict[Any, Any], key: Any) -> None:
    mapping.pop(key, None)


def _pop_item(mapping: Dict[Any, Any], key: Any, default: Any = None) -> Any:
    return mapping.pop(key, default)


_DICT_OPERATIONS = {
    'get': dict.get,
    'keys': dict.keys,
    'values': dict.values,
    'items': dict.items,
    'pop': _pop_item,
    'popitem': dict.popitem,
    'setdefault': dict.setdefault,
    'update': dict.update,
    'clear': dict.clear,
    'copy': dict.copy,
    '__contains__': dict.__contains__,
    '__iter__': dict.__iter__,
    '__len__': dict.__len__,
    '__delitem__': _delete_item,
}


def _imitate(method_name: str, operation: Any):
    def method(self, *args, **kwargs):
        self.issue_deprecation(method_name, *args)
        return self._apply(operation, *args, **kwargs)

    method.__name__ = method_name
    method.__qualname__ = f"HashImitatable.{method_name}"
    method.__doc__ = f"Run `dict.{method_name}` on to_dict() and write the changes back."
    return method


for _name, _operation in _DICT_OPERATIONS.items():
    setattr(HashImitatable, _name, _imitate(_name, _operation))

MutableMapping.register(HashImitatable)


class LegacyExampleGroupHash(HashImitatable):
    """Legacy `example_group` view of a group's metadata record.

    Every key reads and writes the wrapped record, except `example_group`,
    which exposes the parent group (as another legacy view) and, when
    assigned, replaces the record's `parent_example_group` link. The view
    never adds an `example_group` entry to the record.
    """

    def __init__(self, metadata: Dict[str, Any]):
        self._metadata = metadata

    @property
    def metadata(self) -> Dict[str, Any]:
        return self._metadata

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        if PARENT_GROUP_KEY in self._metadata:
            result[EXAMPLE_GROUP_KEY] = self._parent_view()
        result.update(self._metadata)
        return result

    def __getitem__(self, key: Any) -> Any:
        if key == EXAMPLE_GROUP_KEY:
            self.issue_deprecation('__getitem__', key)
            return self._parent_view()
        return super().__getitem__(key)

    def _parent_view(self) -> Optional['LegacyExampleGroupHash']:
        parent = self._metadata.get(PARENT_GROUP_KEY)
        if parent is None:
            return None
        return LegacyExampleGroupHash(parent)

    def _store(self, key: Any, value: Any) -> None:
        if key == EXAMPLE_GROUP_KEY:
            if isinstance(value, LegacyExampleGroupHash):
                value = value.metadata
            self._metadata[PARENT_GROUP_KEY] = value
        else:
            super()._store(key, value)

    def _discard(self, key: Any) -> None:
        # example_group is derived from the parent link and reappears on the next read
        if key != EXAMPLE_GROUP_KEY:
            super()._discard(key)

    def _directly_supports_attribute(self, name: Any) -> bool:
        return name != EXAMPLE_GROUP_KEY

    def _attribute_assigned(self, name: str) -> bool:
        return True

    def _get_value(self, name: str) -> Any:
        return self._metadata.get(name)

    def _set_value(self, name: str, value: Any) -> None:
        self._metadata[name] = value

    def _remove_value(self, name: str) -> None:
        self._metadata.pop(name, None)
