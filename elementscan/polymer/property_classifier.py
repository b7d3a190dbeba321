"""Getter/setter classification for declaration bodies."""

from __future__ import annotations

from typing import Dict, List, Optional

from ..models import PropertyDescriptor


class PropertyClassifier:
    """Buffers the accessors of one declaration body until it has been scanned.

    Plain data properties are final as soon as they are seen and are handed
    straight back from :meth:`add`. Getters and setters are held by name and
    collapsed by :meth:`merge`: every getter in discovery order, then each
    setter that has no getter of the same name. A setter matching a getter
    only flips ``setter`` on the getter's record.
    """

    def __init__(self) -> None:
        self._getters: Dict[str, PropertyDescriptor] = {}
        self._setters: Dict[str, PropertyDescriptor] = {}

    def add(self, record: PropertyDescriptor) -> Optional[PropertyDescriptor]:
        if record.getter:
            self._getters[record.name] = record
            return None
        if record.setter:
            self._setters[record.name] = record
            return None
        return record

    def merge(self) -> List[PropertyDescriptor]:
        defined: Dict[str, PropertyDescriptor] = dict(self._getters)
        for name, setter in self._setters.items():
            if name in defined:
                defined[name].setter = True
            else:
                defined[name] = setter
        return list(defined.values())


__all__ = ["PropertyClassifier"]
