"""
Fields
-------

Defines some additional fields so that the Schemas can
serialize to and from additional native python data types.
"""

from enum import Enum
from typing import Union, Optional, Type

from marshmallow import fields, ValidationError


class EnumField(fields.Field):
    """
    A field that serializes an :class:`~enum.Enum` to a :class:`str` and back.
    """

    def __init__(self, enum_type: Type[Enum], *args, use_name=False, **kwargs):
        """
        :param enum_type: the :class:`~enum.Enum` subclass
        :param use_name: use enum's property name instead of value when serialize
        """
        super().__init__(*args, **kwargs)
        if not issubclass(enum_type, Enum):
            raise ValueError(f"Expected enum type, got {type(enum_type)} instead")
        self._enum_type = enum_type
        self.use_name = use_name

    def _serialize(self, value: Union[Enum, str], attr, obj, **kwargs):
        """Converts an enum to a string representation."""
        if isinstance(value, self._enum_type):
            return value.name if self.use_name else value.value
        if isinstance(value, str) and value in (enum.value for enum in self._enum_type):
            return value
        return None

    def _deserialize(self, value: str, attr, data, **kwargs) -> Optional[Enum]:
        """Converts a string back to the enum type."""
        try:
            if self.use_name:
                return self._enum_type[value]
            return self._enum_type(value)
        except (KeyError, ValueError):
            raise ValidationError(f"Must be one of: {', '.join(enum.value for enum in self._enum_type)}.")

    def _jsonschema_type_mapping(self):
        """Defines the jsonschema type for the object."""
        return {
            'type': 'string',
            'enum': [enum.value for enum in self._enum_type]
        }


def Many(schema):
    return fields.List(fields.Nested(schema))
