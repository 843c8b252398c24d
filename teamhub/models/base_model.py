import logging
from dataclasses import dataclass, field, fields, is_dataclass
from datetime import datetime, timezone
from dateutil.parser import isoparse
from typing import Any, Dict, List, Union, get_type_hints, get_origin, get_args
from enum import Enum

from teamhub.ids import generate_id, reserve_id

logger = logging.getLogger(__name__)


def default_datetime():
    """
    Definition for default datetime
    """
    return datetime.now(timezone.utc)


class TeamhubError(Exception):
    """Base class for recoverable errors raised by teamhub."""


class ModelValidationError(TeamhubError):
    """
    Exception raised when one or more fields of a model fail validation.

    Attributes:
        errors (dict): A mapping of field name to error message.
    """

    def __init__(self, errors):
        if not isinstance(errors, dict):
            raise ValueError("Errors should be a dict of field name to message")
        self.errors = dict(errors)
        super().__init__(self.format_errors())

    def format_errors(self):
        return "\n".join(f"{name}: {message}" for name, message in self.errors.items())

    def __str__(self):
        return self.format_errors()


@dataclass(frozen=True, kw_only=True)
class BaseModel:
    """A base class for hierarchy entities with an immutable identity."""

    entity_id: str = field(default_factory=generate_id,
                           metadata={'field_type': 'entity_id'})
    created_on: datetime = field(default_factory=default_datetime)

    @classmethod
    def fields(cls) -> List[str]:
        """
        Get a list of field names for this model.

        Returns:
            List[str]: A list of field names.
        """
        return [f.name for f in fields(cls)]

    def _convert_value_for_dict(self, v, convert_datetime_to_iso_string: bool):
        """Convert a value for dictionary output."""
        if convert_datetime_to_iso_string and isinstance(v, datetime):
            return v.isoformat()
        if isinstance(v, Enum):
            return v.value
        if is_dataclass(v) and hasattr(v, 'as_dict'):
            return v.as_dict(convert_datetime_to_iso_string)
        if isinstance(v, (list, tuple)):
            return [self._convert_value_for_dict(i, convert_datetime_to_iso_string) for i in v]
        return v

    def _export_properties_to_dict(self, result: Dict, convert_datetime_to_iso_string: bool):
        """Export @property methods to dictionary."""
        for attr_name in dir(type(self)):
            if attr_name.startswith('_') or attr_name in result:
                continue
            attr = getattr(type(self), attr_name, None)
            if not isinstance(attr, property):
                continue
            result[attr_name] = self._convert_value_for_dict(
                getattr(self, attr_name), convert_datetime_to_iso_string)

    def as_dict(self, convert_datetime_to_iso_string: bool = False, export_properties: bool = True) -> Dict[str, Any]:
        """
        Convert this model to a dictionary.

        Args:
            convert_datetime_to_iso_string (bool, optional): Whether to convert datetime to ISO strings.
            export_properties (bool): Whether to include @property methods (derived counts) in the output.

        Returns:
            Dict[str, Any]: A dictionary representation of this model.
        """
        result = {
            f.name: self._convert_value_for_dict(getattr(self, f.name), convert_datetime_to_iso_string)
            for f in fields(self)
        }
        if export_properties:
            self._export_properties_to_dict(result, convert_datetime_to_iso_string)
        return result

    @classmethod
    def _convert_union_type(cls, v: str, args) -> Any:
        """Convert value for Union/Optional types."""
        for arg in args:
            if arg is type(None):
                continue
            result = cls._convert_enum_or_datetime(v, arg)
            if result is not v:
                return result
        return v

    @classmethod
    def _convert_enum_or_datetime(cls, v, expected_type) -> Any:
        """Convert string values to enum or datetime types."""
        if not isinstance(v, str):
            return v

        if get_origin(expected_type) is Union:
            return cls._convert_union_type(v, get_args(expected_type))

        if isinstance(expected_type, type) and issubclass(expected_type, Enum):
            try:
                return expected_type(v)
            except ValueError:
                return v

        if expected_type is datetime:
            try:
                return isoparse(v)
            except (ValueError, TypeError):
                logger.info("'%s' is not a valid ISO timestamp.", v)
                return v

        return v

    @classmethod
    def _convert_children(cls, v, model_class) -> Any:
        """Convert a list of dicts to a tuple of model instances."""
        return tuple(model_class.from_dict(item) if isinstance(item, dict) else item for item in v)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BaseModel":
        """
        Load a model from a dict. Unknown keys, including exported properties, are ignored.
        """
        clean_data = {k: v for k, v in data.items() if k in cls.fields()}
        hints = get_type_hints(cls)

        for f in fields(cls):
            v = clean_data.get(f.name)
            if v is None:
                continue
            child_model = f.metadata.get('model')
            if child_model and isinstance(v, (list, tuple)):
                clean_data[f.name] = cls._convert_children(v, child_model)
            else:
                clean_data[f.name] = cls._convert_enum_or_datetime(v, hints.get(f.name))

        instance = cls(**clean_data)
        reserve_id(instance.entity_id)
        return instance

    def _run_field_validator(self, name: str, errors: dict):
        """Run custom field validator if defined."""
        validator = getattr(self, f"validate_{name}", None)
        if callable(validator):
            error = validator()
            if error:
                errors[name] = error

    def validate(self):
        """
        Validate all fields by calling corresponding `validate_<field_name>` methods if defined.
        Every failing field is reported; raise `ModelValidationError` if any validations fail.
        """
        errors = {}
        for name in self.fields():
            self._run_field_validator(name, errors)

        if errors:
            raise ModelValidationError(errors)
