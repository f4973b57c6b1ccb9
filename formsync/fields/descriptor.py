# ==============================================
# Field Descriptors (Data Classes)
# ==============================================
#
# PURPOSE:
#   Immutable representation of a form definition as the sync
#   layer sees it: ordered fields, each with an id, a CSS class
#   string, and either a list of sub-inputs or a single
#   parameter name.
#
# WHY THIS FILE EXISTS:
#   Host form systems hand us fields as dicts or as objects,
#   and composite fields (name, address) look different from
#   single-value fields. coerce() resolves all of that ONCE at
#   the boundary, so the classifier and mediator only ever deal
#   with one shape.
#
# CLASSES:
# --------
# - SubInput (frozen dataclass)
#     id: str           → entry key, e.g. "1.3"
#     name: str | None  → profile key, e.g. "first_name"
#
# - FieldDescriptor (frozen dataclass)
#     id: str
#     css_class: str           (whitespace-separated tokens)
#     inputs: tuple[SubInput]  (empty for single-value fields)
#     input_name: str | None   (parameter name / profile key)
#
#     - has_inputs -> bool
#     - profile_keys() -> list[tuple[str, str | None]]
#     - coerce(raw) -> FieldDescriptor  (classmethod)
#
# - FormDefinition (frozen dataclass)
#     id: str | None
#     fields: tuple[FieldDescriptor]
#
#     - coerce(raw) -> FormDefinition  (classmethod)
#     - get_field(field_id) -> FieldDescriptor | None
#
# ACCEPTED INPUT SHAPES:
# ----------------------
#   Gravity-Forms style keys: id, cssClass, inputs[{id, name}], inputName
#   snake_case aliases:       css_class, input_name, parameter_name
#   Either as dict keys or as object attributes.
#
# ==============================================

from dataclasses import dataclass, field
from typing import Any, Iterable, List, Optional, Tuple

_MISSING = object()


def _get(raw: Any, *names: str, default: Any = None) -> Any:
    """Read the first present key/attribute from a dict or object."""
    for name in names:
        if isinstance(raw, dict):
            value = raw.get(name, _MISSING)
        else:
            value = getattr(raw, name, _MISSING)
        if value is not _MISSING:
            return value
    return default


def _as_id(value: Any) -> str:
    # Entry maps are keyed by the stringified id ("4", "1.3")
    return "" if value is None else str(value)


def _as_class(value: Any) -> str:
    # Only a string can carry class tokens
    return value if isinstance(value, str) else ""


def _as_key(value: Any) -> Optional[str]:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


@dataclass(frozen=True)
class SubInput:
    """One constituent input of a composite field."""
    id: str
    name: Optional[str] = None

    @classmethod
    def coerce(cls, raw: Any) -> "SubInput":
        if isinstance(raw, SubInput):
            return raw
        return cls(
            id=_as_id(_get(raw, "id")),
            name=_as_key(_get(raw, "name")),
        )


@dataclass(frozen=True)
class FieldDescriptor:
    """
    A single configured form field.

    A field either declares sub-inputs (each carrying its own
    profile key in ``name``) or relies on ``input_name``, the
    dynamic-population parameter name, as its profile key.
    """
    id: str
    css_class: str = ""
    inputs: Tuple[SubInput, ...] = ()
    input_name: Optional[str] = None

    @property
    def has_inputs(self) -> bool:
        return len(self.inputs) > 0

    def profile_keys(self) -> List[Tuple[str, Optional[str]]]:
        """
        Map every entry key of this field to its profile key.

        Returns:
            List of (entry_key, profile_key) in declared order.
            profile_key is None when the field is misconfigured.
        """
        if self.has_inputs:
            return [(sub.id, sub.name) for sub in self.inputs]
        return [(self.id, self.input_name)]

    @classmethod
    def coerce(cls, raw: Any) -> "FieldDescriptor":
        """
        Build a descriptor from a host field (dict or object).

        Args:
            raw: Field as delivered by the host form system

        Returns:
            FieldDescriptor
        """
        if isinstance(raw, FieldDescriptor):
            return raw

        raw_inputs = _get(raw, "inputs", default=None) or ()
        return cls(
            id=_as_id(_get(raw, "id")),
            css_class=_as_class(_get(raw, "cssClass", "css_class")),
            inputs=tuple(SubInput.coerce(sub) for sub in raw_inputs),
            input_name=_as_key(_get(raw, "inputName", "input_name", "parameter_name")),
        )


@dataclass(frozen=True)
class FormDefinition:
    """Ordered field list of one form."""
    fields: Tuple[FieldDescriptor, ...] = field(default_factory=tuple)
    id: Optional[str] = None

    def get_field(self, field_id: Any) -> Optional[FieldDescriptor]:
        wanted = _as_id(field_id)
        for form_field in self.fields:
            if form_field.id == wanted:
                return form_field
        return None

    @classmethod
    def coerce(cls, raw: Any) -> "FormDefinition":
        """
        Build a form definition from a host form (dict or object),
        or from a bare iterable of fields.
        """
        if isinstance(raw, FormDefinition):
            return raw

        if isinstance(raw, dict) or hasattr(raw, "fields"):
            raw_fields: Iterable[Any] = _get(raw, "fields", default=None) or ()
            form_id = _get(raw, "id")
        else:
            raw_fields = raw or ()
            form_id = None

        return cls(
            fields=tuple(FieldDescriptor.coerce(f) for f in raw_fields),
            id=None if form_id is None else str(form_id),
        )
