"""Selection model for an operation being built interactively.

An ``OperationSelection`` is a small tree: the chosen root operation, its raw
argument values, and one ``FieldSelection`` per checked field of the
operation's return type. A ``FieldSelection`` exists iff its field is checked;
unchecking a field discards its sub-field choices and argument values with it.

The update functions below never mutate their input; each returns a new
selection so callers can keep or compare previous states.
"""

from dataclasses import dataclass, field, replace

from .catalog import OperationKind


@dataclass(frozen=True)
class FieldSelection:
    """A checked field with its connection sub-fields and raw argument values."""
    name: str
    subfields: tuple[str, ...] = ()
    arguments: dict[str, str] = field(default_factory=dict)

    @classmethod
    def select(cls, name: str, *subfields: str, **arguments: str) -> "FieldSelection":
        return cls(name=name, subfields=tuple(subfields), arguments=dict(arguments))


@dataclass(frozen=True)
class OperationSelection:
    """Session state for one root operation."""
    kind: OperationKind
    operation: str
    arguments: dict[str, str] = field(default_factory=dict)
    fields: tuple[FieldSelection, ...] = ()

    @property
    def field_names(self) -> list[str]:
        return [f.name for f in self.fields]

    def get(self, name: str) -> FieldSelection | None:
        for selected in self.fields:
            if selected.name == name:
                return selected
        return None

    def is_selected(self, name: str) -> bool:
        return self.get(name) is not None


def _replace_field(state: OperationSelection, updated: FieldSelection) -> OperationSelection:
    fields = tuple(updated if f.name == updated.name else f for f in state.fields)
    return replace(state, fields=fields)


def toggle_field(
    state: OperationSelection,
    name: str,
    default_subfields: tuple[str, ...] = (),
) -> OperationSelection:
    """Check an unchecked field (appending it), or uncheck a checked one."""
    if state.is_selected(name):
        return replace(state, fields=tuple(f for f in state.fields if f.name != name))
    added = FieldSelection(name=name, subfields=tuple(default_subfields))
    return replace(state, fields=state.fields + (added,))


def set_argument(state: OperationSelection, arg_name: str, value: str) -> OperationSelection:
    """Set a raw value for one of the operation's own arguments."""
    return replace(state, arguments={**state.arguments, arg_name: value})


def set_subfield_argument(
    state: OperationSelection,
    field_name: str,
    arg_name: str,
    value: str,
) -> OperationSelection:
    """Set a raw argument value on a checked field; unchecked fields are ignored."""
    selected = state.get(field_name)
    if selected is None:
        return state
    updated = replace(selected, arguments={**selected.arguments, arg_name: value})
    return _replace_field(state, updated)


def set_connection_subfield(
    state: OperationSelection,
    field_name: str,
    subfield: str,
    selected: bool | None = None,
) -> OperationSelection:
    """Toggle a node sub-field of a checked connection field.

    With ``selected`` given the sub-field is forced on or off instead.
    Newly chosen sub-fields are appended, preserving choice order.
    """
    current = state.get(field_name)
    if current is None:
        return state
    present = subfield in current.subfields
    want = not present if selected is None else selected
    if want == present:
        return state
    if want:
        subfields = current.subfields + (subfield,)
    else:
        subfields = tuple(s for s in current.subfields if s != subfield)
    return _replace_field(state, replace(current, subfields=subfields))
