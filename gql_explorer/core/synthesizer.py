"""Selection-set synthesis from user field choices.

Turns an ordered list of ``FieldSelection`` entries into the body of a
GraphQL selection set, e.g. for a ``Block`` return type:

    hash number transactions(first: 10) { edges { node { hash value } } pageInfo { endCursor hasNextPage } }

Leaf fields are emitted by name, connection fields get the fixed
``edges``/``node``/``pageInfo`` envelope, and plain object fields are expanded
with a bounded prefix of their default leaf fields. Object expansion is depth
limited, so cyclic schemas (``Block.transactions -> Transaction.block ->
Block``) always terminate.
"""

from collections.abc import Iterable, Mapping, Sequence

from .catalog import TypeCatalog
from .classifier import FieldClassifier, FieldKind
from .ir import IntrospectionField, TypeRef
from .scalars import build_argument_list
from .selection import FieldSelection

TYPENAME = "__typename"
PAGE_INFO = "pageInfo { endCursor hasNextPage }"


def connection_envelope(node_selection: Sequence[str]) -> str:
    """Render the pagination envelope around a node selection."""
    node = " ".join(node_selection) or TYPENAME
    return f"edges {{ node {{ {node} }} }} {PAGE_INFO}"


class SelectionSetSynthesizer:
    """Builds selection-set source text for a return type."""

    def __init__(
        self,
        catalog: TypeCatalog,
        classifier: FieldClassifier | None = None,
        max_object_fields: int = 5,
        max_depth: int = 3,
    ):
        """Initialize the synthesizer.

        Args:
            catalog: Type lookups for the loaded schema
            classifier: Field classifier (built from the catalog if omitted)
            max_object_fields: How many default fields an object field expands to
            max_depth: Deepest object nesting expanded below a selected field
        """
        self.catalog = catalog
        self.classifier = classifier or FieldClassifier(catalog)
        self.max_object_fields = max_object_fields
        self.max_depth = max_depth

    def synthesize(self, return_type: TypeRef, selections: Iterable[FieldSelection]) -> str:
        """Render the selection set body for ``return_type``.

        Selections are rendered in the given order. A selection naming a field
        the type does not have is skipped. If nothing is rendered the result
        is ``__typename``, so the enclosing ``{ }`` is never empty.
        """
        parts = []
        for selected in selections:
            field_def = self.catalog.field_of(return_type, selected.name)
            if field_def is None:
                continue
            parts.append(self._render_selected(field_def, selected))
        return " ".join(parts) or TYPENAME

    def synthesize_names(
        self,
        return_type: TypeRef,
        field_names: Sequence[str],
        subselections: Mapping[str, Sequence[str]] | None = None,
        arguments: Mapping[str, Mapping[str, str]] | None = None,
    ) -> str:
        """Same as ``synthesize``, taking parallel name/sub-field/argument maps."""
        subselections = subselections or {}
        arguments = arguments or {}
        selections = [
            FieldSelection(
                name=name,
                subfields=tuple(subselections.get(name, ())),
                arguments=dict(arguments.get(name, {})),
            )
            for name in field_names
        ]
        return self.synthesize(return_type, selections)

    def _render_selected(self, field_def: IntrospectionField, selected: FieldSelection) -> str:
        head = field_def.name + build_argument_list(field_def.args, selected.arguments)
        kind = self.classifier.classify(field_def)

        if kind == FieldKind.LEAF:
            return head
        if kind == FieldKind.CONNECTION:
            return f"{head} {{ {connection_envelope(selected.subfields)} }}"

        body = self._expand_object(field_def.type, depth=1)
        return f"{head} {{ {body} }}" if body else head

    def _expand_object(self, ref: TypeRef, depth: int) -> str:
        """Select the default fields of an object type, bounded in width and depth."""
        parts = []
        for name in self.classifier.default_leaf_fields(ref)[: self.max_object_fields]:
            field_def = self.catalog.field_of(ref, name)
            if field_def is None:
                continue
            kind = self.classifier.classify(field_def)
            if kind == FieldKind.LEAF:
                parts.append(name)
            elif kind == FieldKind.CONNECTION:
                parts.append(f"{name} {{ {connection_envelope(())} }}")
            elif depth >= self.max_depth:
                parts.append(f"{name} {{ {TYPENAME} }}")
            else:
                nested = self._expand_object(field_def.type, depth + 1)
                parts.append(f"{name} {{ {nested or TYPENAME} }}")
        return " ".join(parts)
