"""Interactive exploration session for one endpoint.

The session owns the loaded schema, the current ``OperationSelection`` and the
last result. It is what a presentation layer (the CLI, a TUI, a notebook)
calls into: list operations, pick one, toggle fields and fill arguments,
preview the document, execute it.

Example:
    async with GraphQLExecutor(url) as executor:
        session = ExplorerSession(executor)
        await session.load_schema()
        session.select_operation("query", "blocks")
        session.toggle_field("hash")
        session.set_argument("limit", "5")
        print(session.preview_query())
        result = await session.execute()
"""

import logging
from typing import Any

from ..config import ExplorerConfig
from . import selection as sel
from .catalog import OperationKind, TypeCatalog
from .classifier import FieldClassifier, FieldKind
from .errors import ExplorerError
from .executor import GraphQLExecutor
from .ir import IntrospectionField, IntrospectionSchema
from .query_builder import ArgumentStyle, QueryBuilder, QueryDocument
from .synthesizer import SelectionSetSynthesizer

logger = logging.getLogger(__name__)


class ExplorerSession:
    """Schema, selection and result state for one endpoint."""

    def __init__(self, executor: GraphQLExecutor, config: ExplorerConfig | None = None):
        self.executor = executor
        self.config = config or ExplorerConfig(endpoint=executor.url)
        self.schema: IntrospectionSchema | None = None
        self.catalog: TypeCatalog | None = None
        self.classifier: FieldClassifier | None = None
        self.synthesizer: SelectionSetSynthesizer | None = None
        self.builder: QueryBuilder | None = None
        self.selection: sel.OperationSelection | None = None
        self.last_result: dict[str, Any] | None = None
        self.last_error: ExplorerError | None = None

    async def load_schema(self) -> IntrospectionSchema:
        """Fetch the endpoint's schema and reset all selection state."""
        schema = await self.executor.fetch_schema()
        self.set_schema(schema)
        return schema

    def set_schema(self, schema: IntrospectionSchema):
        """Install an already fetched schema."""
        self.schema = schema
        self.catalog = TypeCatalog(schema)
        self.classifier = FieldClassifier(self.catalog, self.config.strict_connections)
        self.synthesizer = SelectionSetSynthesizer(
            self.catalog,
            self.classifier,
            max_object_fields=self.config.max_object_fields,
            max_depth=self.config.max_depth,
        )
        self.builder = QueryBuilder(self.catalog)
        self.selection = None
        self.last_result = None
        self.last_error = None

    def _require_catalog(self) -> TypeCatalog:
        if self.catalog is None:
            raise RuntimeError("Schema not loaded. Call load_schema() first.")
        return self.catalog

    def _require_selection(self) -> sel.OperationSelection:
        if self.selection is None:
            raise RuntimeError("No operation selected. Call select_operation() first.")
        return self.selection

    # Operations

    def list_operations(self, kind: OperationKind | str = OperationKind.QUERY) -> list[IntrospectionField]:
        return self._require_catalog().operations(kind)

    def select_operation(
        self,
        kind: OperationKind | str,
        name: str,
        preselect_default_fields: bool = False,
    ) -> sel.OperationSelection:
        """Start a fresh selection for a root operation.

        With ``preselect_default_fields`` the return type's default leaf fields
        start out checked.
        """
        kind = OperationKind(kind)
        operation = self._require_catalog().operation(kind, name)
        if operation is None:
            raise ValueError(f"Unknown {kind.value} operation: {name}")
        self.selection = sel.OperationSelection(kind=kind, operation=name)
        self.last_result = None
        self.last_error = None
        if preselect_default_fields:
            for field_name in self.classifier.default_leaf_fields(operation.type):
                self.toggle_field(field_name)
        return self.selection

    def current_operation(self) -> IntrospectionField | None:
        if self.selection is None or self.catalog is None:
            return None
        return self.catalog.operation(self.selection.kind, self.selection.operation)

    # Field discovery

    def get_selectable_fields(
        self,
        kind: OperationKind | str | None = None,
        name: str | None = None,
    ) -> list[IntrospectionField]:
        """Fields of an operation's return type (the current operation by default)."""
        catalog = self._require_catalog()
        if name is None:
            operation = self.current_operation()
        else:
            operation = catalog.operation(kind or OperationKind.QUERY, name)
        if operation is None:
            return []
        return catalog.fields_of(operation.type)

    def classify(self, field: IntrospectionField) -> FieldKind:
        self._require_catalog()
        return self.classifier.classify(field)

    def get_connection_subfields(self, field: IntrospectionField) -> list[IntrospectionField]:
        self._require_catalog()
        return self.classifier.connection_node_fields(field)

    # Selection updates

    def toggle_field(self, name: str) -> sel.OperationSelection:
        """Check or uncheck a field of the current operation's return type."""
        state = self._require_selection()
        defaults: tuple[str, ...] = ()
        if self.config.prefill_connection_subfields and not state.is_selected(name):
            operation = self.current_operation()
            field_def = self.catalog.field_of(operation.type, name) if operation else None
            if field_def is not None and self.classifier.is_connection(field_def):
                node_fields = self.classifier.connection_node_fields(field_def)
                defaults = tuple(f.name for f in node_fields[: self.config.max_object_fields])
        self.selection = sel.toggle_field(state, name, defaults)
        return self.selection

    def set_argument(self, arg_name: str, value: str) -> sel.OperationSelection:
        self.selection = sel.set_argument(self._require_selection(), arg_name, value)
        return self.selection

    def set_subfield_argument(self, field_name: str, arg_name: str, value: str) -> sel.OperationSelection:
        self.selection = sel.set_subfield_argument(self._require_selection(), field_name, arg_name, value)
        return self.selection

    def set_connection_subfield(
        self,
        field_name: str,
        subfield: str,
        selected: bool | None = None,
    ) -> sel.OperationSelection:
        self.selection = sel.set_connection_subfield(
            self._require_selection(), field_name, subfield, selected
        )
        return self.selection

    # Documents

    def build_document(self) -> QueryDocument | None:
        """Build the document for the current selection, or None if there is none."""
        operation = self.current_operation()
        if operation is None:
            return None
        selection_source = self.synthesizer.synthesize(operation.type, self.selection.fields)
        return self.builder.build(
            self.selection.kind,
            operation.name,
            self.selection.arguments,
            selection_source,
            style=ArgumentStyle(self.config.argument_style),
        )

    def preview_query(self) -> str:
        document = self.build_document()
        return document.query if document else ""

    async def execute(self) -> dict[str, Any]:
        """Send the current document and return the raw JSON response.

        The response replaces ``last_result``; a later execute overwrites an
        earlier one. Errors clear ``last_result`` and are re-raised.
        """
        document = self.build_document()
        if document is None:
            raise RuntimeError("No operation selected. Call select_operation() first.")
        logger.debug("Executing %s %s", self.selection.kind.value, self.selection.operation)
        try:
            result = await self.executor.execute(**document.payload())
        except ExplorerError as e:
            self.last_result = None
            self.last_error = e
            raise
        self.last_result = result
        self.last_error = None
        return result
