#!/usr/bin/env python3
"""Demonstration of exploring a public blockchain explorer endpoint.

This script shows how to:
1. Load a schema by introspection
2. Pick an operation and check fields, sub-fields and arguments
3. Preview and execute the synthesized query

It talks to the PulseChain Scan endpoint, so it needs network access.
"""

import asyncio
import json

from gql_explorer.config import DEFAULT_ENDPOINT, ExplorerConfig
from gql_explorer.core import ExplorerError, ExplorerSession, GraphQLExecutor


async def main():
    config = ExplorerConfig(endpoint=DEFAULT_ENDPOINT, prefill_connection_subfields=True)

    print("=== GraphQL Explorer Demo ===\n")

    async with GraphQLExecutor(config.endpoint_url(), timeout=config.timeout) as executor:
        session = ExplorerSession(executor, config)

        print(f"1. Loading schema from {config.endpoint}...")
        try:
            schema = await session.load_schema()
        except ExplorerError as e:
            print(f"   Could not load schema: {e}")
            return
        print(f"   {len(schema.types)} types")
        print(f"   {len(session.list_operations('query'))} queries, "
              f"{len(session.list_operations('mutation'))} mutations")

        operation = session.list_operations("query")[0]
        print(f"\n2. Selecting '{operation.name}' with its default fields")
        session.select_operation("query", operation.name, preselect_default_fields=True)
        for field_def in session.get_selectable_fields():
            kind = session.classify(field_def).value
            mark = "x" if session.selection.is_selected(field_def.name) else " "
            print(f"   [{mark}] {field_def.name} ({kind})")

        print("\n3. Query preview:")
        document = session.build_document()
        print(document.formatted())

        print("\n4. Executing...")
        try:
            result = await session.execute()
        except ExplorerError as e:
            print(f"   Failed: {e}")
            return
        print(json.dumps(result, indent=2)[:1000])


if __name__ == "__main__":
    asyncio.run(main())
