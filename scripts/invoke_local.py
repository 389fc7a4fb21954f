#!/usr/bin/env python3
"""
Local walkthrough of the CRUD handler.

Runs List, Create, GetByID, Update and Delete, plus two error cases, against an
in-memory entity store and prints each response.
"""
import argparse
import json
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from tvapi.dal.memory_gateway import InMemoryEntityGateway  # noqa: E402
from tvapi.handlers.crud_handler import process_request  # noqa: E402
from tvapi.handlers.utils.events import build_api_event  # noqa: E402
from tvapi.models.entity import get_entity_definition  # noqa: E402

SAMPLES = {
    "actors": ({"id": "actor-1", "name": "Bryan Cranston", "age": 67, "knownFor": ["Breaking Bad"]}, {"age": 68}),
    "tvshows": ({"id": "show-1", "title": "Breaking Bad", "genre": "Drama", "year": 2008}, {"rating": 9.5}),
}


def show(step: str, response: dict) -> None:
    print(f"{step}: {response['statusCode']}")
    if response["body"]:
        print(json.dumps(json.loads(response["body"]), indent=2))
    else:
        print("(empty response)")
    print()


def main():
    """Main function for the local invocation script."""
    parser = argparse.ArgumentParser(description="Exercise the CRUD handler against an in-memory store")
    parser.add_argument("--entity", choices=sorted(SAMPLES), default="actors", help="Entity type (default: actors)")
    args = parser.parse_args()

    definition = get_entity_definition(args.entity)
    gateway = InMemoryEntityGateway(table_name=f"local-{definition.collection}")
    sample, changes = SAMPLES[args.entity]
    item_params = {definition.id_field: sample[definition.id_field]}

    def call(method, resource, path_parameters=None, body=None):
        return process_request(build_api_event(method, resource, path_parameters, body), gateway, definition)

    show(f"GET {definition.collection_path}", call("GET", definition.collection_path))
    show(f"POST {definition.collection_path}", call("POST", definition.collection_path, body=sample))
    show(f"GET {definition.item_path}", call("GET", definition.item_path, item_params))
    show(f"PUT {definition.item_path}", call("PUT", definition.item_path, item_params, changes))
    show(f"DELETE {definition.item_path}", call("DELETE", definition.item_path, item_params))

    show("POST without id", call("POST", definition.collection_path, body={definition.required_field: "Test"}))
    show("GET missing entity", call("GET", definition.item_path, {definition.id_field: "non-existent"}))


if __name__ == "__main__":
    main()
