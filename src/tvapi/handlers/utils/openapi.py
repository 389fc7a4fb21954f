"""
OpenAPI document for the CRUD API.

The document is derived from the routing table and the pydantic request models,
so it cannot drift from what the handler actually accepts.
"""

from typing import Any, Dict, Iterable, Tuple

from tvapi.handlers.utils.router import ROUTING_TABLE, PathShape
from tvapi.models.entity import CREATED_AT_FIELD, UPDATED_AT_FIELD, EntityDefinition
from tvapi.models.output import Operation

OPENAPI_VERSION = '3.0.3'

_ERROR_RESPONSES: Dict[Operation, Tuple[str, ...]] = {
    Operation.LIST: ('500',),
    Operation.GET_BY_ID: ('400', '404', '500'),
    Operation.CREATE: ('400', '409', '500'),
    Operation.UPDATE: ('400', '404', '500'),
    Operation.DELETE: ('400', '404', '500'),
}

_SUCCESS_STATUS: Dict[Operation, str] = {
    Operation.LIST: '200',
    Operation.GET_BY_ID: '200',
    Operation.CREATE: '201',
    Operation.UPDATE: '200',
    Operation.DELETE: '204',
}

_ERROR_DESCRIPTIONS = {
    '400': 'Validation failure or unsupported operation',
    '404': 'Entity not found',
    '409': 'Entity already exists',
    '500': 'Internal server error',
}


def _schema_name(definition: EntityDefinition) -> str:
    return definition.label.title().replace(' ', '')


def _ref(name: str) -> Dict[str, str]:
    return {'$ref': f'#/components/schemas/{name}'}


def _json_content(schema: Dict[str, Any]) -> Dict[str, Any]:
    return {'application/json': {'schema': schema}}


def _entity_schema(definition: EntityDefinition) -> Dict[str, Any]:
    schema = definition.create_model.model_json_schema(ref_template='#/components/schemas/{model}')
    schema['title'] = _schema_name(definition)
    schema['properties'][CREATED_AT_FIELD] = {'type': 'string', 'format': 'date-time', 'readOnly': True}
    schema['properties'][UPDATED_AT_FIELD] = {'type': 'string', 'format': 'date-time', 'readOnly': True}
    return schema


def _operation(definition: EntityDefinition, operation: Operation) -> Dict[str, Any]:
    name = _schema_name(definition)
    status = _SUCCESS_STATUS[operation]

    if operation is Operation.LIST:
        success_schema: Dict[str, Any] = {
            'type': 'object',
            'properties': {
                'items': {'type': 'array', 'items': _ref(name)},
                'count': {'type': 'integer'},
            },
        }
    else:
        success_schema = _ref(name)

    responses: Dict[str, Any] = {}
    if operation is Operation.DELETE:
        responses[status] = {'description': f'{definition.label} deleted'}
    else:
        responses[status] = {'description': 'Success', 'content': _json_content(success_schema)}
    for code in _ERROR_RESPONSES[operation]:
        responses[code] = {'description': _ERROR_DESCRIPTIONS[code], 'content': _json_content(_ref('ErrorMessage'))}

    spec: Dict[str, Any] = {
        'operationId': f'{operation.value[0].lower()}{operation.value[1:]}{name}',
        'summary': f'{operation.value} {definition.collection}',
        'tags': [definition.collection],
        'responses': responses,
    }
    if operation is Operation.CREATE:
        spec['requestBody'] = {'required': True, 'content': _json_content(_ref(f'Create{name}Request'))}
    elif operation is Operation.UPDATE:
        spec['requestBody'] = {'required': True, 'content': _json_content(_ref(f'Update{name}Request'))}
    return spec


def build_openapi_spec(
    definitions: Iterable[EntityDefinition],
    title: str = 'TV Catalog API',
    version: str = '1.0.0',
) -> Dict[str, Any]:
    """
    Build an OpenAPI 3 document for the given entity types.

    Args:
        definitions: Entity types to document, one collection each
        title: API title
        version: API version string

    Returns:
        OpenAPI document as a dictionary
    """
    paths: Dict[str, Dict[str, Any]] = {}
    schemas: Dict[str, Any] = {
        'ErrorMessage': {
            'type': 'object',
            'required': ['message'],
            'properties': {
                'message': {'type': 'string'},
                'field_errors': {
                    'type': 'array',
                    'items': {
                        'type': 'object',
                        'properties': {'field': {'type': 'string'}, 'message': {'type': 'string'}},
                    },
                },
            },
        },
    }

    for definition in definitions:
        name = _schema_name(definition)
        schemas[name] = _entity_schema(definition)
        schemas[f'Create{name}Request'] = definition.create_model.model_json_schema()
        schemas[f'Update{name}Request'] = definition.update_model.model_json_schema()

        for (method, shape), operation in ROUTING_TABLE.items():
            path = definition.collection_path if shape is PathShape.COLLECTION else definition.item_path
            path_item = paths.setdefault(path, {})
            if shape is PathShape.ITEM:
                path_item['parameters'] = [{
                    'name': definition.id_field,
                    'in': 'path',
                    'required': True,
                    'schema': {'type': 'string', 'minLength': 1},
                }]
            path_item[method.lower()] = _operation(definition, operation)

    return {
        'openapi': OPENAPI_VERSION,
        'info': {
            'title': title,
            'version': version,
            'description': 'CRUD API for TV actors and TV shows backed by DynamoDB.',
        },
        'paths': paths,
        'components': {'schemas': schemas},
    }
