"""Mapping between HAL+JSON documents and Resources"""

import json

from hypernav.exc import UnexpectedlyNotJSON
from hypernav.resource import Resource


def _embedded_from_hal(value):
    if isinstance(value, list):
        return [from_hal(v) for v in value]
    return from_hal(value)


def from_hal(document):
    """Builds a Resource from a decoded HAL document.

    `_links` and `_embedded` relations holding arrays stay sequences even
    when the array has a single element."""
    if document is None:
        return Resource()
    if not isinstance(document, dict):
        raise UnexpectedlyNotJSON(
            'A HAL document must be a JSON object, got {}'.format(
                type(document).__name__),
            code='not-valid-json', cause=None, body=document)
    embedded = {rel: _embedded_from_hal(v)
                for rel, v in (document.get('_embedded') or {}).items()}
    properties = {k: v for k, v in document.items()
                  if k not in ('_links', '_embedded')}
    return Resource(document.get('_links') or {}, embedded, properties)


def to_hal(resource):
    """Inverse of from_hal"""
    document = {}
    if resource.rels():
        document['_links'] = {
            rel: resource.relation(rel).export(dict)
            for rel in resource.rels()}
    if resource.embedded_rels():
        document['_embedded'] = {
            rel: resource.embedded_relation(rel).export(to_hal)
            for rel in resource.embedded_rels()}
    document.update(resource.properties)
    return document


def loads(text):
    try:
        document = json.loads(text)
    except ValueError as e:
        raise UnexpectedlyNotJSON('Need a valid HAL-JSON document',
                                  code='not-valid-json', cause=e, body=text)
    return from_hal(document)


def dumps(resource, **kwargs):
    return json.dumps(to_hal(resource), **kwargs)
