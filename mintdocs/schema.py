"""Validate generated docs.json against the JSON Schema named in the config."""

import json
from pathlib import Path
from typing import Optional
from urllib.parse import urlparse
from urllib.request import url2pathname

import requests
from jsonschema.exceptions import SchemaError
from jsonschema.validators import validator_for
from referencing import Registry, Resource
from referencing.exceptions import NoSuchResource, Unresolvable
from referencing.jsonschema import DRAFT202012


class SchemaValidationError(Exception):
    """Raised when the schema can't be loaded or the document doesn't match it."""


def create_session() -> requests.Session:
    """Create an HTTP session for fetching schemas."""
    session = requests.Session()
    session.headers.update({
        'User-Agent': 'mintdocs docs.json generator',
        'Accept': 'application/schema+json,application/json;q=0.9,*/*;q=0.5',
    })
    return session


def load_schema(ref: str, session: Optional[requests.Session] = None) -> dict:
    """Load a schema from an http(s) URL, a file:// URL or a local path."""
    if ref.startswith(('http://', 'https://')):
        session = session or create_session()
        resp = session.get(ref, timeout=15)
        resp.raise_for_status()
        return resp.json()

    path = url2pathname(urlparse(ref).path) if ref.startswith('file://') else ref
    with open(path, 'r', encoding='utf-8') as f:
        return json.load(f)


def validate_docs(docs: dict, schema_ref: str, session: Optional[requests.Session] = None):
    """Validate ``docs`` against the schema at ``schema_ref``.

    Raises SchemaValidationError listing every violation.
    """
    try:
        schema = load_schema(schema_ref, session)
    except (requests.RequestException, OSError, ValueError) as e:
        raise SchemaValidationError(f'could not load schema {schema_ref}: {e}') from e

    def retrieve(uri: str) -> Resource:
        # Remote $refs resolve through the same loader
        try:
            contents = load_schema(uri, session)
        except (requests.RequestException, OSError, ValueError) as e:
            raise NoSuchResource(ref=uri) from e
        return Resource.from_contents(contents, default_specification=DRAFT202012)

    schema = _with_base_uri(schema, _base_uri(schema_ref))
    validator_cls = validator_for(schema)
    try:
        validator_cls.check_schema(schema)
    except SchemaError as e:
        raise SchemaValidationError(f'invalid schema {schema_ref}: {e.message}') from e

    validator = validator_cls(schema, registry=Registry(retrieve=retrieve))
    try:
        errors = sorted(validator.iter_errors(docs), key=lambda e: [str(p) for p in e.absolute_path])
    except Unresolvable as e:
        raise SchemaValidationError(f'could not resolve schema reference: {e}') from e
    if errors:
        details = '\n'.join(f'  - {_format_path(e.absolute_path)}: {e.message}' for e in errors)
        raise SchemaValidationError(f'validation failed:\n{details}')


def _base_uri(ref: str) -> str:
    """Absolute URI of the schema, used to resolve its relative $refs."""
    if ref.startswith(('http://', 'https://', 'file://')):
        return ref
    return Path(ref).resolve().as_uri()


def _with_base_uri(schema, base_uri: str):
    """Give an id-less schema its own location as id."""
    if not isinstance(schema, dict) or '$id' in schema or 'id' in schema:
        return schema
    # Draft 3 and 4 spell the keyword without the dollar sign
    dialect = str(schema.get('$schema', ''))
    key = 'id' if 'draft-03' in dialect or 'draft-04' in dialect else '$id'
    return {key: base_uri, **schema}


def _format_path(path) -> str:
    parts = [str(p) for p in path]
    return '/'.join(parts) if parts else '(root)'
