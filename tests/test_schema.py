"""
JSON Schema validation tests

Remote schemas are served by a stub session so the suite never touches the
network.
"""

import json

import pytest
import requests

from mintdocs.schema import SchemaValidationError, load_schema, validate_docs


DOCS_SCHEMA = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "required": ["name", "navigation"],
    "properties": {
        "name": {"type": "string"},
        "colors": {"$ref": "https://schemas.example.com/colors.json"},
        "navigation": {"type": "object"},
    },
}

COLORS_SCHEMA = {
    "type": "object",
    "required": ["primary"],
    "properties": {"primary": {"type": "string", "pattern": "^#"}},
}


class FakeResponse:
    def __init__(self, payload, status=200):
        self.payload = payload
        self.status = status

    def raise_for_status(self):
        if self.status >= 400:
            raise requests.HTTPError(f"{self.status} error")

    def json(self):
        return self.payload


class FakeSession:
    """Serves canned schema documents keyed by URL."""

    def __init__(self, documents):
        self.documents = documents
        self.requested = []

    def get(self, url, timeout=None):
        self.requested.append(url)
        if url not in self.documents:
            return FakeResponse(None, status=404)
        return FakeResponse(self.documents[url])


@pytest.fixture
def session():
    return FakeSession({
        "https://schemas.example.com/docs.json": DOCS_SCHEMA,
        "https://schemas.example.com/colors.json": COLORS_SCHEMA,
    })


@pytest.fixture
def schema_file(tmp_path):
    path = tmp_path / 'schema.json'
    schema = {
        "$schema": "https://json-schema.org/draft/2020-12/schema",
        "type": "object",
        "required": ["name"],
        "properties": {"name": {"type": "string"}},
    }
    path.write_text(json.dumps(schema), encoding='utf-8')
    return path


class TestLoadSchema:
    def test_local_path(self, schema_file):
        assert load_schema(str(schema_file))["required"] == ["name"]

    def test_file_url(self, schema_file):
        assert load_schema(schema_file.as_uri())["required"] == ["name"]

    def test_remote(self, session):
        assert load_schema("https://schemas.example.com/docs.json", session) == DOCS_SCHEMA

    def test_remote_http_error(self, session):
        with pytest.raises(requests.HTTPError):
            load_schema("https://schemas.example.com/missing.json", session)


class TestValidateDocs:
    """Validation against local and remote schemas"""

    def test_valid_local(self, schema_file):
        validate_docs({"name": "Docs"}, str(schema_file))

    def test_invalid_local(self, schema_file):
        with pytest.raises(SchemaValidationError, match="'name' is a required property"):
            validate_docs({"theme": "maple"}, str(schema_file))

    def test_valid_remote_with_ref(self, session):
        """Remote $refs are fetched through the same session"""
        docs = {"name": "Docs", "colors": {"primary": "#16A34A"}, "navigation": {}}

        validate_docs(docs, "https://schemas.example.com/docs.json", session)

        assert "https://schemas.example.com/colors.json" in session.requested

    def test_relative_ref_resolved_against_schema_url(self, session):
        """A relative $ref is looked up next to the schema that names it"""
        session.documents["https://schemas.example.com/v2/docs.json"] = {
            "$schema": "https://json-schema.org/draft/2020-12/schema",
            "properties": {"colors": {"$ref": "colors.json"}},
        }
        session.documents["https://schemas.example.com/v2/colors.json"] = COLORS_SCHEMA

        validate_docs({"colors": {"primary": "#fff"}}, "https://schemas.example.com/v2/docs.json", session)

        assert "https://schemas.example.com/v2/colors.json" in session.requested
        with pytest.raises(SchemaValidationError, match="colors/primary"):
            validate_docs({"colors": {"primary": "white"}}, "https://schemas.example.com/v2/docs.json", session)

    def test_relative_ref_in_local_schema(self, tmp_path):
        (tmp_path / 'colors.json').write_text(json.dumps(COLORS_SCHEMA), encoding='utf-8')
        schema_path = tmp_path / 'docs.json'
        schema_path.write_text(json.dumps({
            "$schema": "https://json-schema.org/draft/2020-12/schema",
            "properties": {"colors": {"$ref": "colors.json"}},
        }), encoding='utf-8')

        validate_docs({"colors": {"primary": "#000"}}, str(schema_path))
        with pytest.raises(SchemaValidationError, match="'primary' is a required property"):
            validate_docs({"colors": {}}, str(schema_path))

    def test_errors_listed_with_paths(self, session):
        docs = {"name": 3, "colors": {"primary": "green"}}

        with pytest.raises(SchemaValidationError) as exc:
            validate_docs(docs, "https://schemas.example.com/docs.json", session)

        message = str(exc.value)
        assert message.startswith("validation failed:")
        assert "  - (root): 'navigation' is a required property" in message
        assert "  - colors/primary:" in message
        assert "  - name: 3 is not of type 'string'" in message

    def test_unreachable_schema(self, session):
        with pytest.raises(SchemaValidationError, match="could not load schema"):
            validate_docs({}, "https://schemas.example.com/missing.json", session)

    def test_unresolvable_ref(self, session):
        del session.documents["https://schemas.example.com/colors.json"]

        with pytest.raises(SchemaValidationError, match="could not resolve"):
            validate_docs({"name": "x", "colors": {}, "navigation": {}},
                          "https://schemas.example.com/docs.json", session)

    def test_invalid_schema(self, tmp_path):
        path = tmp_path / 'broken.json'
        path.write_text(json.dumps({"type": 12}), encoding='utf-8')

        with pytest.raises(SchemaValidationError, match="invalid schema"):
            validate_docs({}, str(path))
