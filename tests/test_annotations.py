import logging

from rpc_swagger.generator.annotations import (
    Role,
    annotations_on,
    first_annotation,
    http_methods,
    parse_override,
    role_of,
)
from rpc_swagger.idl.model import Field, Method, TypeDescriptor
from rpc_swagger.openapi.models import Parameter, Schema


def _field(**annotations) -> Field:
    return Field(name="f", type=TypeDescriptor(name="string"), annotations=annotations)


class TestRoleOf:
    def test_known_keys(self):
        assert role_of("api.get") is Role.HTTP_METHOD
        assert role_of("api.any") is Role.HTTP_METHOD
        assert role_of("api.query") is Role.PARAMETER
        assert role_of("api.cookie") is Role.PARAMETER
        assert role_of("api.raw_body") is Role.BODY
        assert role_of("api.baseurl") is Role.BASE_URL
        assert role_of("api.base_domain") is Role.BASE_URL
        assert role_of("openapi.document") is Role.OVERRIDE
        assert role_of("openapi.parameter") is Role.OVERRIDE

    def test_unknown_key(self):
        assert role_of("api.vd") is None
        assert role_of("go.tag") is None


class TestAnnotationLookup:
    def test_present(self):
        f = _field(**{"api.query": ["q", "other"]})
        assert annotations_on(f, "api.query") == ["q", "other"]
        assert first_annotation(f, "api.query") == "q"

    def test_absent(self):
        f = _field()
        assert annotations_on(f, "api.query") == []
        assert first_annotation(f, "api.query") == ""

    def test_http_methods_in_annotation_order(self):
        m = Method(
            name="Echo",
            annotations={
                "api.post": ["/echo"],
                "api.query": ["ignored"],
                "api.get": ["/echo/:id"],
                "api.put": [""],
            },
        )
        assert http_methods(m) == [("POST", "/echo"), ("GET", "/echo/:id")]


class TestParseOverride:
    def test_flow_mapping_with_snake_case_keys(self):
        f = _field(**{"openapi.property": ['{title: "Name", max_length: 50, min_length: 1}']})
        schema = parse_override(f, "openapi.property", Schema)
        assert schema.title == "Name"
        assert schema.max_length == 50
        assert schema.model_fields_set == {"title", "max_length", "min_length"}

    def test_json_payload(self):
        f = _field(**{"openapi.parameter": ['{"required": true, "description": "id"}']})
        param = parse_override(f, "openapi.parameter", Parameter)
        assert param.required is True
        assert param.description == "id"

    def test_absent_annotation(self):
        assert parse_override(_field(), "openapi.property", Schema) is None

    def test_invalid_yaml_is_ignored(self, caplog):
        f = _field(**{"openapi.property": ["{title: [unclosed"]})
        with caplog.at_level(logging.WARNING):
            assert parse_override(f, "openapi.property", Schema) is None
        assert "openapi.property" in caplog.text

    def test_non_mapping_is_ignored(self, caplog):
        f = _field(**{"openapi.property": ["just text"]})
        with caplog.at_level(logging.WARNING):
            assert parse_override(f, "openapi.property", Schema) is None
        assert "not a mapping" in caplog.text

    def test_wrong_shape_is_ignored(self, caplog):
        f = _field(**{"openapi.property": ["{max_length: lots}"]})
        with caplog.at_level(logging.WARNING):
            assert parse_override(f, "openapi.property", Schema) is None
