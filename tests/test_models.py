from rpc_swagger.idl.model import IdlFile, TypeDescriptor
from rpc_swagger.openapi.models import Document, Parameter, PathItem, Operation, Schema


class TestTypeDescriptor:
    def test_primitive(self):
        t = TypeDescriptor(name="i64")
        assert t.is_primitive()
        assert not t.is_struct()

    def test_containers(self):
        assert TypeDescriptor(name="list", value_type=TypeDescriptor(name="string")).is_list()
        assert TypeDescriptor(name="set", value_type=TypeDescriptor(name="string")).is_set()
        m = TypeDescriptor(
            name="map",
            key_type=TypeDescriptor(name="string"),
            value_type=TypeDescriptor(name="i32"),
        )
        assert m.is_map()
        assert not m.is_struct()

    def test_struct_reference(self):
        assert TypeDescriptor(name="User").is_struct()


class TestIdlFile:
    def test_get_struct(self):
        idl = IdlFile.model_validate({
            "structs": [{"name": "User", "fields": [{"name": "id", "type": {"name": "i64"}}]}],
        })
        assert idl.get_struct("User").fields[0].name == "id"
        assert idl.get_struct("Missing") is None

    def test_defaults(self):
        idl = IdlFile()
        assert idl.services == []
        assert idl.structs == []


class TestOpenApiModels:
    def test_schema_dumps_camel_case(self):
        s = Schema(type="string", max_length=10, min_length=1)
        assert s.model_dump(by_alias=True, exclude_none=True) == {
            "maxLength": 10,
            "minLength": 1,
            "type": "string",
        }

    def test_schema_reference(self):
        s = Schema.reference("User")
        assert s.is_reference()
        assert s.model_dump(by_alias=True, exclude_none=True) == {"$ref": "#/components/schemas/User"}

    def test_accepts_snake_and_camel_case(self):
        assert Schema.model_validate({"max_length": 5}).max_length == 5
        assert Schema.model_validate({"maxLength": 5}).max_length == 5

    def test_extension_fields_kept(self):
        s = Schema.model_validate({"type": "string", "x-order": 3})
        assert s.model_dump(by_alias=True, exclude_none=True) == {"type": "string", "x-order": 3}

    def test_parameter_aliases(self):
        p = Parameter.model_validate({"name": "id", "in": "path", "schema": {"type": "string"}})
        assert p.in_ == "path"
        assert p.schema_.type == "string"
        assert p.model_dump(by_alias=True, exclude_none=True) == {
            "name": "id",
            "in": "path",
            "schema": {"type": "string"},
        }

    def test_path_item_operations_in_slot_order(self):
        item = PathItem(post=Operation(operation_id="b"), get=Operation(operation_id="a"))
        assert [op.operation_id for op in item.operations()] == ["a", "b"]

    def test_document_defaults_are_independent(self):
        d1 = Document()
        d2 = Document()
        d1.components.schemas["X"] = Schema(type="object")
        d1.info.title = "changed"
        assert d2.components.schemas == {}
        assert d2.info.title is None
