import pytest
import yaml

from api_lint_types.dialects.registries import build_registry
from api_lint_types.model.base import ViolationCode
from api_lint_types.walk import walk

PETSTORE = """
openapi: 3.0.3
info:
  title: Petstore
  version: 1.0.0
  x-audience: public
paths:
  /pets:
    get:
      summary: List all pets
      parameters:
        - name: limit
          in: query
          schema:
            type: integer
            minimum: 1
      responses:
        200:
          description: A list of pets
          content:
            application/json:
              schema:
                $ref: '#/components/schemas/Pets'
              example:
                - id: 1
                  nmae: not validated
components:
  schemas:
    Pet:
      type: object
      required: [id, petType]
      properties:
        id:
          type: integer
        petType:
          type: string
      discriminator:
        propertyName: petType
        mapping:
          dog: Dog
          cat: '#/components/schemas/Cat'
    Pets:
      type: array
      items:
        $ref: '#/components/schemas/Pet'
    Cat:
      allOf:
        - $ref: '#/components/schemas/Pet'
  securitySchemes:
    bearer:
      type: http
      scheme: bearer
      bearerFormat: JWT
"""


def _pointer_resolver(document):
    def resolve(pointer):
        if not pointer.startswith("#/"):
            return None
        node = document
        for part in pointer[2:].split("/"):
            if not isinstance(node, dict) or part not in node:
                return None
            node = node[part]
        return node

    return resolve


@pytest.fixture(scope="module")
def oas3():
    return build_registry("oas3")


class TestWalkValidDocument:
    def test_no_violations(self, oas3):
        document = yaml.safe_load(PETSTORE)
        assert walk(oas3, document) == []

    def test_follows_refs_and_mapping_pointers(self, oas3):
        document = yaml.safe_load(PETSTORE)
        assert walk(oas3, document, resolve_ref=_pointer_resolver(document)) == []


class TestWalkViolations:
    def test_unknown_key(self, oas3):
        document = yaml.safe_load(PETSTORE)
        document["info"]["summary"] = "Not an OpenAPI 3.0 field"
        violations = walk(oas3, document)
        assert len(violations) == 1
        assert violations[0].code == ViolationCode.UNKNOWN_KEY
        assert violations[0].path == ["info", "summary"]
        assert violations[0].type_name == "Info"

    def test_missing_required(self, oas3):
        document = yaml.safe_load(PETSTORE)
        del document["info"]["version"]
        parameter = document["paths"]["/pets"]["get"]["parameters"][0]
        del parameter["in"]
        violations = walk(oas3, document)
        found = {(v.code, v.key) for v in violations}
        assert (ViolationCode.MISSING_REQUIRED, "version") in found
        assert (ViolationCode.MISSING_REQUIRED, "in") in found

    def test_missing_required_one_of(self, oas3):
        document = yaml.safe_load(PETSTORE)
        del document["paths"]["/pets"]["get"]["parameters"][0]["schema"]
        violations = walk(oas3, document)
        assert [v.code for v in violations] == [ViolationCode.MISSING_REQUIRED_ONE_OF]
        assert violations[0].path == ["paths", "/pets", "get", "parameters", 0]

    def test_disallowed_security_scheme_key(self, oas3):
        document = yaml.safe_load(PETSTORE)
        document["components"]["securitySchemes"]["bearer"]["flows"] = {}
        violations = walk(oas3, document)
        assert [(v.code, v.key) for v in violations] == [(ViolationCode.DISALLOWED_KEY, "flows")]

    def test_leaf_type_mismatch(self, oas3):
        document = yaml.safe_load(PETSTORE)
        document["info"]["title"] = 42
        violations = walk(oas3, document)
        assert [v.code for v in violations] == [ViolationCode.TYPE_MISMATCH]

    def test_enum_mismatch(self, oas3):
        document = yaml.safe_load(PETSTORE)
        document["paths"]["/pets"]["get"]["parameters"][0]["in"] = "body"
        violations = walk(oas3, document)
        assert [v.code for v in violations] == [ViolationCode.ENUM_MISMATCH]

    def test_sequence_shape_mismatch(self, oas3):
        document = yaml.safe_load(PETSTORE)
        document["paths"]["/pets"]["get"]["parameters"] = {"name": "limit"}
        violations = walk(oas3, document)
        assert violations[0].code == ViolationCode.TYPE_MISMATCH
        assert violations[0].type_name == "ParameterList"

    def test_bad_response_code(self, oas3):
        document = yaml.safe_load(PETSTORE)
        responses = document["paths"]["/pets"]["get"]["responses"]
        responses["success"] = {"description": "ok"}
        violations = walk(oas3, document)
        assert [(v.code, v.key) for v in violations] == [(ViolationCode.UNKNOWN_KEY, "success")]


class TestWalkReferences:
    def test_unresolved_ref(self, oas3):
        document = yaml.safe_load(PETSTORE)
        document["components"]["schemas"]["Pets"]["items"]["$ref"] = "#/components/schemas/Missing"
        violations = walk(oas3, document, resolve_ref=_pointer_resolver(document))
        assert [v.code for v in violations] == [ViolationCode.UNRESOLVED_REF]

    def test_mapping_pointer_to_non_schema(self, oas3):
        document = yaml.safe_load(PETSTORE)
        mapping = document["components"]["schemas"]["Pet"]["discriminator"]["mapping"]
        mapping["cat"] = "#/info/title"
        violations = walk(oas3, document, resolve_ref=_pointer_resolver(document))
        assert [v.code for v in violations] == [ViolationCode.MAPPING_TARGET_NOT_SCHEMA]

    def test_mapping_alias_not_resolved(self, oas3):
        document = yaml.safe_load(PETSTORE)
        calls = []
        resolver = _pointer_resolver(document)

        def tracking(pointer):
            calls.append(pointer)
            return resolver(pointer)

        walk(oas3, document, resolve_ref=tracking)
        assert "Dog" not in calls
        assert "#/components/schemas/Cat" in calls

    def test_cyclic_refs_terminate(self, oas3):
        schemas = {
            "Node": {
                "type": "object",
                "properties": {"children": {"type": "array", "items": {"$ref": "#/Node"}}},
            }
        }
        violations = walk(oas3, schemas["Node"], "Schema", resolve_ref=lambda p: schemas["Node"])
        assert violations == []

    def test_fresh_ref_targets_are_each_checked(self, oas3):
        document = {
            "openapi": "3.0.3",
            "info": {"title": "Many", "version": "1"},
            "paths": {
                f"/items/{i}": {"get": {"responses": {"200": {"$ref": "#/components/responses/Bad"}}}}
                for i in range(50)
            },
        }
        violations = walk(oas3, document, resolve_ref=lambda p: {"description": 7})
        assert len(violations) == 50
        assert {v.code for v in violations} == {ViolationCode.TYPE_MISMATCH}


class TestWalkAsyncApi:
    def test_bindings(self):
        registry = build_registry("asyncapi2")
        document = yaml.safe_load(
            """
asyncapi: 2.6.0
info:
  title: Events
  version: '1'
channels:
  user/signedup:
    bindings:
      kafka:
        topic: users
        partitions: 3
        bindingVersion: '0.4.0'
      sqs:
        anything: goes
    subscribe:
      message:
        payload:
          type: object
          properties:
            id:
              type: string
"""
        )
        assert walk(registry, document) == []

        document["channels"]["user/signedup"]["bindings"]["kafka"]["partitions"] = "three"
        document["channels"]["user/signedup"]["bindings"]["pigeon"] = {}
        codes = sorted(v.code.value for v in walk(registry, document))
        assert codes == ["disallowed-key", "type-mismatch"]
