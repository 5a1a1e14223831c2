import copy

from scraper_contract.catalog.parameters import get_all
from scraper_contract.generator.document import assemble
from scraper_contract.generator.render import render_document
from scraper_contract.generator.validator import (
    validate_components,
    validate_document,
    validate_instance,
    validate_references,
)
from scraper_contract.schema.components import COMPONENT_SCHEMAS


def _rendered() -> dict:
    return render_document(assemble(get_all(), COMPONENT_SCHEMAS))


def _nested_rule(depth: int) -> dict:
    rule = {"selector": "span", "type": "item", "output": "@text"}
    for level in range(depth):
        rule = {"selector": f"div.level-{level}", "type": "list", "output": {"child": rule}}
    return rule


class TestValidateReferences:
    def test_generated_document_resolves(self):
        assert validate_references(_rendered()) == {}

    def test_unresolved_reference(self):
        doc = _rendered()
        del doc["components"]["schemas"]["Cookie"]
        errors = validate_references(doc)
        assert list(errors) == ["#/components/schemas/VerboseResult/properties/cookies/items"]
        assert "Cookie" in errors["#/components/schemas/VerboseResult/properties/cookies/items"]

    def test_external_reference_rejected(self):
        doc = {"components": {"schemas": {"A": {"$ref": "other.json#/A"}}}}
        errors = validate_references(doc)
        assert "unsupported" in errors["#/components/schemas/A"]


class TestValidateComponents:
    def test_generated_components_are_valid(self):
        assert validate_components(_rendered()) == {}

    def test_malformed_component(self):
        doc = {"components": {"schemas": {"Bad": {"type": "object", "required": "selector"}}}}
        errors = validate_components(doc)
        assert "Bad" in errors
        assert "SchemaError" in errors["Bad"]


class TestValidateDocument:
    def test_all_valid(self):
        assert validate_document(_rendered()) == {}

    def test_reference_error_caught(self):
        doc = copy.deepcopy(_rendered())
        del doc["components"]["schemas"]["ErrorResponse"]
        errors = validate_document(doc)
        assert len(errors) == 4


class TestValidateInstance:
    def test_flat_extract_rules(self):
        rules = {
            "title": {"selector": "h1", "type": "item", "output": "@text"},
            "links": {"selector": "a", "type": "list", "output": "@href", "clean": True},
        }
        assert validate_instance(_rendered(), "ExtractRules", rules) == []

    def test_deeply_nested_extract_rule(self):
        assert validate_instance(_rendered(), "ExtractRule", _nested_rule(25)) == []

    def test_deep_error_is_reported(self):
        rule = _nested_rule(10)
        inner = rule
        for _ in range(9):
            inner = inner["output"]["child"]
        inner["output"]["child"]["type"] = "table"
        assert validate_instance(_rendered(), "ExtractRule", rule) != []

    def test_missing_required_field(self):
        errors = validate_instance(_rendered(), "ExtractRule", {"selector": "h1", "type": "item"})
        assert any("output" in e for e in errors)

    def test_js_scenario_instruction_shape(self):
        doc = _rendered()
        ok = {"instructions": [{"click": "#load-more"}, {"wait": 1000}, {"fill": ["#q", "term"]}]}
        assert validate_instance(doc, "JsScenario", ok) == []
        two_actions = {"instructions": [{"click": "#a", "wait": 10}]}
        assert validate_instance(doc, "JsScenario", two_actions) != []

    def test_error_response(self):
        doc = _rendered()
        assert validate_instance(doc, "ErrorResponse", {"errorMessage": "Timed out"}) == []
        assert validate_instance(doc, "ErrorResponse", {}) != []

    def test_verbose_result_with_null_fields(self):
        result = {
            "body": "<html></html>",
            "cookies": [
                {"name": "session", "value": "abc", "domain": "example.com", "expires": None, "sameSite": "Lax"},
            ],
            "evaluateResults": [],
            "jsScenarioReport": {},
            "headers": {"content-type": "text/html", "set-cookie": ["a=1", "b=2"]},
            "type": "html",
            "screenshot": None,
            "iframes": [{"src": "https://example.com/frame", "content": "<p>hi</p>"}],
            "xhr": [],
            "initialStatusCode": None,
            "resolvedUrl": "https://example.com/",
        }
        assert validate_instance(_rendered(), "VerboseResult", result) == []

    def test_verbose_result_with_scenario_report(self):
        report = {
            "tasks": [{"task": "click", "params": "#load-more", "success": True, "duration": 12.5}],
            "taskExecuted": 1,
            "taskSuccess": 1,
            "taskFailure": 0,
            "totalDuration": 12.5,
        }
        doc = _rendered()
        assert validate_instance(doc, "JsScenarioReport", report) == []
        assert validate_instance(doc, "JsScenarioReport", {"tasks": []}) != []

    def test_scenario_report_rejects_unrelated_object(self):
        result = {
            "body": "",
            "cookies": [],
            "evaluateResults": [],
            "jsScenarioReport": {"ran": True},
            "headers": {},
            "type": "html",
            "screenshot": None,
            "iframes": [],
            "xhr": [],
            "initialStatusCode": 200,
            "resolvedUrl": "https://example.com/",
        }
        errors = validate_instance(_rendered(), "VerboseResult", result)
        assert any(e.startswith("jsScenarioReport") for e in errors)

    def test_non_nullable_field_rejects_null(self):
        cookie = {"name": None, "value": "abc"}
        errors = validate_instance(_rendered(), "Cookie", cookie)
        assert any(e.startswith("name") for e in errors)

    def test_document_left_unchanged(self):
        doc = _rendered()
        before = copy.deepcopy(doc)
        validate_instance(doc, "VerboseResult", {})
        assert doc == before
        assert doc["components"]["schemas"]["VerboseResult"]["properties"]["screenshot"]["nullable"] is True
