"""Response and body schemas published under components.schemas.

Shapes shared between schemas are wired through ref() so each one has a
single definition. ExtractRule refers to itself for nested rules.
"""

from scraper_contract.schema.nodes import (
    SchemaNode,
    array,
    boolean,
    integer,
    number,
    obj,
    one_of,
    ref,
    string,
)

INSTRUCTION_TASKS = ("wait", "wait_for", "click", "scroll_x", "scroll_y", "fill", "wait_browser", "evaluate")


def _instruction_param(description: str | None = None) -> SchemaNode:
    return one_of(string(), number(), array(string()), description=description)


COOKIE = obj(
    {
        "name": string("Cookie name"),
        "value": string("Cookie value"),
        "domain": string("Cookie domain"),
        "path": string("Cookie path"),
        "expires": number("Expiration timestamp", nullable=True),
        "httpOnly": boolean("HTTP-only flag"),
        "secure": boolean("Secure flag"),
        "sameSite": string("SameSite attribute", enum=("Strict", "Lax", "None")),
    },
    description="Browser cookie",
)

XHR_REQUEST_DATA = obj(
    {
        "url": string("Request URL"),
        "statusCode": integer("HTTP status code"),
        "method": string("HTTP method (GET, POST, etc.)"),
        "requestHeaders": obj(description="Request headers sent", additional_properties=string()),
        "headers": obj(description="Response headers received", additional_properties=string()),
        "body": string("Response body"),
    },
    required=("url", "statusCode", "method", "requestHeaders", "headers", "body"),
    description="Captured XHR/Fetch request data",
)

IFRAME_DATA = obj(
    {
        "src": string("Iframe source URL"),
        "content": string("Iframe HTML content"),
    },
    required=("src", "content"),
    description="Iframe content data",
)

INDIVIDUAL_INSTRUCTION_REPORT = obj(
    {
        "task": string("The action that was executed", enum=INSTRUCTION_TASKS),
        "params": _instruction_param("Parameters passed to the action"),
        "success": boolean("Whether the action succeeded"),
        "duration": number("Execution time in milliseconds"),
    },
    required=("task", "params", "success", "duration"),
    description="Report for a single JS scenario instruction",
)

JS_SCENARIO_REPORT = obj(
    {
        "tasks": array(ref("IndividualInstructionReport"), "Individual task reports"),
        "taskExecuted": integer("Number of tasks executed"),
        "taskSuccess": integer("Number of successful tasks"),
        "taskFailure": integer("Number of failed tasks"),
        "totalDuration": number("Total execution time in milliseconds"),
    },
    required=("tasks", "taskExecuted", "taskSuccess", "taskFailure", "totalDuration"),
    description="Report of JS scenario execution",
)

VERBOSE_RESULT = obj(
    {
        "body": one_of(
            string("HTML content or extracted data as string"),
            obj(description="Extracted data as JSON object"),
            description="Page content or extracted data",
        ),
        "cookies": array(ref("Cookie"), "Cookies set by the page"),
        "evaluateResults": array(string(), "Results from evaluate actions in js_scenario"),
        "jsScenarioReport": one_of(
            ref("JsScenarioReport"),
            obj(description="Empty object if no scenario was executed", additional_properties=False),
            description="JS scenario execution report",
        ),
        "headers": obj(
            description="Response headers from the target page",
            additional_properties=one_of(string(), array(string())),
        ),
        "type": string("Content type of the response body", enum=("html", "json", "file")),
        "screenshot": string("Base64-encoded PNG screenshot (if requested)", nullable=True),
        "iframes": array(ref("IFrameData"), "Content of iframes on the page"),
        "xhr": array(ref("XHRRequestData"), "Captured XHR/Fetch requests made by the page"),
        "initialStatusCode": integer("HTTP status code of the initial page request", nullable=True),
        "resolvedUrl": string("Final URL after any redirects"),
        "metadata": string("Additional metadata (if available)"),
    },
    required=(
        "body",
        "cookies",
        "evaluateResults",
        "jsScenarioReport",
        "headers",
        "type",
        "screenshot",
        "iframes",
        "xhr",
        "initialStatusCode",
        "resolvedUrl",
    ),
    description="Full response with metadata (returned when json_response=true)",
)

ERROR_RESPONSE = obj(
    {"errorMessage": string("Human-readable error message")},
    required=("errorMessage",),
    description="Error response",
)

EXTRACT_RULE = obj(
    {
        "selector": string("CSS selector to target elements"),
        "type": string("Whether to extract a single item or a list of items", enum=("list", "item")),
        "output": one_of(
            string("Attribute name or special value (@text, @html)"),
            obj(description="Nested extraction rules", additional_properties=ref("ExtractRule")),
            description="What to extract from matched elements",
        ),
        "clean": boolean("Whether to clean/trim the extracted text"),
    },
    required=("selector", "type", "output"),
    description="Rule for extracting data from the page",
)

EXTRACT_RULES = obj(
    description="Extract rules object. Keys are output field names, values are extraction rules.",
    additional_properties=ref("ExtractRule"),
    example={
        "title": {"selector": "h1", "type": "item", "output": "@text"},
        "links": {"selector": "a", "type": "list", "output": "@href"},
    },
)

JS_SCENARIO = obj(
    {
        "instructions": array(
            obj(
                description=(
                    "Single instruction object where key is the action name and value is the parameter. "
                    "Actions: wait (ms), wait_for (selector), click (selector), scroll_x (pixels), "
                    "scroll_y (pixels), fill ([selector, value]), wait_browser "
                    "(load|domcontentloaded|networkidle), evaluate (js code), wait_for_and_click (selector)"
                ),
                min_properties=1,
                max_properties=1,
                additional_properties=_instruction_param(),
            ),
            "List of actions to perform in order",
        ),
        "strict": boolean("If true, stop execution on first failure. Default is true.", default=True),
    },
    required=("instructions",),
    description=(
        "JavaScript scenario to execute on the page. Each instruction is an object with the action name "
        "as key and parameter as value."
    ),
    example={
        "instructions": [
            {"click": "#load-more"},
            {"wait": 1000},
            {"scroll_y": 500},
            {"wait_for": ".lazy-content"},
        ],
        "strict": False,
    },
)

COMPONENT_SCHEMAS: dict[str, SchemaNode] = {
    "VerboseResult": VERBOSE_RESULT,
    "ErrorResponse": ERROR_RESPONSE,
    "Cookie": COOKIE,
    "XHRRequestData": XHR_REQUEST_DATA,
    "IFrameData": IFRAME_DATA,
    "JsScenarioReport": JS_SCENARIO_REPORT,
    "IndividualInstructionReport": INDIVIDUAL_INSTRUCTION_REPORT,
    "ExtractRule": EXTRACT_RULE,
    "ExtractRules": EXTRACT_RULES,
    "JsScenario": JS_SCENARIO,
}
