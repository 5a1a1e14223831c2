"""Document metadata settings.

Defaults describe the published SuperScraper API. A YAML file can override
any of the top-level sections, e.g.::

    info:
      version: 1.1.0
    servers:
      - url: http://localhost:8080
        description: Staging
"""

from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field

from scraper_contract.errors import ConfigurationError

DEFAULT_DESCRIPTION = """SuperScraper is a unified web scraping API that provides compatibility with multiple scraping services (ScrapingBee, ScrapingAnt, ScraperAPI).

## Features
- JavaScript rendering with headless browser
- Screenshot capture (viewport, full page, or specific element)
- Custom JavaScript execution via scenarios
- Data extraction with CSS selectors
- Proxy support (datacenter and residential)
- Cookie and header forwarding
- XHR/Fetch request capture

## Response Formats
- **HTML (default)**: Returns raw HTML content
- **JSON (json_response=true)**: Returns structured response with metadata
- **Screenshot**: Returns PNG image when only screenshot is requested
- **Extracted data**: Returns JSON when extract_rules are provided

## Compatibility
This API accepts parameters from multiple scraping services:
- **ScrapingBee** (primary): All parameters use ScrapingBee naming
- **ScrapingAnt**: Compatible parameters like `browser`, `js_snippet`, `proxy_type`
- **ScraperAPI**: Compatible parameters like `render`, `premium`, `binary_target`"""


class _Settings(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class Contact(_Settings):
    name: str | None = None
    url: str | None = None
    email: str | None = None


class License(_Settings):
    name: str
    url: str | None = None


class Info(_Settings):
    title: str = "SuperScraper API"
    version: str = "1.0.0"
    description: str = DEFAULT_DESCRIPTION
    contact: Contact | None = Contact(name="Apify", url="https://apify.com")
    license: License | None = License(name="ISC")


class Server(_Settings):
    url: str
    description: str | None = None


class Tag(_Settings):
    name: str
    description: str | None = None


class DocumentSettings(_Settings):
    info: Info = Field(default_factory=Info)
    servers: tuple[Server, ...] = (
        Server(url="https://super-scraper.apify.actor", description="Production server"),
        Server(url="http://localhost:3000", description="Local development server"),
    )
    tags: tuple[Tag, ...] = (Tag(name="Scraping", description="Web scraping operations"),)


def load_settings(file_path: Path) -> DocumentSettings:
    """Read a YAML settings file and overlay it on the defaults.

    Keys inside ``info`` are merged individually; ``servers`` and ``tags``
    replace the default lists.
    """
    text = file_path.read_text(encoding="utf-8")
    try:
        data = yaml.safe_load(text) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"{file_path}: invalid YAML: {e}") from e
    if not isinstance(data, dict):
        raise ConfigurationError(f"{file_path}: expected a mapping at the top level")

    defaults = DocumentSettings()
    merged = defaults.model_dump()
    for key, value in data.items():
        if key == "info" and isinstance(value, dict):
            merged["info"].update(value)
        else:
            merged[key] = value
    return DocumentSettings.model_validate(merged)
