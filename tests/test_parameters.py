from collections import Counter

from scraper_contract.catalog.base import ParamKind
from scraper_contract.catalog.parameters import CATALOG, get_all


class TestScraperCatalog:
    def test_url_is_first_and_required(self):
        specs = get_all()
        assert specs[0].name == "url"
        assert specs[0].required is True
        assert [s.name for s in specs if s.required] == ["url"]

    def test_parameter_count(self):
        assert len(get_all()) == 30

    def test_ranges_are_ordered(self):
        for spec in get_all():
            if spec.minimum is not None and spec.maximum is not None:
                assert spec.minimum <= spec.maximum, spec.name

    def test_defaults_match_kind_and_enum(self):
        types = {ParamKind.STRING: str, ParamKind.INTEGER: int, ParamKind.BOOLEAN: bool}
        for spec in get_all():
            if spec.default is None:
                continue
            assert type(spec.default) is types[spec.kind], spec.name
            if spec.enum is not None:
                assert spec.default in spec.enum, spec.name

    def test_no_duplicate_names_or_aliases(self):
        counts = Counter(name for spec in get_all() for name in spec.names)
        assert [name for name, n in counts.items() if n > 1] == []

    def test_stealth_proxy_is_alias_only(self):
        assert CATALOG.get("stealth_proxy") is None
        assert "stealth_proxy" in CATALOG.get("premium_proxy").aliases

    def test_compatibility_aliases(self):
        assert CATALOG.get("render_js").aliases == ("browser", "render")
        assert CATALOG.get("device").aliases == ("device_type",)
        assert CATALOG.get("wait_for").aliases == ("wait_for_selector",)
        assert CATALOG.get("country_code").aliases == ("proxy_country",)
        assert CATALOG.get("premium_proxy").aliases == ("stealth_proxy", "premium", "ultra_premium")

    def test_timeout_range(self):
        timeout = CATALOG.get("timeout")
        assert (timeout.minimum, timeout.maximum, timeout.default) == (1000, 3600000, 140000)
