import pytest

from scraper_contract.catalog.aliases import AliasIndex, all_recognized_names, canonical_name_for, default_index
from scraper_contract.catalog.base import ParamKind, ParameterSpec
from scraper_contract.catalog.parameters import get_all
from scraper_contract.errors import DuplicateNameError


def _spec(name: str, aliases: tuple[str, ...] = (), kind: ParamKind = ParamKind.STRING, **kwargs) -> ParameterSpec:
    return ParameterSpec(name=name, kind=kind, description=f"{name} parameter", aliases=aliases, **kwargs)


class TestResolution:
    def test_every_alias_resolves_to_owner(self):
        index = AliasIndex.from_catalog(get_all())
        for spec in get_all():
            assert index.canonical_name_for(spec.name) == spec.name
            for alias in spec.aliases:
                assert index.canonical_name_for(alias) == spec.name

    def test_unknown_name_not_found(self):
        assert canonical_name_for("nonexistent_xyz") is None

    def test_lookup_is_case_sensitive(self):
        assert canonical_name_for("Render_JS") is None

    def test_third_party_names(self):
        assert canonical_name_for("ultra_premium") == "premium_proxy"
        assert canonical_name_for("stealth_proxy") == "premium_proxy"
        assert canonical_name_for("device_type") == "device"
        assert canonical_name_for("browser") == "render_js"
        assert canonical_name_for("proxy_country") == "country_code"

    def test_all_recognized_names(self):
        names = all_recognized_names()
        assert len(names) == 38
        assert {"url", "render", "wait_for_selector", "premium"} <= names
        assert "nonexistent_xyz" not in names

    def test_aliases_of(self):
        index = default_index()
        assert index.aliases_of("device") == ("device_type",)
        assert index.aliases_of("url") == ()
        assert index.aliases_of("nonexistent_xyz") == ()

    def test_default_index_is_cached(self):
        assert default_index() is default_index()

    def test_contains_and_len(self):
        index = AliasIndex.from_catalog([_spec("device", ("device_type",))])
        assert "device_type" in index
        assert "mobile" not in index
        assert len(index) == 2


class TestScenario:
    def test_premium_proxy_and_device(self):
        index = AliasIndex.from_catalog([
            _spec("premium_proxy", ("stealth_proxy", "premium", "ultra_premium"), kind=ParamKind.BOOLEAN, default=False),
            _spec("device", ("device_type",), enum=("desktop", "mobile"), default="desktop"),
        ])
        assert index.canonical_name_for("ultra_premium") == "premium_proxy"
        assert index.canonical_name_for("device_type") == "device"
        assert index.all_recognized_names() == {
            "premium_proxy", "stealth_proxy", "premium", "ultra_premium", "device", "device_type",
        }


class TestDuplicates:
    def test_alias_shadowing_canonical_name(self):
        with pytest.raises(DuplicateNameError) as exc_info:
            AliasIndex.from_catalog([
                _spec("country_code"),
                _spec("proxy_country", ("country_code",)),
            ])
        err = exc_info.value
        assert err.name == "country_code"
        assert err.existing == "country_code"
        assert err.existing_role == "canonical name"
        assert err.incoming == "proxy_country"
        assert err.incoming_role == "alias"
        assert "proxy_country" in str(err) and "country_code" in str(err)

    def test_canonical_name_shadowing_alias(self):
        with pytest.raises(DuplicateNameError) as exc_info:
            AliasIndex.from_catalog([
                _spec("premium_proxy", ("stealth_proxy",), kind=ParamKind.BOOLEAN),
                _spec("stealth_proxy", kind=ParamKind.BOOLEAN),
            ])
        assert exc_info.value.existing == "premium_proxy"
        assert exc_info.value.existing_role == "alias"
        assert exc_info.value.incoming_role == "canonical name"

    def test_alias_claimed_twice(self):
        with pytest.raises(DuplicateNameError, match="render"):
            AliasIndex.from_catalog([
                _spec("render_js", ("render",), kind=ParamKind.BOOLEAN),
                _spec("js_snippet", ("render",)),
            ])

    def test_alias_repeating_own_name(self):
        with pytest.raises(DuplicateNameError):
            AliasIndex.from_catalog([_spec("wait_for", ("wait_for",))])

    def test_repeated_alias_in_one_spec(self):
        with pytest.raises(DuplicateNameError):
            AliasIndex.from_catalog([_spec("wait_for", ("wait_for_selector", "wait_for_selector"))])

    def test_crafted_duplicate_against_real_catalog(self):
        crafted = _spec("screenshot_mode", ("premium",))
        with pytest.raises(DuplicateNameError, match="premium_proxy"):
            AliasIndex.from_catalog([*get_all(), crafted])
