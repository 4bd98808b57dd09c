"""Tests for NationalIdLookup — resolving the patient's NHS number once per notification."""

import pytest
from dsub.exceptions import IdentityUnresolved
from dsub.identity.fake_resolver import FakeIdentityResolver
from dsub.identity.lookup import NationalIdLookup

AUTHORITY = "2.16.840.1.113883.2.1.3.31.2.1.1"


class TestNationalIdLookup:
    def setup_method(self):
        self.resolver = FakeIdentityResolver()
        self.lookup = NationalIdLookup(self.resolver, AUTHORITY)

    def test_returns_resolved_nhs_id(self):
        self.resolver.register("REG.1", AUTHORITY, "9999999999")
        assert self.lookup.nhs_id_for("REG.1") == "9999999999"

    def test_queries_with_configured_authority(self):
        self.resolver.register("REG.1", AUTHORITY, "9999999999")
        self.lookup.nhs_id_for("REG.1")
        assert self.resolver.calls == [{"local_id": "REG.1", "authority": AUTHORITY}]

    def test_not_found_is_unresolved(self):
        with pytest.raises(IdentityUnresolved, match="no patient returned"):
            self.lookup.nhs_id_for("REG.1")

    @pytest.mark.parametrize("national_id", ["999999999", "99999999999", ""])
    def test_wrong_length_is_unresolved(self, national_id):
        self.resolver.register("REG.1", AUTHORITY, national_id)
        with pytest.raises(IdentityUnresolved, match="10 character"):
            self.lookup.nhs_id_for("REG.1")

    @pytest.mark.parametrize("xds_pid", [None, ""])
    def test_missing_pid_skips_resolver(self, xds_pid):
        with pytest.raises(IdentityUnresolved, match="no XDS patient id"):
            self.lookup.nhs_id_for(xds_pid)
        assert self.resolver.calls == []

    def test_resolver_error_is_unresolved(self):
        self.resolver.configure(should_fail=True)
        with pytest.raises(IdentityUnresolved, match="lookup failed") as exc:
            self.lookup.nhs_id_for("REG.1")
        assert isinstance(exc.value.__cause__, ConnectionError)
