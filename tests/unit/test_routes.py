"""Tests for the endpoint template registry."""

import pytest

from salesforce_api import routes
from salesforce_api.exceptions import RouteArityError, UnknownRouteError


class TestResolve:
    """Tests for routes.resolve."""

    def test_versions_takes_no_parameters(self):
        assert routes.resolve("versions") == "/services/data"

    def test_object_metadata_path(self):
        """Metadata for Account ends with a trailing slash."""
        assert routes.resolve("sobjects-meta", "31.0", "Account") == (
            "/services/data/v31.0/sobjects/Account/"
        )

    def test_create_target_matches_metadata_path(self):
        assert routes.resolve("sobjects-type", "60.0", "Lead") == routes.resolve(
            "sobjects-meta", "60.0", "Lead"
        )

    def test_record_fields_path(self):
        fields = routes.join_fields(["Name", "Email"])
        path = routes.resolve("sobjects-record-fields", "31.0", "Contact", "003xx", fields)
        assert path == "/services/data/v31.0/sobjects/Contact/003xx?fields=Name,Email"

    def test_record_by_external_id_path(self):
        path = routes.resolve("sobjects-record-by-extid", "31.0", "Account", "Ext_Id__c", "A-1")
        assert path == "/services/data/v31.0/sobjects/Account/Ext_Id__c/A-1"

    @pytest.mark.parametrize(
        "key, expected",
        [
            ("limits", "/services/data/v45.0/limits/"),
            ("resources", "/services/data/v45.0/"),
            ("sobjects", "/services/data/v45.0/sobjects/"),
        ],
    )
    def test_version_only_routes(self, key, expected):
        assert routes.resolve(key, "45.0") == expected

    def test_caller_text_is_not_escaped(self):
        """Only query/search helpers touch caller text."""
        path = routes.resolve("sobjects-record", "31.0", "Account", "a b/c")
        assert path == "/services/data/v31.0/sobjects/Account/a b/c"

    def test_unknown_key_raises(self):
        with pytest.raises(UnknownRouteError, match="nope"):
            routes.resolve("nope")

    def test_unknown_key_is_a_key_error(self):
        with pytest.raises(KeyError):
            routes.resolve("nope")

    def test_wrong_arity_raises(self):
        with pytest.raises(RouteArityError) as exc_info:
            routes.resolve("sobjects-record", "31.0", "Account")

        assert exc_info.value.expected == 3
        assert exc_info.value.got == 2


class TestRegistry:
    """The registry itself is fixed."""

    def test_registry_is_read_only(self):
        with pytest.raises(TypeError):
            routes.API_ROUTES["query"] = "/elsewhere"  # type: ignore[index]

    def test_arity(self):
        assert routes.arity("versions") == 0
        assert routes.arity("query") == 2
        assert routes.arity("sobjects-record-by-extid") == 4


class TestEscaping:
    """Tests for query/search text handling."""

    def test_escape_soql_replaces_spaces_only(self):
        assert routes.escape_soql("SELECT Id FROM Account") == "SELECT+Id+FROM+Account"
        assert routes.escape_soql("WHERE Name = 'A&B'") == "WHERE+Name+=+'A&B'"

    def test_encode_sosl_encodes_braces(self):
        assert routes.encode_sosl("FIND {Acme Inc}") == "FIND+%7BAcme+Inc%7D"

    def test_join_fields_accepts_string(self):
        assert routes.join_fields("Name,Email") == "Name,Email"
        assert routes.join_fields(("Id",)) == "Id"
