"""
Unit tests for the Naming Resolver

Tests:
- Naming strategies and the strategy registry
- Member name precedence (Rename > JsonProperty > strategy)
- Parameter names from RequestParam
"""

import pytest

from apidoc.introspection.annotations import JsonNaming, JsonProperty, Rename, RequestParam
from apidoc.introspection.naming import (
    NamingStrategy,
    get_naming_strategy,
    register_naming_strategy,
    resolve_member_name,
    resolve_parameter_name,
    split_words,
)


# ============================================================================
# TEST: strategies
# ============================================================================


class TestNamingStrategies:
    """Tests for the built-in strategies"""

    @pytest.mark.parametrize(
        "strategy, expected",
        [
            (NamingStrategy.IDENTITY, "userName"),
            (NamingStrategy.SNAKE_CASE, "user_name"),
            (NamingStrategy.UPPER_CAMEL_CASE, "UserName"),
            (NamingStrategy.LOWER_CASE, "username"),
            (NamingStrategy.KEBAB_CASE, "user-name"),
            (NamingStrategy.LOWER_CAMEL_CASE, "userName"),
        ],
    )
    def test_camel_input(self, strategy, expected):
        assert get_naming_strategy(strategy)("userName") == expected

    def test_snake_input(self):
        assert get_naming_strategy(NamingStrategy.LOWER_CAMEL_CASE)("user_name") == "userName"
        assert get_naming_strategy("upper_camel_case")("user_name") == "UserName"

    def test_acronyms(self):
        assert split_words("HTTPStatusCode") == ["HTTP", "Status", "Code"]

    def test_unknown_strategy_is_lower_camel(self):
        assert get_naming_strategy("no-such-strategy")("user_name") == "userName"

    def test_register_custom_strategy(self):
        register_naming_strategy("shout", str.upper)

        assert resolve_member_name("userName", (JsonNaming("shout"),)) == "USERNAME"


# ============================================================================
# TEST: member / parameter names
# ============================================================================


class TestResolveNames:
    """Tests for resolve_member_name / resolve_parameter_name"""

    def test_rename_wins(self):
        metadata = (JsonProperty("email_address"), Rename("mail"))

        assert resolve_member_name("email", metadata) == "mail"

    def test_json_property(self):
        assert resolve_member_name("user_id", (JsonProperty("id"),)) == "id"

    def test_blank_json_property_is_ignored(self):
        assert resolve_member_name("userId", (JsonProperty("  "),)) == "userId"

    def test_own_strategy(self):
        metadata = (JsonNaming(NamingStrategy.KEBAB_CASE),)

        assert resolve_member_name("firstName", metadata) == "first-name"

    def test_case_conversion(self):
        assert resolve_member_name("firstName", (), enable_case_conversion=True) == "first_name"

    def test_identity_by_default(self):
        assert resolve_member_name("firstName", ()) == "firstName"

    def test_parameter_value_then_name(self):
        assert resolve_parameter_name("q", (RequestParam("query"),)) == "query"
        assert resolve_parameter_name("q", (RequestParam(name="search"),)) == "search"
        assert resolve_parameter_name("q", ()) == "q"
