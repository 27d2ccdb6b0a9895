"""
Unit tests for default values and example synthesis

Tests:
- DefaultValueProbe: builder factory, constructor, sentinel, failures
- ExampleSynthesizer: structural examples per kind
"""

from datetime import datetime
from decimal import Decimal

import pytest

from apidoc.builder.defaults import NO_DEFAULT, DefaultValueError, DefaultValueProbe, normalize_default
from apidoc.builder.examples import STREAM_PLACEHOLDER, ExampleSynthesizer
from apidoc.introspection.types import MultipartFile
from apidoc.schema.models import Kind, Member, Option
from tests.sample_api import Exploding, Status, User


class Built:
    """Instantiated through its builder factory"""

    def __init__(self, value):
        self.value = value

    @classmethod
    def builder(cls):
        return _BuiltBuilder()


class _BuiltBuilder:
    def build(self):
        return Built("from-builder")


class NeedsArguments:
    def __init__(self, value):
        self.value = value


@pytest.fixture
def probe():
    return DefaultValueProbe()


@pytest.fixture
def synthesizer():
    return ExampleSynthesizer()


# ============================================================================
# TEST: DefaultValueProbe
# ============================================================================


class TestDefaultValueProbe:
    """Tests for DefaultValueProbe"""

    def test_constructor_defaults(self, probe):
        assert probe.default_of(User, "nickname") == "anonymous"
        assert probe.default_of(User, "user_id") == 0

    def test_empty_string_is_no_default(self, probe):
        assert probe.default_of(User, "name") is None

    def test_enum_default_is_member_name(self, probe):
        assert probe.default_of(User, "status") == "ACTIVE"

    def test_builder_factory(self, probe):
        assert probe.default_of(Built, "value") == "from-builder"

    def test_required_arguments_have_no_default(self, probe):
        assert probe.instance_of(NeedsArguments) is NO_DEFAULT
        assert probe.default_of(NeedsArguments, "value") is None

    def test_one_instance_per_class(self, probe):
        assert probe.instance_of(User) is probe.instance_of(User)

    def test_failing_constructor(self, probe):
        with pytest.raises(DefaultValueError):
            probe.default_of(Exploding, "value")

    def test_normalize(self):
        assert normalize_default("") is None
        assert normalize_default(Status.BLOCKED) == "BLOCKED"
        assert normalize_default(Decimal("1.5")) == Decimal("1.5")
        assert not NO_DEFAULT


# ============================================================================
# TEST: ExampleSynthesizer
# ============================================================================


class TestExampleSynthesizer:
    """Tests for ExampleSynthesizer"""

    @pytest.mark.parametrize(
        "kind, expected",
        [
            (Kind.BOOLEAN, "true"),
            (Kind.INTEGER, "1"),
            (Kind.FLOAT, "1.0"),
            (Kind.STRING, '""'),
            (Kind.FILE, STREAM_PLACEHOLDER),
            (Kind.READER, STREAM_PLACEHOLDER),
            (Kind.WRITER, STREAM_PLACEHOLDER),
        ],
    )
    def test_leaf_examples(self, synthesizer, kind, expected):
        assert synthesizer.synthesize(Member(name="x", kind=kind)) == expected

    def test_multiple(self, synthesizer):
        assert synthesizer.synthesize(Member(name="x", kind=Kind.INTEGER, multiple=True)) == "[1]"

    def test_file_placeholder(self, synthesizer):
        member = Member(name="file", kind=Kind.FILE, original=MultipartFile)

        assert synthesizer.synthesize(member) == "[1]"

    def test_first_option(self, synthesizer):
        member = Member(name="status", kind=Kind.STRING, options=(Option("A"), Option("B")))

        assert synthesizer.synthesize(member) == '"A"'

    def test_formatted_date(self, synthesizer):
        member = Member(name="created", kind=Kind.DATE, format="%Y")

        assert synthesizer.synthesize(member) == f'"{datetime.now().year}"'

    def test_epoch_date(self, synthesizer):
        example = synthesizer.synthesize(Member(name="created", kind=Kind.DATE))

        assert example.isdigit()

    def test_object(self, synthesizer):
        children = (
            Member(name="a", kind=Kind.INTEGER, example="1"),
            Member(name="b", kind=Kind.STRING, example='"x"'),
            Member(name="c", kind=Kind.OBJECT, children=()),
        )
        member = Member(name="o", kind=Kind.OBJECT, children=children)

        assert synthesizer.synthesize(member) == '{"a":1, "b":"x", "c":null}'

    def test_object_without_members(self, synthesizer):
        assert synthesizer.synthesize(Member(name="o", kind=Kind.OBJECT, children=())) is None
        assert synthesizer.synthesize(Member(name="o", kind=Kind.OBJECT, multiple=True, children=())) == "[]"
