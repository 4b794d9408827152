import pytest

from protoc_objc_names.case_converter import (
    camel_case,
    path_split,
    split_segments,
    strip_proto,
    un_camel_case_enum_short_name,
    un_camel_case_field_name,
)
from protoc_objc_names.models import FieldKind, FieldNode


class TestSplitSegments:
    def test_camel_case_input(self):
        assert split_segments("fooBar") == ["", "foo", "bar"]

    def test_underscore_only_separates(self):
        assert [s for s in split_segments("foo_bar") if s] == ["foo", "bar"]

    def test_digits_form_their_own_segment(self):
        assert [s for s in split_segments("foo22bar") if s] == ["foo", "22", "bar"]

    def test_upper_run_stays_together(self):
        assert [s for s in split_segments("FOO_BAR") if s] == ["foo", "bar"]

    def test_no_recognized_characters(self):
        assert split_segments("__") == [""]


class TestCamelCase:
    def test_snake_case(self):
        assert camel_case("foo_bar", True) == "FooBar"
        assert camel_case("foo_bar", False) == "fooBar"

    def test_upper_segments(self):
        assert camel_case("http_request_url", True) == "HTTPRequestURL"
        assert camel_case("https_port", True) == "HTTPSPort"

    def test_leading_upper_segment_keeps_capital(self):
        assert camel_case("url_path", False) == "URLPath"

    def test_upper_segment_later_does_not_force_capital(self):
        assert camel_case("image_url", False) == "imageURL"

    def test_already_camel_cased(self):
        assert camel_case("FooBar", False) == "fooBar"
        assert camel_case("fooBar", True) == "FooBar"

    def test_screaming_snake(self):
        assert camel_case("FOO_BAR", True) == "FooBar"

    def test_digits(self):
        assert camel_case("foo2bar", True) == "Foo2Bar"
        assert camel_case("value_12", False) == "value12"

    def test_empty_and_separators_only(self):
        assert camel_case("", True) == ""
        assert camel_case("___", False) == ""

    @pytest.mark.parametrize("name", ["FooBar", "Foo2Bar", "Value", "ABCFoo", "MessageV2Thing"])
    def test_idempotent_on_canonical_names(self, name):
        once = camel_case(name, True)
        assert camel_case(once, True) == once


class TestUnCamelCase:
    def test_enum_short_name(self):
        assert un_camel_case_enum_short_name("FooBar") == "FOO_BAR"
        assert un_camel_case_enum_short_name("Foo") == "FOO"

    def test_repeated_field(self):
        field = FieldNode(name="foo_bar", is_repeated=True)
        assert un_camel_case_field_name("fooBarArray", field) == "foo_bar"

    def test_field_with_p_suffix(self):
        field = FieldNode(name="description")
        assert un_camel_case_field_name("description_p", field) == "description"

    def test_non_repeated_array_name_keeps_array(self):
        field = FieldNode(name="foo_array")
        assert un_camel_case_field_name("fooArray_p", field) == "foo_array"

    def test_group_gets_capitalized(self):
        field = FieldNode(name="mygroup", kind=FieldKind.GROUP, group_type_name="MyGroup")
        assert un_camel_case_field_name("myGroup", field) == "MyGroup"


class TestPathHelpers:
    def test_strip_proto(self):
        assert strip_proto("a/b.proto") == "a/b"
        assert strip_proto("x.protodevel") == "x"
        assert strip_proto("x.txt") == "x.txt"

    def test_path_split(self):
        assert path_split("a/b/c.proto") == ("a/b", "c.proto")
        assert path_split("c.proto") == ("", "c.proto")
