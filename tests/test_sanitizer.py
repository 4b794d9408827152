import pytest

from protoc_objc_names.sanitizer import (
    is_create_name,
    is_init_name,
    is_reserved_c_identifier,
    is_retained_name,
    needs_prefix,
    sanitize,
)


class TestPrefixInjection:
    def test_missing_prefix_is_added(self):
        assert sanitize("ABC", "Foo", "_Class") == ("ABCFoo", "")

    def test_already_prefixed_name_is_kept(self):
        assert sanitize("ABC", "ABCFoo", "_Class") == ("ABCFoo", "")

    def test_lowercase_after_prefix_means_not_prefixed(self):
        assert sanitize("ABC", "ABCclass", "_Class") == ("ABCABCclass", "")

    def test_name_equal_to_prefix_gets_prefixed(self):
        assert sanitize("ABC", "ABC", "_Class") == ("ABCABC", "")

    def test_empty_prefix(self):
        assert not needs_prefix("", "Foo")
        assert sanitize("", "Foo", "_Class") == ("Foo", "")


class TestReservedNames:
    def test_keyword(self):
        assert sanitize("", "class", "_Class") == ("class_Class", "_Class")

    def test_nsobject_method(self):
        assert sanitize("", "description", "_p") == ("description_p", "_p")
        assert sanitize("", "retainCount", "_p") == ("retainCount_p", "_p")

    @pytest.mark.parametrize("name", [
        "awakeFromNib",
        "initialize",
        "load",
        "prepareForInterfaceBuilder",
        "accessibilityElementsHidden",
        "accessibilityViewIsModal",
        "accessibilityActivate",
        "accessibilityElementCount",
        "accessibilityContainer",
        "classForKeyedUnarchiver",
    ])
    def test_nsobject_lifecycle_and_accessibility_methods(self, name):
        assert sanitize("", name, "_p") == (name + "_p", "_p")

    def test_mactypes_name(self):
        assert sanitize("", "Size", "_Class") == ("Size_Class", "_Class")

    def test_check_runs_after_prefixing(self):
        # "Size" is reserved but "GPBSize" is not.
        assert sanitize("GPB", "Size", "_Class") == ("GPBSize", "")

    def test_reserved_c_identifier(self):
        assert is_reserved_c_identifier("_Foo")
        assert is_reserved_c_identifier("__foo")
        assert not is_reserved_c_identifier("_foo")
        assert not is_reserved_c_identifier("_F")
        assert sanitize("", "_Foo", "_p") == ("_Foo_p", "_p")


class TestMemoryManagementNames:
    def test_retained_names(self):
        assert is_retained_name("new")
        assert is_retained_name("newTon")
        assert is_retained_name("new_ton")
        assert not is_retained_name("newton")
        assert is_retained_name("allocFoo")
        assert is_retained_name("mutableCopy")
        assert not is_retained_name("foo")

    def test_init_names(self):
        assert is_init_name("init")
        assert is_init_name("initWithFoo")
        assert not is_init_name("initialized")

    def test_create_names(self):
        assert is_create_name("CreateFoo")
        assert is_create_name("FOOCreate")
        assert is_create_name("Copy_Foo")
        assert not is_create_name("Copyright")
        assert not is_create_name("foo")
