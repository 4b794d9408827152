import io

from protoc_objc_names.models import SchemaFile
from protoc_objc_names.prefix_policy import (
    PrefixCache,
    PrefixOptions,
    prefix_from_package,
    resolve_prefix,
)


def _write(tmp_path, name: str, content: str) -> str:
    path = tmp_path / name
    path.write_text(content)
    return str(path)


class TestResolutionOrder:
    def test_explicit_prefix_wins_over_mapping_and_derivation(self, tmp_path):
        mappings = _write(tmp_path, "map.txt", "foo.bar = MAP\n")
        options = PrefixOptions(use_package_as_prefix=True, package_to_prefix_mappings_path=mappings)
        file = SchemaFile(name="a.proto", package="foo.bar", class_prefix="XYZ")
        assert resolve_prefix(file, options) == "XYZ"

    def test_explicit_empty_prefix_is_honored(self):
        options = PrefixOptions(use_package_as_prefix=True)
        file = SchemaFile(name="a.proto", package="foo.bar", class_prefix="")
        assert resolve_prefix(file, options) == ""

    def test_mapping_wins_over_derivation(self, tmp_path):
        mappings = _write(tmp_path, "map.txt", "foo.bar = MAP\n")
        options = PrefixOptions(use_package_as_prefix=True, package_to_prefix_mappings_path=mappings)
        file = SchemaFile(name="a.proto", package="foo.bar")
        assert resolve_prefix(file, options) == "MAP"

    def test_mapping_used_even_when_derivation_disabled(self, tmp_path):
        mappings = _write(tmp_path, "map.txt", "foo.bar = MAP\n")
        options = PrefixOptions(package_to_prefix_mappings_path=mappings)
        assert resolve_prefix(SchemaFile(name="a.proto", package="foo.bar"), options) == "MAP"

    def test_mapping_for_package_less_file(self, tmp_path):
        mappings = _write(tmp_path, "map.txt", "no_package:dir/a.proto = NP\n")
        options = PrefixOptions(package_to_prefix_mappings_path=mappings)
        assert resolve_prefix(SchemaFile(name="dir/a.proto"), options) == "NP"
        assert resolve_prefix(SchemaFile(name="dir/b.proto"), options) == ""

    def test_derivation_disabled(self):
        file = SchemaFile(name="a.proto", package="foo.bar")
        assert resolve_prefix(file, PrefixOptions()) == ""

    def test_derived_from_package(self):
        options = PrefixOptions(use_package_as_prefix=True)
        file = SchemaFile(name="a.proto", package="foo.bar_baz")
        assert resolve_prefix(file, options) == "Foo_BarBaz_"

    def test_forced_prefix(self):
        options = PrefixOptions(use_package_as_prefix=True, forced_package_prefix="GPB")
        file = SchemaFile(name="a.proto", package="foo.bar")
        assert resolve_prefix(file, options) == "GPBFoo_Bar_"

    def test_exempted_package(self, tmp_path):
        exceptions = _write(tmp_path, "exceptions.txt", "foo.bar\n")
        options = PrefixOptions(use_package_as_prefix=True, package_prefix_exceptions_path=exceptions)
        assert resolve_prefix(SchemaFile(name="a.proto", package="foo.bar"), options) == ""
        assert resolve_prefix(SchemaFile(name="b.proto", package="foo.baz"), options) == "Foo_Baz_"


class TestPrefixFromPackage:
    def test_empty_package(self):
        assert prefix_from_package("", "GPB") == ""

    def test_empty_segments_skipped(self):
        assert prefix_from_package("a..b") == "A_B_"

    def test_case_variants_collide(self):
        assert prefix_from_package("a.b") == prefix_from_package("a.B") == "A_B_"


class TestPrefixCache:
    def test_bad_mappings_file_warns_and_degrades(self, tmp_path):
        mappings = _write(tmp_path, "map.txt", "foo.bar MAP\n")
        stream = io.StringIO()
        options = PrefixOptions(use_package_as_prefix=True, package_to_prefix_mappings_path=mappings)
        cache = PrefixCache.for_options(options, warning_stream=stream)
        file = SchemaFile(name="a.proto", package="foo.bar")
        assert resolve_prefix(file, options, cache) == "Foo_Bar_"
        output = stream.getvalue()
        assert output.startswith("protoc:0: warning: Failed to parse prefix to proto package mappings file")
        assert mappings in output

    def test_missing_exceptions_file_warns(self, tmp_path):
        stream = io.StringIO()
        cache = PrefixCache(exceptions_path=str(tmp_path / "missing.txt"), warning_stream=stream)
        assert not cache.is_package_exempted("foo")
        assert "Failed to parse package prefix exceptions file" in stream.getvalue()

    def test_mappings_loaded_once(self, tmp_path):
        mappings = _write(tmp_path, "map.txt", "foo = OLD\n")
        options = PrefixOptions(package_to_prefix_mappings_path=mappings)
        cache = PrefixCache.for_options(options)
        file = SchemaFile(name="a.proto", package="foo")
        assert resolve_prefix(file, options, cache) == "OLD"

        (tmp_path / "map.txt").write_text("foo = NEW\n")
        assert resolve_prefix(file, options, cache) == "OLD"

    def test_new_path_gets_new_cache(self, tmp_path):
        old = _write(tmp_path, "old.txt", "foo = OLD\n")
        new = _write(tmp_path, "new.txt", "foo = NEW\n")
        options = PrefixOptions(package_to_prefix_mappings_path=old)
        cache = PrefixCache.for_options(options)
        assert PrefixCache.for_options(options, cache) is cache

        moved = options.with_mappings_path(new)
        new_cache = PrefixCache.for_options(moved, cache)
        assert new_cache is not cache
        assert resolve_prefix(SchemaFile(name="a.proto", package="foo"), moved, new_cache) == "NEW"

    def test_empty_exceptions_file(self, tmp_path):
        exceptions = _write(tmp_path, "exceptions.txt", "# nothing here\n")
        cache = PrefixCache(exceptions_path=exceptions)
        assert not cache.is_package_exempted("")
        assert len(cache.exceptions) == 1


class TestFromEnv:
    def test_reads_environment(self):
        options = PrefixOptions.from_env({
            "GPB_OBJC_USE_PACKAGE_AS_PREFIX": "yes",
            "GPB_OBJC_USE_PACKAGE_AS_PREFIX_PREFIX": "GPB",
            "GPB_OBJC_PACKAGE_PREFIX_EXCEPTIONS_PATH": "/tmp/exceptions.txt",
            "GPB_OBJC_PACKAGE_TO_PREFIX_MAPPINGS_PATH": "/tmp/map.txt",
        })
        assert options == PrefixOptions(
            use_package_as_prefix=True,
            forced_package_prefix="GPB",
            package_to_prefix_mappings_path="/tmp/map.txt",
            package_prefix_exceptions_path="/tmp/exceptions.txt",
        )

    def test_defaults(self):
        assert PrefixOptions.from_env({}) == PrefixOptions()

    def test_anything_but_yes_is_false(self):
        options = PrefixOptions.from_env({"GPB_OBJC_USE_PACKAGE_AS_PREFIX": "true"})
        assert options.use_package_as_prefix is False
