"""Tests for the version factory."""

import time
from concurrent.futures import ThreadPoolExecutor

import pytest

from version_detector import (
    GrammarConfigurationError,
    NullVersion,
    Version,
    VersionDecodeError,
    VersionFactory,
    VersionValidationError,
    detect_version,
    from_array,
    from_json,
    set_version,
)

OPERA_PUBLIC_VERSION = r"^.*?Version/(?P<major>\d+)\.(?P<minor>\d+)"
OPERA_UA = "Opera/9.80 (Windows NT 6.1) Presto/2.12.388 Version/12.16"


@pytest.fixture
def factory():
    """Create a factory with the default grammar."""
    return VersionFactory()


def assert_null(result):
    """Check that every field of a result is empty."""
    assert isinstance(result, NullVersion)
    assert not result.found
    assert result.major is None
    assert result.minor is None
    assert result.micro is None
    assert result.patch is None
    assert result.micropatch is None
    assert result.stability is None
    assert result.build is None
    assert result.get_version() is None
    assert result.is_beta() is None
    assert result.is_alpha() is None


class TestSet:
    """Test direct extraction with set()."""

    @pytest.mark.parametrize("text,major,minor,micro,stability,build,complete", [
        ("34.0.1760.0", "34", "0", "1760", "stable", None, "34.0.1760.0"),
        ("3.9.0.0.22", "3", "9", "0", "stable", None, "3.9.0.0.22"),
        ("4.1.1", "4", "1", "1", "stable", None, "4.1.1"),
        ("7.0", "7", "0", "0", "stable", None, "7.0.0"),
        ("1.17.0-rc", "1", "17", "0", "RC", None, "1.17.0-RC"),
        ("4.3.2f1", "4", "3", "2", "stable", None, "4.3.2"),
        ("v0.1.4", "0", "1", "4", "stable", None, "0.1.4"),
        ("2.0b8", "2", "0", "0", "beta", "8", "2.0.0-beta+8"),
        ("4.0b8", "4", "0", "0", "beta", "8", "4.0.0-beta+8"),
        ("4.0a1", "4", "0", "0", "alpha", "1", "4.0.0-alpha+1"),
        ("4.0dev2", "4", "0", "0", "dev", "2", "4.0.0-dev+2"),
        ("0.0.0", "0", "0", "0", "stable", None, "0.0.0"),
        ("2.0p12", "2", "0", "0", "patch", "12", "2.0.0-patch+12"),
        ("2.0.0-patch+12", "2", "0", "0", "patch", "12", "2.0.0-patch+12"),
        ("4.0.0-beta+8", "4", "0", "0", "beta", "8", "4.0.0-beta+8"),
        ("4.0.0-alpha+1", "4", "0", "0", "alpha", "1", "4.0.0-alpha+1"),
    ])
    def test_set(self, factory, text, major, minor, micro, stability, build, complete):
        """Test extraction of real-world version strings."""
        result = factory.set(text)

        assert isinstance(result, Version)
        assert result.found
        assert result.major == major
        assert result.minor == minor
        assert result.micro == micro
        assert result.stability == stability
        assert result.build == build
        assert result.get_version() == complete

    def test_extra_numeric_components(self, factory):
        """Test that trailing numeric components land in patch and micropatch."""
        result = factory.set("3.9.0.0.22")

        assert result.patch == "0"
        assert result.micropatch == "22"

        result = factory.set("34.0.1760.0")
        assert result.patch == "0"
        assert result.micropatch is None

    def test_components_beyond_micropatch_are_dropped(self, factory):
        """Test that a sixth numeric component is discarded."""
        result = factory.set("1.2.3.4.5.6")
        assert result.get_version() == "1.2.3.4.5"

    def test_leading_zeros_are_preserved(self, factory):
        """Test that digit strings are kept verbatim."""
        result = factory.set("10.03.007")

        assert result.minor == "03"
        assert result.micro == "007"
        assert result.get_version() == "10.03.007"

    @pytest.mark.parametrize("text,complete", [
        ("1.0 Beta 3", "1.0.0-beta+3"),
        ("1.0RC", "1.0.0-RC"),
        ("1.0-rc.2", "1.0.0-RC+2"),
        ("1.0-PL2", "1.0.0-patch+2"),
        ("2.0 D", "2.0.0-dev"),
        (" v2_1", "2.1.0"),
        ("5.0 (Windows NT 10.0)", "5.0.0"),
        ("1.0based", "1.0.0"),
        ("1.0.0.beta", "1.0.0-beta"),
    ])
    def test_loose_inputs(self, factory, text, complete):
        """Test separators, token spellings and silently dropped suffixes."""
        assert factory.set(text).get_version() == complete

    @pytest.mark.parametrize("text", ["XP", "abc", "", "beta", "v", "-.-"])
    def test_no_numeric_major(self, factory, text):
        """Test that text without a leading number yields NullVersion."""
        assert_null(factory.set(text))

    def test_non_string_input(self, factory):
        """Test that non-string input yields NullVersion."""
        assert_null(factory.set(None))
        assert_null(factory.set(42))

    @pytest.mark.parametrize("token", ["RC", "rc", "Rc"])
    def test_rc_is_case_insensitive(self, factory, token):
        """Test release candidate spelling."""
        assert factory.set(f"1.0{token}").stability == "RC"

    @pytest.mark.parametrize("token", ["B", "b", "Beta", "BETA"])
    def test_beta_is_case_insensitive(self, factory, token):
        """Test beta spellings."""
        result = factory.set(f"1.0{token}")

        assert result.stability == "beta"
        assert result.is_beta()
        assert not result.is_alpha()


class TestDetectVersion:
    """Test marker-located extraction with detect_version()."""

    @pytest.mark.parametrize("text,markers,major,minor,micro,stability,build,complete", [
        ("Chrome/34.0.1760.0", ["Chrome"], "34", "0", "1760", "stable", None, "34.0.1760.0"),
        ("Firefox/4.0b8", ["Firefox"], "4", "0", "0", "beta", "8", "4.0.0-beta+8"),
        ("Firefox%20/4.0b8", ["Firefox%20"], "4", "0", "0", "beta", "8", "4.0.0-beta+8"),
        ("Firefox/4.0b8", [None, False, "Firefox"], "4", "0", "0", "beta", "8", "4.0.0-beta+8"),
    ])
    def test_detect_version(self, factory, text, markers, major, minor, micro, stability, build, complete):
        """Test detection after a marker."""
        result = factory.detect_version(text, markers)

        assert isinstance(result, Version)
        assert result.major == major
        assert result.minor == minor
        assert result.micro == micro
        assert result.stability == stability
        assert result.build == build
        assert result.get_version() == complete

    def test_marker_not_found(self, factory):
        """Test that a missing marker yields NullVersion."""
        assert_null(factory.detect_version("Firefox/4.0b8", ["Chrome"]))

    @pytest.mark.parametrize("markers", [[], [None], [False], ["", None, False], None])
    def test_no_usable_markers(self, factory, markers):
        """Test that marker lists without usable entries yield NullVersion."""
        assert_null(factory.detect_version("Firefox/4.0b8", markers))

    def test_marker_without_version(self, factory):
        """Test that a marker followed by no number yields NullVersion."""
        assert_null(factory.detect_version("Chrome/abc", ["Chrome"]))

    def test_markers_are_tried_in_order(self, factory):
        """Test that the first listed marker present wins."""
        ua = "Mozilla/5.0 (Windows NT 10.0) Chrome/91.0.4472.124 Safari/537.36"

        assert factory.detect_version(ua, ["Chrome", "Safari"]).get_version() == "91.0.4472.124"
        assert factory.detect_version(ua, ["Safari", "Chrome"]).get_version() == "537.36.0"
        assert factory.detect_version(ua, ["Edge", "Safari"]).get_version() == "537.36.0"

    def test_earliest_occurrence_is_used(self, factory):
        """Test that a repeated marker resolves to its first occurrence."""
        assert factory.detect_version("Foo/1.0 Foo/2.0", ["Foo"]).get_version() == "1.0.0"

    def test_marker_inside_user_agent(self, factory):
        """Test a marker in the middle of a user agent."""
        ua = "Mozilla/5.0 (Windows NT 6.1; rv:2.0b8) Gecko/20100101 Firefox/4.0b8"
        result = factory.detect_version(ua, ["rv:"])

        assert result.get_version() == "2.0.0-beta+8"

    def test_empty_text(self, factory):
        """Test that empty or non-string text yields NullVersion."""
        assert_null(factory.detect_version("", ["Chrome"]))
        assert_null(factory.detect_version(None, ["Chrome"]))


class TestResultShape:
    """Test that results are never partially populated."""

    @pytest.mark.parametrize("text", [
        "7.0", "XP", "", "2.0b8", "Chrome/1", "1.0based", "v", "4.3.2f1", "rc1",
    ])
    def test_set_result_shape(self, factory, text):
        """Test set() results are either complete or entirely empty."""
        result = factory.set(text)

        if result.found:
            assert result.major is not None
            assert result.minor is not None
            assert result.micro is not None
            assert result.stability is not None
        else:
            assert_null(result)

    @pytest.mark.parametrize("text,markers", [
        ("Chrome/34.0", ["Chrome"]),
        ("Chrome/34.0", ["Firefox"]),
        ("Chrome/", ["Chrome"]),
        ("Chrome", ["Chrome"]),
    ])
    def test_detect_result_shape(self, factory, text, markers):
        """Test detect_version() results are either complete or entirely empty."""
        result = factory.detect_version(text, markers)

        if result.found:
            assert result.major is not None
        else:
            assert_null(result)


class TestFromArray:
    """Test building versions from structured data."""

    def test_from_array(self, factory):
        """Test building a version from a field mapping."""
        data = {
            "major": "4",
            "minor": "0",
            "micro": "0",
            "stability": "beta",
            "build": "8",
        }
        result = factory.from_array(data)

        assert isinstance(result, Version)
        assert result.major == "4"
        assert result.minor == "0"
        assert result.micro == "0"
        assert result.stability == "beta"
        assert result.build == "8"
        assert result.is_beta()
        assert not result.is_alpha()

    def test_from_array_defaults(self, factory):
        """Test that only major is required."""
        result = factory.from_array({"major": "4"})

        assert result == Version(major="4")
        assert result.get_version() == "4.0.0"
        assert result.stability == "stable"

    def test_from_array_none_values(self, factory):
        """Test that explicit None values are treated as absent."""
        result = factory.from_array({
            "major": "1",
            "minor": None,
            "micro": None,
            "patch": None,
            "micropatch": None,
            "stability": None,
            "build": None,
        })
        assert result.get_version() == "1.0.0"

    def test_from_array_stability_case(self, factory):
        """Test that stability labels are stored canonically."""
        assert factory.from_array({"major": "1", "stability": "rc"}).stability == "RC"
        assert factory.from_array({"major": "1", "stability": "ALPHA"}).stability == "alpha"

    def test_from_array_ignores_unknown_keys(self, factory):
        """Test that extra keys do not affect the result."""
        result = factory.from_array({"major": "1", "version": "1.0.0", "source": "ua"})
        assert result.get_version() == "1.0.0"

    @pytest.mark.parametrize("text", [
        "7.0",
        "2.0b8",
        "3.9.0.0.22",
        "10.03.007",
        "1.17.0-rc",
        "2.0.0-patch+12",
        "3.9.0.0.22-beta+7",
        "12.٠",
        "1.0b８",
    ])
    def test_round_trip(self, factory, text):
        """Test that reading fields back through from_array is lossless."""
        original = factory.set(text)

        assert factory.from_array(original.to_dict()) == original
        assert factory.from_json(original.to_json()) == original

    @pytest.mark.parametrize("text", ["٣.٠", "１２.０b８"])
    def test_non_ascii_digits_are_not_versions(self, factory, text):
        """Test that only ASCII digits are extracted, so every result round-trips."""
        assert_null(factory.set(text))

    def test_custom_grammar_non_digit_fields_are_dropped(self):
        """Test that a grammar capturing letters as numbers finds nothing."""
        factory = VersionFactory(pattern=r"(?P<major>[a-z]+)")

        assert_null(factory.set("XP"))

    @pytest.mark.parametrize("data", [
        ["major", "4"],
        "4.0",
        None,
        {},
        {"minor": "1"},
        {"major": 4},
        {"major": ""},
        {"major": "4a"},
        {"major": "4", "minor": "x"},
        {"major": "4", "micro": 0},
        {"major": "4", "patch": "1.2"},
        {"major": "4", "build": 8},
        {"major": "4", "stability": "gamma"},
        {"major": "4", "stability": "b"},
        {"major": "4", "stability": 5},
    ])
    def test_from_array_rejects_malformed(self, factory, data):
        """Test structural validation errors."""
        with pytest.raises(VersionValidationError):
            factory.from_array(data)


class TestFromJson:
    """Test building versions from JSON text."""

    def test_from_json(self, factory):
        """Test building a version from JSON."""
        result = factory.from_json('{"major": "4", "minor": "0", "micro": "0", "stability": "beta", "build": "8"}')

        assert result.get_version() == "4.0.0-beta+8"
        assert result.is_beta()
        assert not result.is_alpha()

    @pytest.mark.parametrize("text", ["not json", "{", "[1, 2]", "null", '"4.0"', "", 42, None])
    def test_from_json_rejects_undecodable(self, factory, text):
        """Test deserialization errors."""
        with pytest.raises(VersionDecodeError):
            factory.from_json(text)

    def test_from_json_rejects_deeply_nested_input(self, factory):
        """Test that nesting beyond the decoder's limit is a decode error."""
        with pytest.raises(VersionDecodeError, match="Invalid version JSON"):
            factory.from_json("[" * 200000)

    def test_from_json_validates_decoded_object(self, factory):
        """Test that decoded objects go through structural validation."""
        with pytest.raises(VersionValidationError) as exc_info:
            factory.from_json('{"major": 4}')

        assert not isinstance(exc_info.value, VersionDecodeError)

    def test_decode_error_is_validation_error(self):
        """Test the error hierarchy."""
        assert issubclass(VersionDecodeError, VersionValidationError)
        assert issubclass(VersionValidationError, ValueError)


class TestGrammarConfiguration:
    """Test grammar replacement."""

    def test_default_state(self, factory):
        """Test that a new factory uses the default grammar."""
        assert factory.is_default
        assert factory.grammar.name == "default"

    def test_set_regex(self, factory):
        """Test replacing the grammar with a remapping pattern."""
        assert not factory.set(OPERA_UA).found

        factory.set_regex(OPERA_PUBLIC_VERSION)

        assert not factory.is_default
        assert factory.pattern == OPERA_PUBLIC_VERSION
        assert factory.set(OPERA_UA).get_version() == "12.16.0"

    def test_constructor_pattern(self):
        """Test configuring the grammar at construction."""
        factory = VersionFactory(pattern=OPERA_PUBLIC_VERSION)
        assert factory.set(OPERA_UA).get_version() == "12.16.0"

    def test_with_regex_leaves_original_untouched(self, factory):
        """Test that with_regex returns an independent factory."""
        remapped = factory.with_regex(OPERA_PUBLIC_VERSION)

        assert remapped is not factory
        assert factory.is_default
        assert remapped.set(OPERA_UA).get_version() == "12.16.0"
        assert not factory.set(OPERA_UA).found
        assert factory.detect_version(OPERA_UA, ["Opera"]).get_version() == "9.80.0"

    @pytest.mark.parametrize("pattern", ["(", "(?P<major>\\d+", "[", "", None, r"(?P<minor>\d+)", r"\d+"])
    def test_set_regex_rejects_bad_patterns(self, factory, pattern):
        """Test configuration errors surface immediately."""
        with pytest.raises(GrammarConfigurationError):
            factory.set_regex(pattern)

    def test_failed_set_regex_keeps_previous_grammar(self, factory):
        """Test that a rejected pattern does not change the factory."""
        with pytest.raises(GrammarConfigurationError):
            factory.set_regex("(")

        assert factory.is_default
        assert factory.set("2.0b8").get_version() == "2.0.0-beta+8"

    def test_constructor_rejects_bad_pattern(self):
        """Test configuration errors at construction."""
        with pytest.raises(GrammarConfigurationError):
            VersionFactory(pattern="(?P<build>\\d+)")

    def test_custom_grammar_without_optional_groups(self):
        """Test that undeclared groups are treated as absent."""
        factory = VersionFactory(pattern=r"(?P<major>\d+)")
        result = factory.set("12abc")

        assert result.get_version() == "12.0.0"
        assert result.stability == "stable"
        assert result.build is None

    def test_custom_grammar_applies_to_detect_version(self):
        """Test that the configured grammar is used after locating."""
        factory = VersionFactory(pattern=r"\s*build\s+(?P<major>\d+)")
        result = factory.detect_version("MyApp build 42", ["MyApp"])

        assert result.get_version() == "42.0.0"

    def test_from_grammar(self):
        """Test selecting a registered grammar."""
        factory = VersionFactory.from_grammar("strict")

        assert factory.grammar.name == "strict"
        assert not factory.set("4.3.2f1").found
        assert factory.set("1.0-rc1").get_version() == "1.0.0-RC+1"
        assert factory.set("2.0 stable").get_version() == "2.0.0"

    def test_from_grammar_unknown(self):
        """Test unknown grammar names."""
        with pytest.raises(GrammarConfigurationError, match="Unknown grammar"):
            VersionFactory.from_grammar("does-not-exist")


class TestAdversarialInput:
    """Test that the default grammar stays fast on hostile input."""

    @pytest.mark.parametrize("text", [
        "1" * 100000,
        "/" * 100000 + "x",
        "1." * 50000,
        "1-" * 50000 + "b",
        " " * 100000,
        "-_" * 50000 + "1",
        "1.0" + "b" * 100000,
    ])
    def test_set_is_fast(self, factory, text):
        """Test long digit runs and repeated separators."""
        start = time.perf_counter()
        factory.set(text)
        assert time.perf_counter() - start < 1.0

    def test_detect_version_on_long_text(self, factory):
        """Test locating in long text without a marker."""
        text = "Mozilla/5.0 " * 20000

        start = time.perf_counter()
        result = factory.detect_version(text, ["Chrome", "Firefox"])

        assert not result.found
        assert time.perf_counter() - start < 1.0

    def test_long_digit_run_is_kept_verbatim(self, factory):
        """Test that a long major survives unchanged."""
        assert factory.set("9" * 500).major == "9" * 500


class TestModuleFunctions:
    """Test the shared default-grammar helpers."""

    def test_set_version(self):
        """Test the set_version helper."""
        result = set_version("7.0")

        assert result.major == "7"
        assert result.minor == "0"
        assert result.micro == "0"
        assert result.stability == "stable"
        assert result.build is None
        assert result.get_version() == "7.0.0"

    def test_detect_version(self):
        """Test the detect_version helper."""
        assert detect_version("Chrome/34.0.1760.0", ["Chrome"]).get_version() == "34.0.1760.0"
        assert not detect_version("Firefox/4.0b8", ["Chrome"]).found

    def test_from_array_and_json(self):
        """Test the structured data helpers."""
        assert from_array({"major": "2", "stability": "beta", "build": "8"}).get_version() == "2.0.0-beta+8"
        assert from_json('{"major": "2"}').get_version() == "2.0.0"

    def test_concurrent_use(self):
        """Test a shared factory from several threads."""
        factory = VersionFactory()
        inputs = ["2.0b8", "7.0", "XP", "1.17.0-rc"] * 50

        with ThreadPoolExecutor(max_workers=8) as executor:
            results = list(executor.map(factory.set, inputs))

        assert [r.get_version() for r in results[:4]] == ["2.0.0-beta+8", "7.0.0", None, "1.17.0-RC"]
        assert results[4:8] == results[:4]
