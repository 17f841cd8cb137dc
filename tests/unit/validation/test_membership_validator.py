"""
Unit Tests for MembershipValidator
==================================

Test Coverage
-------------
- Option handling (mapping, dataclass, keyword, setters)
- Missing haystack as a configuration error
- STRICT / LOOSE / LOOSE_SAFE comparisons, flat and recursive
- Numeric-prefix coercion guard
- Failure messages

Testing Strategy
----------------
- AAA pattern (Arrange, Act, Assert)
- One behavior per test
"""

import pytest

from inputguard import (
    ComparisonMode,
    InvalidArgumentError,
    MembershipOptions,
    MembershipValidator,
    MissingOptionError,
)


# ============================================================================
# CONFIGURATION
# ============================================================================


@pytest.mark.unit
@pytest.mark.validation
class TestMembershipConfiguration:
    """Options and accessors."""

    def test_messages_empty_by_default(self, membership_validator):
        assert membership_validator.get_messages() == {}

    def test_get_haystack(self, membership_validator):
        assert membership_validator.haystack == [1, 2, 3]

    def test_unset_haystack_raises(self):
        """Reading a haystack that was never configured is a programmer error."""
        validator = MembershipValidator()

        with pytest.raises(MissingOptionError) as exc_info:
            _ = validator.haystack

        assert "haystack option is mandatory" in str(exc_info.value)

    def test_validating_without_haystack_raises(self):
        validator = MembershipValidator()

        with pytest.raises(MissingOptionError):
            validator.is_valid(1)

        assert validator.get_messages() == {}

    def test_default_mode_is_loose_safe(self, membership_validator):
        assert membership_validator.strict is ComparisonMode.LOOSE_SAFE

    def test_setting_a_new_haystack(self, membership_validator):
        membership_validator.set_haystack([1, "a", 2.3])

        assert membership_validator.haystack == [1, "a", 2.3]

    def test_haystack_must_be_a_collection(self):
        with pytest.raises(InvalidArgumentError):
            MembershipValidator(haystack="abc")

    def test_setting_modes(self, mixed_haystack):
        # Arrange
        validator = MembershipValidator(haystack=mixed_haystack)

        # Act & Assert
        validator.set_strict(ComparisonMode.STRICT)
        assert validator.strict is ComparisonMode.STRICT

        validator.set_strict(ComparisonMode.LOOSE)
        assert validator.strict is ComparisonMode.LOOSE

        validator.set_strict(ComparisonMode.LOOSE_SAFE)
        assert validator.strict is ComparisonMode.LOOSE_SAFE

    def test_bool_strict_values(self, membership_validator):
        assert membership_validator.set_strict(True).strict is ComparisonMode.STRICT
        assert membership_validator.set_strict(False).strict is ComparisonMode.LOOSE_SAFE

    def test_strict_via_options(self):
        validator = MembershipValidator({"haystack": ["test", 0, "A"], "strict": True})

        assert validator.strict is ComparisonMode.STRICT

    def test_strict_as_string(self):
        validator = MembershipValidator(haystack=[1], strict="loose")

        assert validator.strict is ComparisonMode.LOOSE

    def test_unknown_mode_rejected(self, membership_validator):
        with pytest.raises(InvalidArgumentError):
            membership_validator.set_strict("sloppy")

        assert membership_validator.strict is ComparisonMode.LOOSE_SAFE

    def test_recursive_option(self, membership_validator):
        assert membership_validator.recursive is False

        membership_validator.set_recursive(True)

        assert membership_validator.recursive is True

    def test_recursive_via_options(self):
        validator = MembershipValidator({"haystack": ["test", 0, "A"], "recursive": True})

        assert validator.recursive is True

    def test_options_dataclass(self):
        options = MembershipOptions(haystack=["x"], strict=ComparisonMode.STRICT, recursive=True)

        validator = MembershipValidator(options)

        assert validator.haystack == ["x"]
        assert validator.strict is ComparisonMode.STRICT
        assert validator.recursive is True

    def test_keyword_overrides_options(self):
        validator = MembershipValidator({"haystack": [1], "recursive": True}, recursive=False)

        assert validator.recursive is False

    def test_unknown_option_rejected(self):
        with pytest.raises(InvalidArgumentError) as exc_info:
            MembershipValidator({"haystack": [1], "strcit": True})

        assert "strcit" in str(exc_info.value)

    def test_setters_chain(self):
        validator = (
            MembershipValidator()
            .set_haystack([1])
            .set_strict(True)
            .set_recursive(True)
        )

        assert validator.is_valid(1) is True

    def test_property_setters(self):
        validator = MembershipValidator()

        validator.haystack = ["a"]
        validator.strict = True
        validator.recursive = True

        assert validator.is_valid("a") is True
        assert validator.strict is ComparisonMode.STRICT


# ============================================================================
# DEFAULT (LOOSE_SAFE) COMPARISONS
# ============================================================================


@pytest.mark.unit
@pytest.mark.validation
class TestLooseSafeComparisons:
    """The default mode: loose, but never coerces non-numeric strings to numbers."""

    def test_options_given_at_construction(self):
        validator = MembershipValidator({"haystack": [1, "a", 2.3]})

        assert validator.is_valid(1)
        assert validator.is_valid(1.0)
        assert validator.is_valid("1")
        assert validator.is_valid("a")
        assert not validator.is_valid("A")
        assert validator.is_valid(2.3)
        assert validator.is_valid(2.3e0)

    def test_non_strict_safe_comparisons(self, mixed_haystack):
        validator = MembershipValidator(haystack=mixed_haystack)

        assert not validator.is_valid("b")
        assert not validator.is_valid("a")
        assert validator.is_valid("A")
        assert validator.is_valid("0")
        assert not validator.is_valid("1a")
        assert validator.is_valid(0)

    def test_recursive(self, nested_haystack):
        validator = MembershipValidator(haystack=nested_haystack, recursive=True)

        assert not validator.is_valid("b")
        assert validator.is_valid("a")
        assert validator.is_valid("A")
        assert validator.is_valid("0")
        assert not validator.is_valid("1a")
        assert validator.is_valid(0)

    def test_numeric_string_equals_float(self):
        validator = MembershipValidator(haystack=[1.5])

        assert validator.is_valid("1.5")
        assert validator.is_valid("1.50")

    def test_bool_is_not_treated_as_number(self):
        """True is loosely equal to any truthy element, including the string 'test'."""
        validator = MembershipValidator(haystack=["test"])

        assert validator.is_valid(True)
        assert not validator.is_valid(False)


# ============================================================================
# STRICT COMPARISONS
# ============================================================================


@pytest.mark.unit
@pytest.mark.validation
class TestStrictComparisons:
    def test_strict(self, mixed_haystack):
        validator = MembershipValidator(haystack=mixed_haystack, strict=ComparisonMode.STRICT)

        assert validator.is_valid("A")
        assert validator.is_valid(0)
        assert not validator.is_valid("b")
        assert not validator.is_valid("a")
        assert not validator.is_valid("0")
        assert not validator.is_valid("1a")

    def test_strict_recursive(self, nested_haystack):
        validator = MembershipValidator(
            haystack=nested_haystack,
            strict=ComparisonMode.STRICT,
            recursive=True,
        )

        assert not validator.is_valid("b")
        assert validator.is_valid("a")
        assert validator.is_valid("A")
        assert not validator.is_valid("0")
        assert not validator.is_valid("1a")
        assert validator.is_valid(0)

    def test_strict_distinguishes_int_float_and_bool(self):
        validator = MembershipValidator(haystack=[1], strict=True)

        assert validator.is_valid(1)
        assert not validator.is_valid(1.0)
        assert not validator.is_valid(True)

    def test_strict_match_has_identical_type(self):
        """Whatever matched under STRICT shares the value's exact type."""
        haystack = [0, 0.0, "0", False, None, [0]]
        validator = MembershipValidator(haystack=haystack, strict=True)

        for value in haystack:
            assert validator.is_valid(value)
            matches = [e for e in haystack if type(e) is type(value) and e == value]
            assert matches


# ============================================================================
# LOOSE COMPARISONS
# ============================================================================


@pytest.mark.unit
@pytest.mark.validation
class TestLooseComparisons:
    """Loose mode converts non-numeric strings to 0 when compared with numbers."""

    def test_loose(self, mixed_haystack):
        validator = MembershipValidator(haystack=mixed_haystack, strict=ComparisonMode.LOOSE)

        assert validator.is_valid("b")
        assert validator.is_valid("a")
        assert validator.is_valid("A")
        assert validator.is_valid("0")
        assert validator.is_valid("1a")
        assert validator.is_valid(0)

    def test_loose_recursive(self, nested_haystack):
        validator = MembershipValidator(
            haystack=nested_haystack,
            strict=ComparisonMode.LOOSE,
            recursive=True,
        )

        assert validator.is_valid("b")
        assert validator.is_valid("a")
        assert validator.is_valid("A")
        assert validator.is_valid("0")
        assert validator.is_valid("1a")
        assert validator.is_valid(0)

    def test_case_is_never_coerced(self):
        validator = MembershipValidator(haystack=["a"], strict=ComparisonMode.LOOSE)

        assert not validator.is_valid("A")


# ============================================================================
# MODE MATRIX: the coercion-vulnerability cases
# ============================================================================


@pytest.mark.unit
@pytest.mark.validation
class TestCoercionGuard:
    @pytest.mark.parametrize(
        "haystack, value, safe, loose, strict",
        [
            (["test", 1, 2], 0, False, True, False),
            (["test", 1, 2], 0.0, False, True, False),
            ([1, 2], "1asdf", False, True, False),
            ([1.5, 2.4], "1.5asdf", False, True, False),
        ],
    )
    def test_modes(self, haystack, value, safe, loose, strict):
        validator = MembershipValidator(haystack=haystack)

        validator.set_strict(ComparisonMode.LOOSE_SAFE)
        assert validator.is_valid(value) is safe

        validator.set_strict(ComparisonMode.LOOSE)
        assert validator.is_valid(value) is loose

        validator.set_strict(ComparisonMode.STRICT)
        assert validator.is_valid(value) is strict

    def test_non_numeric_string_never_matches_number_in_safe_mode(self):
        haystack = [0, 1, 2.5, -3]
        safe = MembershipValidator(haystack=haystack)
        loose = MembershipValidator(haystack=haystack, strict=ComparisonMode.LOOSE)

        for value in ["", "abc", "1abc", "2.5x", "-3 apples"]:
            assert not safe.is_valid(value)
            assert loose.is_valid(value)


# ============================================================================
# RECURSIVE SEARCH
# ============================================================================


@pytest.mark.unit
@pytest.mark.validation
class TestRecursiveSearch:
    def test_recursive_detection_with_mapping_haystack(self):
        validator = MembershipValidator(
            haystack={
                "firstDimension": ["test", 0, "A"],
                "secondDimension": ["value", 2, "a"],
            },
            recursive=False,
        )

        assert not validator.is_valid("A")

        validator.set_recursive(True)

        assert validator.is_valid("A")

    def test_finds_value_two_levels_deep(self):
        validator = MembershipValidator(haystack=[1, [2, [3, "deep"]]])

        assert not validator.is_valid("deep")
        assert validator.set_recursive(True).is_valid("deep")

    def test_non_recursive_compares_whole_collections(self):
        validator = MembershipValidator(haystack=[[1, 2], "x"])

        assert validator.is_valid([1, 2])
        assert not validator.set_recursive(True).is_valid([1, 2])

    def test_self_referencing_haystack_terminates(self):
        haystack = [1]
        haystack.append(haystack)
        validator = MembershipValidator(haystack=haystack, recursive=True)

        assert not validator.is_valid("missing")

    def test_deeply_nested_haystack(self):
        # Arrange
        haystack = ["needle"]
        for _ in range(3000):
            haystack = [0, haystack]
        validator = MembershipValidator(haystack=haystack, recursive=True)

        # Act & Assert
        assert validator.is_valid("needle")
        assert not validator.is_valid("missing")

    def test_walk_order_is_depth_first_pre_order(self):
        haystack = [1, [2, [3]], {"k": 4}, 5]

        assert list(MembershipValidator._walk(haystack)) == [1, 2, 3, 4, 5]

    def test_haystack_not_mutated(self, nested_haystack):
        snapshot = [list(inner) for inner in nested_haystack]
        validator = MembershipValidator(haystack=nested_haystack, recursive=True)

        validator.is_valid("1a")
        validator.is_valid(0)

        assert nested_haystack == snapshot
        assert validator.haystack is nested_haystack


# ============================================================================
# MESSAGES
# ============================================================================


@pytest.mark.unit
@pytest.mark.validation
class TestMembershipMessages:
    def test_failure_records_not_in_array(self, membership_validator):
        assert not membership_validator.is_valid(4)

        assert membership_validator.get_messages() == {
            MembershipValidator.NOT_IN_ARRAY: "The input was not found in the haystack",
        }

    def test_success_clears_messages(self, membership_validator):
        membership_validator.is_valid(4)

        assert membership_validator.is_valid(3)
        assert membership_validator.get_messages() == {}

    def test_message_templates(self, membership_validator):
        assert membership_validator.message_templates == MembershipValidator.MESSAGE_TEMPLATES
        assert membership_validator.message_variables == []

    def test_custom_message_with_value(self):
        validator = MembershipValidator(
            haystack=["de", "fr"],
            messages={"notInArray": "'%value%' is not a supported country"},
        )

        validator.is_valid("xx")

        assert validator.get_messages() == {"notInArray": "'xx' is not a supported country"}

    def test_callable(self, membership_validator):
        assert membership_validator(1) is True
        assert membership_validator(9) is False
