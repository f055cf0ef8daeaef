"""Tests for the Version type and the version comparator."""

import random

import pytest

from versioning.version import (
    NO_CEILING,
    NO_FLOOR,
    Ordering,
    Version,
    compare,
    max_version,
    min_version,
)


def v(text):
    return Version.parse(text)


class TestVersionParse:
    """Version.parse normalization."""

    def test_pads_to_three_components(self):
        assert v("14") == Version((14, 0, 0))
        assert v("14.2") == Version((14, 2, 0))

    def test_prerelease_and_build_metadata(self):
        parsed = v("v1.2.3-rc.1+build.5")
        assert parsed.components == (1, 2, 3)
        assert parsed.prerelease == "rc.1"
        assert str(parsed) == "1.2.3-rc.1"

    def test_trailing_zero_components_are_dropped(self):
        assert v("1.2.3.0") == v("1.2.3")
        assert str(v("1.2.3.4")) == "1.2.3.4"

    def test_non_numeric_component_is_kept(self):
        assert v("1.beta.0").components == (1, "beta", 0)

    @pytest.mark.parametrize("text", ["", "   ", "1..2", "-1.0.0", None])
    def test_invalid_input_raises(self, text):
        with pytest.raises(ValueError):
            Version.parse(text)


class TestCompare:
    """Pairwise ordering rules."""

    def test_equal(self):
        assert compare(v("1.2.3"), v("1.2.3")) is Ordering.EQUAL

    def test_numeric_not_lexical(self):
        assert compare(v("1.10.0"), v("1.2.0")) is Ordering.GREATER
        assert compare(v("1.2.3"), v("1.2.4")) is Ordering.LESS

    def test_missing_components_count_as_zero(self):
        assert compare(Version((1, 2, 3, 0)), Version((1, 2, 3))) is Ordering.EQUAL

    def test_prerelease_sorts_before_release(self):
        assert compare(v("1.2.3"), v("1.2.3-beta")) is Ordering.GREATER
        assert compare(v("1.2.3-alpha"), v("1.2.3-beta")) is Ordering.LESS
        assert compare(v("1.2.3-beta"), v("1.2.3-beta")) is Ordering.EQUAL

    def test_non_numeric_component_sorts_low(self):
        assert compare(v("1.beta.0"), v("1.0.0")) is Ordering.LESS
        assert compare(v("1.0.0"), v("1.beta.0")) is Ordering.GREATER

    def test_two_non_numeric_components_tie(self):
        assert compare(v("1.alpha.0"), v("1.beta.0")) is Ordering.EQUAL

    def test_unbounded_sides(self):
        assert compare(NO_FLOOR, v("0.0.0")) is Ordering.LESS
        assert compare(v("999.0.0"), NO_CEILING) is Ordering.LESS
        assert compare(NO_FLOOR, NO_CEILING) is Ordering.LESS
        assert compare(NO_FLOOR, NO_FLOOR) is Ordering.EQUAL
        assert compare(NO_CEILING, NO_CEILING) is Ordering.EQUAL


class TestMinMax:
    """min_version / max_version helpers."""

    def test_min_and_max(self):
        assert min_version(v("1.2.3"), v("1.2.4")) == v("1.2.3")
        assert max_version(v("1.2.3"), v("1.2.4")) == v("1.2.4")

    def test_unbounded_per_side(self):
        assert min_version(NO_FLOOR, v("1.2.3")) is NO_FLOOR
        assert max_version(NO_FLOOR, v("1.2.3")) == v("1.2.3")
        assert min_version(v("1.2.3"), NO_CEILING) == v("1.2.3")
        assert max_version(v("1.2.3"), NO_CEILING) is NO_CEILING


def _random_version(rng):
    components = tuple(rng.randint(0, 3) for _ in range(rng.randint(1, 4)))
    prerelease = rng.choice([None, None, "alpha", "beta", "rc.1"])
    return Version.of(components, prerelease)


def _random_value(rng):
    roll = rng.random()
    if roll < 0.1:
        return NO_FLOOR
    if roll < 0.2:
        return NO_CEILING
    return _random_version(rng)


class TestOrderingProperties:
    """Totality properties over randomly generated triples."""

    def test_reflexive_antisymmetric_transitive(self):
        rng = random.Random(1234)
        for _ in range(2000):
            a, b, c = _random_value(rng), _random_value(rng), _random_value(rng)
            assert compare(a, a) is Ordering.EQUAL
            assert compare(a, b) == -compare(b, a)
            if compare(a, b) <= 0 and compare(b, c) <= 0:
                assert compare(a, c) <= 0
