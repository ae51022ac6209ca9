import pytest

from schemacheck.bounds import Bounds, normalize_bounds

MIN = 100.0
MAX = 200.0


def test_no_exclusive_bounds():
    result = normalize_bounds(MIN, MAX, None, None)
    assert result.minimum == pytest.approx(MIN)
    assert result.maximum == pytest.approx(MAX)
    assert result.minimum_exclusive is False
    assert result.maximum_exclusive is False


def test_less_prohibitive_exclusive_bounds_as_numbers():
    result = normalize_bounds(MIN, MAX, 90.0, 210.0)
    assert result.minimum == pytest.approx(MIN)
    assert result.maximum == pytest.approx(MAX)
    assert result.minimum_exclusive is False
    assert result.maximum_exclusive is False


def test_more_prohibitive_exclusive_bounds_as_numbers():
    result = normalize_bounds(MIN, MAX, 110.0, 190.0)
    assert result.minimum == pytest.approx(110.0)
    assert result.maximum == pytest.approx(190.0)
    assert result.minimum_exclusive is True
    assert result.maximum_exclusive is True


def test_only_exclusive_bounds_as_numbers():
    result = normalize_bounds(None, None, 110.0, 190.0)
    assert result.minimum == pytest.approx(110.0)
    assert result.maximum == pytest.approx(190.0)
    assert result.minimum_exclusive is True
    assert result.maximum_exclusive is True


def test_exclusive_bounds_as_bools():
    result = normalize_bounds(MIN, MAX, True, True)
    assert result.minimum == pytest.approx(MIN)
    assert result.maximum == pytest.approx(MAX)
    assert result.minimum_exclusive is True
    assert result.maximum_exclusive is True


def test_exclusive_bounds_as_false_bools():
    result = normalize_bounds(MIN, MAX, False, False)
    assert result.minimum == pytest.approx(MIN)
    assert result.maximum == pytest.approx(MAX)
    assert result.minimum_exclusive is False
    assert result.maximum_exclusive is False


def test_no_bounds():
    assert normalize_bounds(None, None, None, None) == Bounds()


def test_integer_exclusive_bounds_are_numbers_not_bools():
    result = normalize_bounds(None, None, 2, 5)
    assert result == Bounds(2.0, 5.0, True, True)


def test_unrecognised_exclusive_value_falls_back_to_inclusive():
    result = normalize_bounds(1.0, 3.0, "x", "y")
    assert result == Bounds(1.0, 3.0, False, False)


def test_equal_numeric_exclusive_bound_keeps_inclusive():
    result = normalize_bounds(MIN, MAX, MIN, MAX)
    assert result == Bounds(MIN, MAX, False, False)