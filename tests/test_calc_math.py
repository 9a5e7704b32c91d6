import math

import pytest

from calc_math import (
    BINARY_OPERATORS,
    UNARY_FUNCTIONS,
    buffer_text,
    divide,
    factorial,
    format_number,
    parse_number,
    power,
    remainder,
)


def unary(label, x):
    function, _ = UNARY_FUNCTIONS[label]
    return function(x)


@pytest.mark.parametrize("value, text", [
    (4.0, "4"),
    (-12.0, "-12"),
    (0.0, "0"),
    (-0.0, "0"),
    (2.5, "2.5"),
    (0.1, "0.1"),
    (math.nan, "NaN"),
    (math.inf, "Infinity"),
    (-math.inf, "-Infinity"),
    (1e20, "1e+20"),
])
def test_format_number(value, text):
    assert format_number(value) == text


@pytest.mark.parametrize("value", [4.0, -7.25, math.pi, 1e-7, 1e20, math.inf, -math.inf])
def test_formatted_text_parses_back(value):
    assert parse_number(format_number(value)) == value


def test_formatted_nan_parses_back():
    assert math.isnan(parse_number(format_number(math.nan)))


@pytest.mark.parametrize("text", ["1.2.3", "(5", "-", "", "Error"])
def test_parse_number_rejects_malformed_text(text):
    with pytest.raises(ValueError):
        parse_number(text)


def test_divide_by_zero():
    assert divide(7.0, 0.0) == math.inf
    assert divide(-7.0, 0.0) == -math.inf
    assert divide(7.0, -0.0) == -math.inf
    assert math.isnan(divide(0.0, 0.0))


def test_remainder():
    assert remainder(7.0, 3.0) == 1.0
    assert remainder(-7.0, 3.0) == -1.0
    assert remainder(7.5, 2.0) == 1.5
    assert math.isnan(remainder(7.0, 0.0))
    assert math.isnan(remainder(math.inf, 2.0))
    assert remainder(5.0, math.inf) == 5.0


def test_power_edge_cases():
    assert power(2.0, 10.0) == 1024.0
    assert power(0.0, -1.0) == math.inf
    assert power(-0.0, -1.0) == -math.inf
    assert math.isnan(power(-8.0, 1.0 / 3.0))
    assert power(10.0, 400.0) == math.inf
    assert power(-10.0, 401.0) == -math.inf


def test_binary_operator_table():
    assert BINARY_OPERATORS["+"](2.0, 3.0) == 5.0
    assert BINARY_OPERATORS["−"](2.0, 3.0) == -1.0
    assert BINARY_OPERATORS["×"](2.0, 3.0) == 6.0
    assert BINARY_OPERATORS["÷"](3.0, 2.0) == 1.5
    assert BINARY_OPERATORS["mod"](7.0, 4.0) == 3.0
    assert BINARY_OPERATORS["xʸ"](2.0, 3.0) == 8.0


def test_factorial():
    assert factorial(0.0) == 1.0
    assert factorial(5.0) == 120.0
    assert factorial(170.0) > 1e306
    assert factorial(171.0) == math.inf
    assert math.isnan(factorial(-3.0))
    assert math.isnan(factorial(2.5))
    assert math.isnan(factorial(math.nan))


def test_trig_functions():
    assert unary("sin", 0.0) == 0.0
    assert unary("cos", 0.0) == 1.0
    assert unary("tan", 0.0) == 0.0
    assert unary("cot", 0.0) == math.inf
    assert unary("asin", 1.0) == pytest.approx(math.pi / 2)
    assert unary("atan", math.inf) == pytest.approx(math.pi / 2)
    assert math.isnan(unary("asin", 2.0))
    assert math.isnan(unary("sin", math.inf))


def test_domain_failures_do_not_raise():
    assert math.isnan(unary("√", -1.0))
    assert math.isnan(unary("log", -1.0))
    assert math.isnan(unary("ln", -1.0))
    assert unary("log", 0.0) == -math.inf
    assert unary("ln", 0.0) == -math.inf
    assert unary("exp", 1000.0) == math.inf
    assert unary("1/x", 0.0) == math.inf


def test_misc_functions():
    assert unary("x²", -4.0) == 16.0
    assert unary("√", 16.0) == 4.0
    assert unary("1/x", 4.0) == 0.25
    assert unary("|x|", -2.5) == 2.5
    assert unary("exp", 0.0) == 1.0
    assert unary("10ˣ", 3.0) == 1000.0
    assert unary("log", 1000.0) == pytest.approx(3.0)
    assert unary("ln", math.e) == pytest.approx(1.0)


def test_history_labels():
    labels = {key: label for key, (_, label) in UNARY_FUNCTIONS.items()}
    assert labels["x²"] == "sqr"
    assert labels["10ˣ"] == "10^x"
    assert labels["n!"] == "n!"


def test_power_with_nan_or_infinite_exponent():
    assert math.isnan(power(1.0, math.nan))
    assert math.isnan(power(-1.0, math.inf))
    assert math.isnan(power(1.0, -math.inf))
    assert power(2.0, math.inf) == math.inf
    assert power(0.5, math.inf) == 0.0
    assert power(math.nan, 0.0) == 1.0


def test_buffer_text():
    assert buffer_text(16.0) == "16.0"
    assert buffer_text(math.inf) == "Infinity"
    assert buffer_text(-math.inf) == "-Infinity"
    assert buffer_text(math.nan) == "NaN"
