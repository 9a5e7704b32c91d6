"""
Floating-point operations for the scientific calculator.

Python's math module raises on domain errors and overflow. A calculator
display wants IEEE-754 results instead, so every function here returns
NaN or +/-Infinity where math would raise.
"""

import math

NAN = float("nan")
INF = float("inf")

# Signed 64-bit bound: integral values beyond this print in float form
_INTEGRAL_LIMIT = 2.0 ** 63


def format_number(value):
    """Render a float, dropping the fractional part of integral values"""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value.is_integer() and abs(value) < _INTEGRAL_LIMIT:
        return str(int(value))
    return repr(value)


def parse_number(text):
    """Parse display or buffer text; raises ValueError on malformed input"""
    return float(text)


def buffer_text(value):
    """Full-precision text for the input buffer; non-finite values use display form"""
    if math.isfinite(value):
        return repr(value)
    return format_number(value)


def _is_odd_integer(x):
    return math.isfinite(x) and x.is_integer() and int(x) % 2 == 1


# --- Binary operators ---

def divide(a, b):
    if b == 0:
        if a == 0 or math.isnan(a):
            return NAN
        return math.copysign(INF, a) * math.copysign(1.0, b)
    return a / b


def remainder(a, b):
    """Remainder with the sign of the dividend (C fmod)"""
    if b == 0 or math.isinf(a) or math.isnan(a) or math.isnan(b):
        return NAN
    return math.fmod(a, b)


def power(base, exponent):
    if math.isnan(exponent):
        return NAN
    if math.isinf(exponent) and abs(base) == 1:
        return NAN
    try:
        return math.pow(base, exponent)
    except OverflowError:
        if base < 0 and _is_odd_integer(exponent):
            return -INF
        return INF
    except ValueError:
        # math.pow raises for a zero base with a negative exponent and for a
        # negative base with a fractional exponent
        if base == 0:
            if _is_odd_integer(exponent):
                return math.copysign(INF, base)
            return INF
        return NAN


BINARY_OPERATORS = {
    "+": lambda a, b: a + b,
    "−": lambda a, b: a - b,
    "×": lambda a, b: a * b,
    "÷": divide,
    "mod": remainder,
    "xʸ": power,
}


# --- Unary functions ---

def _domain_safe(fn):
    """Wrap a math function so domain errors become NaN"""
    def wrapped(x):
        try:
            return fn(x)
        except ValueError:
            return NAN
    return wrapped


def cot(x):
    return divide(1.0, _domain_safe(math.tan)(x))


def square(x):
    return power(x, 2.0)


def reciprocal(x):
    return divide(1.0, x)


def exp(x):
    try:
        return math.exp(x)
    except OverflowError:
        return INF


def ten_power(x):
    return power(10.0, x)


def factorial(n):
    """n! for non-negative integral n, NaN for anything else"""
    if math.isnan(n) or n < 0:
        return NAN
    if math.isinf(n):
        return INF
    if not n.is_integer():
        return NAN
    if n > 170:
        return INF
    result = 1.0
    for i in range(2, int(n) + 1):
        result *= i
    return result


def _logarithm(fn):
    def wrapped(x):
        if x == 0:
            return -INF
        if x < 0 or math.isnan(x):
            return NAN
        if math.isinf(x):
            return INF
        return fn(x)
    return wrapped


# button label -> (function, history label)
UNARY_FUNCTIONS = {
    "sin": (_domain_safe(math.sin), "sin"),
    "cos": (_domain_safe(math.cos), "cos"),
    "tan": (_domain_safe(math.tan), "tan"),
    "cot": (cot, "cot"),
    "asin": (_domain_safe(math.asin), "asin"),
    "atan": (math.atan, "atan"),
    "x²": (square, "sqr"),
    "√": (_domain_safe(math.sqrt), "√"),
    "1/x": (reciprocal, "1/x"),
    "|x|": (abs, "|x|"),
    "exp": (exp, "exp"),
    "10ˣ": (ten_power, "10^x"),
    "n!": (factorial, "n!"),
    "log": (_logarithm(math.log10), "log"),
    "ln": (_logarithm(math.log), "ln"),
}

CONSTANTS = {
    "π": math.pi,
    "e": math.e,
}
