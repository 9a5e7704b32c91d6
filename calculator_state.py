"""
Input/evaluation state machine for the scientific calculator.

Button presses come in through press() and the resulting display and
history strings go out to subscribed observers. There is a single pending
operator and no precedence: expressions evaluate strictly left to right.
"""

import math
from dataclasses import dataclass

from calc_math import (
    BINARY_OPERATORS,
    CONSTANTS,
    UNARY_FUNCTIONS,
    buffer_text,
    format_number,
    parse_number,
)

ERROR_TEXT = "Error"
DIGITS = set("0123456789")
INPUT_SYMBOLS = DIGITS | {".", "(", ")"}


@dataclass(frozen=True)
class PressResult:
    display: str
    history: str
    error: bool = False


class CalculatorState:
    """Calculator state driven by discrete button events"""

    def __init__(self):
        self._listeners = []
        self._result_listeners = []
        self.display = "0"
        self.history = ""
        self._reset_internals()

    def _reset_internals(self):
        self.current_input = ""
        self.operator = ""
        self.expression = ""
        self.result = 0.0
        self.result_shown = False

    # --- Observers ---

    def subscribe(self, callback):
        """Register callback(display, history); it fires once right away"""
        self._listeners.append(callback)
        callback(self.display, self.history)

    def subscribe_results(self, callback):
        """Register callback(line) for every completed calculation"""
        self._result_listeners.append(callback)

    def _notify(self):
        for callback in self._listeners:
            callback(self.display, self.history)

    def _record(self, line):
        for callback in self._result_listeners:
            callback(line)

    # --- Event dispatch ---

    def press(self, command):
        """Handle one button press and publish the new display state"""
        try:
            self._dispatch(command)
            error = False
        except (ValueError, ArithmeticError) as e:
            print(f"Calculation error on '{command}': {e}")
            self._reset_internals()
            self.history = ""
            self.display = ERROR_TEXT
            error = True

        self._notify()
        return PressResult(self.display, self.history, error)

    def _dispatch(self, command):
        if command == "C":
            self.clear()
        elif command == "Del":
            self.backspace()
        elif command in UNARY_FUNCTIONS:
            function, label = UNARY_FUNCTIONS[command]
            self.apply_unary(function, label)
        elif command in CONSTANTS:
            self.insert_constant(CONSTANTS[command], command)
        elif command == "±":
            self.toggle_sign()
        elif command in BINARY_OPERATORS:
            self.store_operator(command)
        elif command == "=":
            self.evaluate()
        elif command in INPUT_SYMBOLS:
            self.append(command)

    # --- Input accumulation ---

    def append(self, symbol):
        """Append a digit, decimal point or parenthesis to the input"""
        if self.result_shown:
            self.current_input = ""
            self.history = ""
            self.result_shown = False
        self.current_input += symbol
        self.display = self.current_input

    def backspace(self):
        if not self.current_input:
            return
        self.current_input = self.current_input[:-1]
        self.display = self.current_input or "0"

    def clear(self):
        self._reset_internals()
        self.history = ""
        self.display = "0"

    # --- Operations ---

    def apply_unary(self, function, label):
        """Apply a one-argument function to the input or the shown result"""
        if not self.current_input and self.result_shown:
            self.current_input = self.display
        if not self.current_input:
            return

        value = parse_number(self.current_input)
        result = function(value)
        self.history = f"{label}({format_number(value)}) ="
        self.display = format_number(result)
        self.current_input = buffer_text(result)
        self.result_shown = True
        self._record(f"{label}({format_number(value)}) = {self.display}")

    def insert_constant(self, value, label):
        if self.result_shown:
            self.history = ""
            self.result_shown = False
        self.current_input = buffer_text(value)
        self.display = format_number(value)
        self.history = label

    def toggle_sign(self):
        if not self.current_input:
            return
        if self.current_input.startswith("-"):
            self.current_input = self.current_input[1:]
        else:
            self.current_input = "-" + self.current_input
        self.display = self.current_input

    def store_operator(self, op):
        """Capture the left operand and make op the pending operator"""
        # Chaining off a shown result reads the operand from the display
        first = parse_number(self.current_input or self.display)
        self.result = first
        self.operator = op
        self.expression = f"{format_number(first)} {op} "
        self.history = self.expression
        self.current_input = ""
        self.result_shown = False

    def evaluate(self):
        """Apply the pending operator to the accumulator and the input"""
        if not self.operator or not self.current_input:
            return

        operand = parse_number(self.current_input)
        self.result = BINARY_OPERATORS[self.operator](self.result, operand)
        self.history = f"{self.expression}{format_number(operand)} ="
        self.display = format_number(self.result)
        self._record(f"{self.expression}{format_number(operand)} = {self.display}")

        self.current_input = ""
        self.operator = ""
        self.result_shown = True

    # --- Clipboard ---

    def paste(self, text):
        """Replace the input with a pasted number; returns False if rejected"""
        clean_text = text.replace(",", "").replace(" ", "").strip()
        try:
            # float() also takes digit separators, which the buffer never holds
            if "_" in clean_text:
                raise ValueError(clean_text)
            value = parse_number(clean_text)
        except ValueError:
            print(f"Could not paste: {text}")
            return False

        if not math.isfinite(value):
            clean_text = format_number(value)

        self.result_shown = False
        self.history = ""
        self.current_input = clean_text
        self.display = clean_text
        self._notify()
        return True
