"""
Qt window for the scientific calculator.

The window owns no calculator logic: buttons and keys are forwarded to a
CalculatorState, and the window re-renders whenever the state publishes.
"""

import sys
import json
from pathlib import Path
from PyQt6.QtWidgets import (
    QApplication, QMainWindow, QWidget, QVBoxLayout, QHBoxLayout,
    QGridLayout, QPushButton, QLabel, QDialog, QDialogButtonBox,
    QCheckBox, QFontDialog, QScrollArea, QFrame, QMessageBox
)
from PyQt6.QtCore import Qt
from PyQt6.QtGui import QFont, QKeyEvent, QAction, QColor, QPainter, QLinearGradient

from calculator_state import CalculatorState

# Button grid, row by row
BUTTON_LAYOUT = [
    ["sin", "cos", "tan", "asin", "atan"],
    ["cot", "π", "e", "C", "Del"],
    ["x²", "1/x", "|x|", "exp", "mod"],
    ["√", "(", ")", "n!", "÷"],
    ["xʸ", "7", "8", "9", "×"],
    ["10ˣ", "4", "5", "6", "−"],
    ["log", "1", "2", "3", "+"],
    ["ln", "±", "0", ".", "="],
]

# Typed characters that map onto a button label
KEY_TEXT_COMMANDS = {
    "+": "+", "-": "−", "*": "×", "/": "÷",
    "%": "mod", "^": "xʸ", "!": "n!", "=": "=",
    ".": ".", "(": "(", ")": ")",
}

KEY_COMMANDS = {
    Qt.Key.Key_Return: "=",
    Qt.Key.Key_Enter: "=",
    Qt.Key.Key_Backspace: "Del",
    Qt.Key.Key_Escape: "C",
    Qt.Key.Key_Delete: "C",
}

GRADIENT_START = QColor(40, 40, 50)
GRADIENT_END = QColor(25, 45, 95)

BUTTON_STYLE = """
    QPushButton {
        color: #ffffff;
        background-color: #3c3f50;
        border: 1px solid #5a5a78;
        font-family: "Segoe UI";
        font-size: 12pt;
    }
    QPushButton:pressed {
        background-color: #50546a;
    }
"""
EQUALS_STYLE = "QPushButton { background-color: #6c63ff; font-weight: bold; }"

MAX_HISTORY_ITEMS = 50


def get_app_path():
    """Resolve the correct path for both script and frozen (PyInstaller) execution."""
    if getattr(sys, 'frozen', False):
        return Path(sys.executable).parent
    else:
        return Path(__file__).parent


class SettingsDialog(QDialog):
    """Settings dialog for calculator preferences"""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setWindowTitle("Settings")
        self.setModal(True)
        self.resize(275, 120)

        layout = QVBoxLayout()

        self.history_check = QCheckBox("Show history panel")
        self.history_check.setChecked(parent.config.get("show_history", True))
        layout.addWidget(self.history_check)

        # Font selection
        font_layout = QHBoxLayout()
        font_label = QLabel("Display Font:")
        self.font_button = QPushButton("Choose Font...")
        self.font_button.clicked.connect(self.choose_font)
        font_layout.addWidget(font_label)
        font_layout.addWidget(self.font_button)
        font_layout.addStretch()
        layout.addLayout(font_layout)

        layout.addStretch()

        button_box = QDialogButtonBox(
            QDialogButtonBox.StandardButton.Ok |
            QDialogButtonBox.StandardButton.Cancel
        )
        button_box.accepted.connect(self.accept)
        button_box.rejected.connect(self.reject)
        layout.addWidget(button_box)

        self.setLayout(layout)
        self.selected_font = None

    def choose_font(self):
        """Open font dialog"""
        current_font = self.parent().display.font()
        font, ok = QFontDialog.getFont(current_font, self)
        if ok:
            self.selected_font = font


class HistoryPanel(QFrame):
    """Side panel listing completed calculations, newest first"""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setFrameStyle(QFrame.Shape.StyledPanel | QFrame.Shadow.Sunken)
        self.setFixedWidth(260)

        layout = QVBoxLayout()
        layout.setContentsMargins(8, 8, 8, 8)

        title = QLabel("History")
        title_font = QFont()
        title_font.setBold(True)
        title.setFont(title_font)
        title.setStyleSheet("color: #bebed2;")
        layout.addWidget(title)

        scroll = QScrollArea()
        scroll.setWidgetResizable(True)
        scroll.setHorizontalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)

        self.history_widget = QWidget()
        self.history_layout = QVBoxLayout()
        self.history_layout.setSpacing(4)
        self.history_layout.addStretch()
        self.history_widget.setLayout(self.history_layout)

        scroll.setWidget(self.history_widget)
        layout.addWidget(scroll)

        self.setLayout(layout)
        self.history_items = []

    def add_entry(self, text):
        """Add a history entry"""
        label = QLabel(text)
        label.setWordWrap(True)
        label.setTextInteractionFlags(Qt.TextInteractionFlag.TextSelectableByMouse)
        label.setStyleSheet("padding: 4px; background-color: #101010; border-radius: 3px;")
        font = QFont()
        font.setPointSize(9)
        label.setFont(font)

        # Insert at the top (before stretch)
        self.history_layout.insertWidget(0, label)
        self.history_items.insert(0, label)

        if len(self.history_items) > MAX_HISTORY_ITEMS:
            old_label = self.history_items.pop()
            self.history_layout.removeWidget(old_label)
            old_label.deleteLater()

    def entries(self):
        return [label.text() for label in self.history_items]

    def clear_history(self):
        """Clear all history"""
        for label in self.history_items:
            self.history_layout.removeWidget(label)
            label.deleteLater()
        self.history_items.clear()


class GradientPanel(QWidget):
    """Widget that paints a diagonal two-color gradient behind its children"""

    def __init__(self, start, end, parent=None):
        super().__init__(parent)
        self.start = start
        self.end = end

    def paintEvent(self, event):
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        gradient = QLinearGradient(0, 0, self.width(), self.height())
        gradient.setColorAt(0.0, self.start)
        gradient.setColorAt(1.0, self.end)
        painter.fillRect(self.rect(), gradient)
        painter.end()


class ScientificCalculator(QMainWindow):
    """Main calculator window"""

    def __init__(self, state=None, config_file=None):
        super().__init__()

        # Default config
        self.config = {
            "display_font": None,
            "show_history": True,
        }
        self.config_file = Path(config_file) if config_file else get_app_path() / "config.json"

        self.state = state if state is not None else CalculatorState()

        self.load_settings()
        self.init_ui()
        self.apply_settings()

        self.state.subscribe(self.render)
        self.state.subscribe_results(self.history_panel.add_entry)

    def init_ui(self):
        """Initialize the user interface"""
        self.setWindowTitle("Scientific Calculator")

        central = GradientPanel(GRADIENT_START, GRADIENT_END)
        self.setCentralWidget(central)
        main_layout = QHBoxLayout()
        main_layout.setSpacing(10)

        # Left side - calculator
        calc_layout = QVBoxLayout()
        calc_layout.setSpacing(5)

        self.history_label = QLabel(" ")
        self.history_label.setAlignment(Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignVCenter)
        self.history_label.setFont(QFont("Segoe UI", 16))
        self.history_label.setStyleSheet("color: rgb(190, 190, 210); background: transparent; padding: 6px 10px 0 10px;")
        calc_layout.addWidget(self.history_label)

        self.display = QLabel("0")
        self.display.setAlignment(Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignVCenter)
        display_font = QFont("Consolas", 34)
        display_font.setBold(True)
        self.display.setFont(display_font)
        self.display.setMinimumHeight(60)
        self.display.setTextInteractionFlags(Qt.TextInteractionFlag.TextSelectableByMouse)
        self.display.setStyleSheet("color: #ffffff; background: transparent; padding: 0 10px 10px 10px;")
        calc_layout.addWidget(self.display)

        # Button grid
        button_layout = QGridLayout()
        button_layout.setSpacing(4)
        button_layout.setContentsMargins(5, 5, 5, 10)

        self.buttons = {}
        for row, labels in enumerate(BUTTON_LAYOUT):
            for col, text in enumerate(labels):
                btn = QPushButton(text)
                btn.setMinimumSize(60, 50)
                btn.setFocusPolicy(Qt.FocusPolicy.NoFocus)
                btn.setStyleSheet(BUTTON_STYLE + (EQUALS_STYLE if text == "=" else ""))
                btn.clicked.connect(lambda checked, c=text: self.state.press(c))
                button_layout.addWidget(btn, row, col)
                self.buttons[text] = btn

        calc_layout.addLayout(button_layout)
        main_layout.addLayout(calc_layout)

        # Right side - history panel
        self.history_panel = HistoryPanel()
        main_layout.addWidget(self.history_panel)

        central.setLayout(main_layout)

        # Menu bar
        menubar = self.menuBar()

        edit_menu = menubar.addMenu("&Edit")

        copy_action = QAction("&Copy", self)
        copy_action.setShortcut("Ctrl+C")
        copy_action.triggered.connect(self.copy_to_clipboard)
        edit_menu.addAction(copy_action)

        paste_action = QAction("&Paste", self)
        paste_action.setShortcut("Ctrl+V")
        paste_action.triggered.connect(self.paste_from_clipboard)
        edit_menu.addAction(paste_action)

        edit_menu.addSeparator()
        clear_history_action = QAction("Clear &History", self)
        clear_history_action.triggered.connect(self.history_panel.clear_history)
        edit_menu.addAction(clear_history_action)

        edit_menu.addSeparator()

        settings_action = QAction("&Settings...", self)
        settings_action.triggered.connect(self.show_settings)
        edit_menu.addAction(settings_action)

        help_menu = menubar.addMenu("&Help")

        shortcuts_action = QAction("&Keyboard Shortcuts", self)
        shortcuts_action.triggered.connect(self.show_shortcuts)
        help_menu.addAction(shortcuts_action)

        # Prevent maximize
        self.setWindowFlags(self.windowFlags() & ~Qt.WindowType.WindowMaximizeButtonHint)

    def render(self, display, history):
        """Show the state's display and history text"""
        self.display.setText(display)
        # Keep the label height when there is no history
        self.history_label.setText(history or " ")

    def fit_window(self):
        """Lock the window to the size of its current contents"""
        self.centralWidget().layout().activate()
        self.setMinimumSize(0, 0)
        self.setMaximumSize(16777215, 16777215)
        self.adjustSize()
        self.setFixedSize(self.sizeHint())

    def copy_to_clipboard(self):
        """Copy the displayed value to the clipboard"""
        clipboard = QApplication.clipboard()
        clipboard.setText(self.display.text())

    def paste_from_clipboard(self):
        """Paste a number from the clipboard into the input"""
        clipboard = QApplication.clipboard()
        text = clipboard.text().strip()

        if not text:
            return

        self.state.paste(text)

    def load_settings(self):
        """Load settings from JSON file"""
        if self.config_file.exists():
            try:
                with open(self.config_file, 'r') as f:
                    saved_config = json.load(f)
            except (OSError, ValueError) as e:
                print(f"Error loading config: {e}")
                return
            if isinstance(saved_config, dict):
                self.config.update(saved_config)
            else:
                print(f"Error loading config: expected an object, got {saved_config!r}")

    def apply_settings(self):
        """Apply the loaded config to the widgets"""
        font_str = self.config.get("display_font")
        if isinstance(font_str, str) and font_str:
            font = QFont()
            if font.fromString(font_str):
                self.display.setFont(font)

        self.history_panel.setVisible(bool(self.config.get("show_history", True)))
        self.fit_window()

    def save_settings(self):
        """Save settings to JSON file"""
        self.config["display_font"] = self.display.font().toString()
        try:
            with open(self.config_file, 'w') as f:
                json.dump(self.config, f, indent=4)
        except OSError as e:
            print(f"Error saving config: {e}")

    def show_settings(self):
        """Show settings dialog"""
        dialog = SettingsDialog(self)
        if dialog.exec() == QDialog.DialogCode.Accepted:
            self.config["show_history"] = dialog.history_check.isChecked()
            if dialog.selected_font:
                self.config["display_font"] = dialog.selected_font.toString()
            self.apply_settings()

    def show_shortcuts(self):
        """Show keyboard shortcuts help"""
        shortcuts = """
<h3>Keyboard Shortcuts</h3>
<table>
<tr><td><b>0-9 . ( )</b></td><td>Number entry (numpad supported)</td></tr>
<tr><td><b>+, -, *, /</b></td><td>Basic operations</td></tr>
<tr><td><b>%</b></td><td>Modulo</td></tr>
<tr><td><b>^</b></td><td>Power (x<sup>y</sup>)</td></tr>
<tr><td><b>!</b></td><td>Factorial</td></tr>
<tr><td><b>Enter, =</b></td><td>Equals</td></tr>
<tr><td><b>Backspace</b></td><td>Delete last character</td></tr>
<tr><td><b>ESC, Delete</b></td><td>Clear all</td></tr>
<tr><td><b>Ctrl+C / Ctrl+V</b></td><td>Copy / paste the display value</td></tr>
</table>
        """
        msg = QMessageBox(self)
        msg.setWindowTitle("Keyboard Shortcuts")
        msg.setTextFormat(Qt.TextFormat.RichText)
        msg.setText(shortcuts)
        msg.exec()

    def keyPressEvent(self, event: QKeyEvent):
        """Handle keyboard input"""
        key = event.key()
        text = event.text()
        modifiers = event.modifiers()

        # Ctrl shortcuts come before character mapping so Ctrl+C is not 'C'
        if modifiers == Qt.KeyboardModifier.ControlModifier:
            if key == Qt.Key.Key_C:
                self.copy_to_clipboard()
                return
            if key == Qt.Key.Key_V:
                self.paste_from_clipboard()
                return

        if key in KEY_COMMANDS:
            self.state.press(KEY_COMMANDS[key])
        elif len(text) == 1 and text in "0123456789":
            self.state.press(text)
        elif text in KEY_TEXT_COMMANDS:
            self.state.press(KEY_TEXT_COMMANDS[text])
        else:
            super().keyPressEvent(event)

    def closeEvent(self, event):
        """Handle window close"""
        self.save_settings()
        event.accept()
