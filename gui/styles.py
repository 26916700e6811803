# flake8: noqa

# Window background, grouped boxes and the amount field.
# - QLineEdit#amountEdit: large right-aligned digits
# - QLabel#valueLabel: muted monospace read-out of the parsed value
APP_STYLE = """
QMainWindow {
    background-color: #f5f5f5;
}
QGroupBox {
    font-weight: bold;
    border: 1px solid #cccccc;
    border-radius: 5px;
    margin-top: 1ex;
    padding-top: 10px;
}
QGroupBox::title {
    subcontrol-origin: margin;
    left: 10px;
    padding: 0 5px 0 5px;
}
QLineEdit {
    padding: 4px 8px;
    border: 1px solid #cccccc;
    border-radius: 3px;
    background-color: white;
}
QLineEdit:focus {
    border-color: #0078d4;
}
QLineEdit#amountEdit {
    font-size: 18px;
}
QComboBox {
    padding: 4px 8px;
    border: 1px solid #cccccc;
    border-radius: 3px;
    background-color: white;
}
QComboBox:focus {
    border-color: #0078d4;
}
QLabel#valueLabel {
    color: #4b5563;
    font-family: monospace;
}
"""
