"""Message boxes shared by the UI components."""
from PySide6.QtWidgets import QMessageBox


def displayMessage(icon_type, title: str, text: str, informative_text: str = '', parent=None):
    """Shows a blocking message box."""
    msg = QMessageBox(icon_type, title, text, QMessageBox.Ok, parent)
    if informative_text:
        msg.setInformativeText(informative_text)
    msg.exec()


def displayError(text: str, title: str = 'Error', informative_text: str = '', parent=None):
    displayMessage(QMessageBox.Critical, title, text, informative_text, parent)


def displayExportError(export_format: str, error: Exception, parent=None):
    displayError(f'Cannot export the target as {export_format}.', title='Export Failed',
                 informative_text=str(error), parent=parent)
