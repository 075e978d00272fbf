from .common import displayError, displayExportError, displayMessage
from .controls import ControlForm
from .image_view import ImageLabel
