from PySide6.QtCore import QPoint, QRect, QSize, Qt, Signal
from PySide6.QtGui import QPainter
from PySide6.QtWidgets import QWidget


class ImageLabel(QWidget):
    """Displays a pixmap, scaled to fit the widget (keeping its aspect ratio)."""
    # Emitted with the new widget size (in logical pixels)
    resized = Signal(QSize)

    def __init__(self, pixmap=None, center_vertical=True, parent=None):
        super().__init__(parent)
        self._center_vertical = center_vertical
        self._pixmap = pixmap

    def pixmap(self):
        return self._pixmap

    def setPixmap(self, pixmap):
        self._pixmap = pixmap
        self.update()

    def resizeEvent(self, event):
        super().resizeEvent(event)
        self.resized.emit(event.size())

    def paintEvent(self, event):
        super().paintEvent(event)
        if self._pixmap is None or self._pixmap.isNull():
            return
        # Target rect in logical pixels, the painter maps it to the device
        target = self._pixmap.deviceIndependentSize().toSize()
        target.scale(self.size(), Qt.KeepAspectRatio)
        pos = QPoint((self.width() - target.width()) // 2,
                     (self.height() - target.height()) // 2 if self._center_vertical else 0)
        painter = QPainter(self)
        painter.setRenderHint(QPainter.SmoothPixmapTransform)
        painter.drawPixmap(QRect(pos, target), self._pixmap)
