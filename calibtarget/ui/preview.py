"""Starts the calibration target preview GUI."""

import asyncio
import html
import logging
import sys
import traceback
from PySide6.QtCore import QSize, Qt, Slot
from PySide6.QtWidgets import QApplication, QFileDialog, QGroupBox, QHBoxLayout, QMainWindow, QPushButton, QSizePolicy, QSplitter, QStatusBar, QVBoxLayout, QWidget

from .. import patterns
from ..patterns.export import export_filename
from .image_conversion import pixmapFromNumpy
from .widgets import ControlForm, ImageLabel, displayError, displayExportError

_logger = logging.getLogger('calibtarget.ui')


class PatternPreviewGui(QMainWindow):
    def __init__(self, params: patterns.PatternParameters = None):
        super().__init__()
        self.setWindowTitle('Calibration Target')
        self._createStatusBar()
        self._initLayout(params)
        self.coordinator = patterns.RenderCoordinator(self.controls.controls)
        self.resize(self.screen().availableGeometry().size() * 0.85)
        self._updateExportButtons()

    def _initLayout(self, params):
        splitter = QSplitter(Qt.Horizontal)

        #### Pattern configuration & export
        groupbox_config = QGroupBox('Pattern')
        groupbox_config.setLayout(QVBoxLayout())
        self.controls = ControlForm(params)
        self.controls.configurationChanged.connect(self._configurationChanged)
        groupbox_config.layout().addWidget(self.controls)
        groupbox_config.layout().addStretch()

        layout_buttons = QHBoxLayout()
        self.btn_png = QPushButton('Export PNG')
        self.btn_png.clicked.connect(self._exportPng)
        self.btn_svg = QPushButton('Export SVG')
        self.btn_svg.clicked.connect(self._exportSvg)
        self.btn_pdf = QPushButton('Export PDF')
        self.btn_pdf.clicked.connect(self._exportPdf)
        for btn in [self.btn_png, self.btn_svg, self.btn_pdf]:
            layout_buttons.addWidget(btn)
        groupbox_config.layout().addLayout(layout_buttons)
        splitter.addWidget(groupbox_config)

        #### Preview
        groupbox_preview = QGroupBox('Preview')
        groupbox_preview.setLayout(QVBoxLayout())
        self.preview = ImageLabel()
        self.preview.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Expanding)
        self.preview.resized.connect(self._previewResized)
        groupbox_preview.layout().addWidget(self.preview)
        splitter.addWidget(groupbox_preview)
        splitter.setSizes([1, 3])

        central_widget = QWidget()
        central_widget.setLayout(QVBoxLayout())
        central_widget.layout().addWidget(splitter)
        self.setCentralWidget(central_widget)

    def _createStatusBar(self):
        self.status_bar = QStatusBar()
        self.setStatusBar(self.status_bar)

    def _updateExportButtons(self):
        vector = self.controls.patternKind().supports_vector
        tooltip = '' if vector else 'Vector export is not available for this pattern.'
        for btn in [self.btn_svg, self.btn_pdf]:
            btn.setEnabled(vector)
            btn.setToolTip(tooltip)

    def _redraw(self):
        outcome = asyncio.run(self.coordinator.draw_preview())
        if outcome in [patterns.DrawOutcome.DRAWN, patterns.DrawOutcome.FAILED]:
            self.preview.setPixmap(pixmapFromNumpy(self.coordinator.surface.to_ndarray(),
                                                  self.devicePixelRatioF()))
        if outcome is patterns.DrawOutcome.FAILED:
            self.status_bar.showMessage('Cannot draw the current configuration.', 10000)
        else:
            self.status_bar.showMessage(patterns.config_string(self.coordinator.snapshot()))

    def _resizePreview(self, size: QSize):
        params = self.coordinator.snapshot()
        width, height = patterns.preview_size(size.width(), size.height(), params.aspect_w,
                                              params.aspect_h, self.devicePixelRatioF())
        self.coordinator.resize_preview(width, height)

    @Slot(QSize)
    def _previewResized(self, size):
        self._resizePreview(size)
        self._redraw()

    @Slot()
    def _configurationChanged(self):
        self._updateExportButtons()
        # The aspect ratio may have changed
        self._resizePreview(self.preview.size())
        self._redraw()

    def _saveFilename(self, extension, file_filter):
        params = self.coordinator.snapshot()
        filename, _ = QFileDialog.getSaveFileName(
            self, f'Export {extension.upper()}', export_filename(params, extension), file_filter)
        return params, filename

    def _write(self, filename, payload):
        with open(filename, 'wb') as fp:
            fp.write(payload)
        _logger.info(f'Exported target to {filename}')
        self.status_bar.showMessage(f'Exported target to {filename}', 10000)

    @Slot()
    def _exportPng(self):
        params, filename = self._saveFilename('png', 'PNG image (*.png)')
        if not filename:
            return
        try:
            self._write(filename, asyncio.run(patterns.render_png(params, self.coordinator.dispatcher)))
        except (patterns.ExportError, OSError) as e:
            _logger.error('Error while exporting PNG:', exc_info=e)
            displayExportError('PNG', e, parent=self)

    @Slot()
    def _exportSvg(self):
        params, filename = self._saveFilename('svg', 'SVG document (*.svg)')
        if not filename:
            return
        try:
            self._write(filename, patterns.render_svg(params).encode('utf-8'))
        except (patterns.ExportError, OSError) as e:
            _logger.error('Error while exporting SVG:', exc_info=e)
            displayExportError('SVG', e, parent=self)

    @Slot()
    def _exportPdf(self):
        params, filename = self._saveFilename('pdf', 'PDF document (*.pdf)')
        if not filename:
            return
        try:
            self._write(filename, patterns.render_pdf(patterns.render_svg(params)))
        except (patterns.ExportError, OSError) as e:
            _logger.error('Error while exporting PDF:', exc_info=e)
            displayExportError('PDF', e, parent=self)


def globalExceptionHook(exc_type, exc_value, exc_traceback):
    """Logs unhandled exceptions and shows them in a message box (instead of
    silently terminating the Qt event loop)."""
    details = ''.join(traceback.format_exception(exc_type, exc_value, exc_traceback))
    _logger.error(f'Unhandled exception:\n{details}')
    displayError('An unhandled exception occurred. Please report the problem.',
                 title='Unhandled Exception',
                 informative_text='<pre>' + html.escape(details) + '</pre>')


def run_preview(config_file=None):
    """Shows the preview GUI, optionally initialized from a TOML pattern
    configuration."""
    logging.basicConfig(level=logging.INFO)
    sys.excepthook = globalExceptionHook
    params = None if config_file is None else patterns.PatternParameters.load_toml(config_file)
    app = QApplication(sys.argv)
    gui = PatternPreviewGui(params)
    gui.show()
    return app.exec()


if __name__ == '__main__':
    sys.exit(run_preview(sys.argv[1] if len(sys.argv) > 1 else None))
