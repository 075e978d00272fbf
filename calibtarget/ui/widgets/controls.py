"""Input form which holds the target configuration."""
from PySide6.QtCore import Signal
from PySide6.QtWidgets import QCheckBox, QComboBox, QDoubleSpinBox, QFormLayout, QSpinBox, QWidget

from ...patterns import PatternKind, PatternParameters
from ...patterns.common import ORIGINS, TOP_LEFT_COLORS, TRAVERSAL_ORDERS
from ...patterns.families import APRILTAG_FAMILIES
from ...patterns.footer import traversal_label


CHARUCO_DICTIONARIES = (
    'DICT_4X4_50', 'DICT_4X4_100', 'DICT_4X4_250', 'DICT_4X4_1000',
    'DICT_5X5_50', 'DICT_5X5_100', 'DICT_5X5_250', 'DICT_5X5_1000',
    'DICT_6X6_50', 'DICT_6X6_100', 'DICT_6X6_250', 'DICT_6X6_1000',
    'DICT_7X7_50', 'DICT_7X7_100', 'DICT_7X7_250', 'DICT_7X7_1000',
    'DICT_ARUCO_ORIGINAL'
)

# Patterns for which a control row is shown, unlisted rows are always visible
_CELL_PATTERNS = (PatternKind.CHECKERBOARD, PatternKind.GRID, PatternKind.DOTS, PatternKind.CHARUCO)
_VISIBILITY = {
    'cell_size': _CELL_PATTERNS,
    'top_left': (PatternKind.CHECKERBOARD, PatternKind.CHARUCO),
    'dot_radius': (PatternKind.DOTS,),
}


def _comboBox(items, current, labels=None):
    cb = QComboBox()
    for item in items:
        cb.addItem(item if labels is None else labels(item), item)
    cb.setCurrentIndex(max(0, cb.findData(current)))
    return cb


def _spinBox(value, vmin, vmax, step=1):
    sb = QSpinBox()
    sb.setRange(vmin, vmax)
    sb.setSingleStep(step)
    sb.setValue(value)
    return sb


def _doubleSpinBox(value, vmin, vmax, step, decimals=2):
    sb = QDoubleSpinBox()
    sb.setRange(vmin, vmax)
    sb.setSingleStep(step)
    sb.setDecimals(decimals)
    sb.setValue(value)
    return sb


def _checkBox(checked):
    cb = QCheckBox()
    cb.setChecked(checked)
    return cb


class ControlForm(QWidget):
    """Form to adjust all pattern parameters.

    Only the controls which are relevant to the selected pattern type are
    visible. The current state can be read via :meth:`controls`, which
    returns a control snapshot for :meth:`PatternParameters.from_controls`.
    """
    # Emitted whenever a control value changed
    configurationChanged = Signal()

    def __init__(self, params: PatternParameters = None, parent=None):
        super().__init__(parent)
        self._widgets = dict()
        self._initLayout(PatternParameters() if params is None else params)
        self._updateVisibility()

    def _initLayout(self, params):
        self._layout = QFormLayout()
        self.setLayout(self._layout)
        charuco, apriltag = params.charuco, params.apriltag
        self._addRow('pattern', 'Pattern:', _comboBox([k.value for k in PatternKind], params.kind.value,
                                                      labels=lambda code: code.capitalize()))
        self._addRow('rows', 'Inner rows:', _spinBox(params.rows, 1, 100))
        self._addRow('cols', 'Inner columns:', _spinBox(params.cols, 1, 100))
        self._addRow('cell_size', 'Cell size [px]:', _spinBox(params.cell_size, 1, 1000))
        self._addRow('top_left', 'Top-left cell:', _comboBox(TOP_LEFT_COLORS, params.top_left))
        self._addRow('dot_radius', 'Dot radius [x cell]:', _doubleSpinBox(params.dot_radius, 0.01, 0.5, 0.01))
        self._addRow('output_width', 'Output width [px]:', _spinBox(params.output_width, 1, 20000, 10))
        self._addRow('aspect_w', 'Aspect width:', _spinBox(params.aspect_w, 1, 100))
        self._addRow('aspect_h', 'Aspect height:', _spinBox(params.aspect_h, 1, 100))

        self._addRow('charuco_dict', 'Dictionary:', _comboBox(CHARUCO_DICTIONARIES, charuco.dictionary))
        self._addRow('charuco_ratio', 'Marker ratio:', _doubleSpinBox(charuco.marker_ratio, 0.1, 1.0, 0.05))
        self._addRow('charuco_start', 'First id:', _spinBox(charuco.start_id, 0, 10000))
        self._addRow('charuco_step', 'Id step:', _spinBox(charuco.step, 1, 100))
        self._addRow('charuco_on', 'Markers on:', _comboBox(TOP_LEFT_COLORS, charuco.on))
        self._addRow('charuco_origin', 'Id origin:', _comboBox(ORIGINS, charuco.origin))
        self._addRow('charuco_order', 'Id order:', _comboBox(TRAVERSAL_ORDERS, charuco.order, labels=traversal_label))
        self._addRow('charuco_show_id', 'Show ids:', _checkBox(charuco.show_ids))

        self._addRow('apriltag_family', 'Family:', _comboBox(tuple(APRILTAG_FAMILIES), apriltag.family))
        self._addRow('apriltag_start', 'First id:', _spinBox(apriltag.start_id, 0, 10000))
        self._addRow('apriltag_tag_size', 'Tag size [px]:', _spinBox(apriltag.tag_size, 1, 2000))
        self._addRow('apriltag_spacing_ratio', 'Spacing ratio:', _doubleSpinBox(apriltag.spacing_ratio, 0.0, 2.0, 0.05))
        self._addRow('apriltag_origin', 'Id origin:', _comboBox(ORIGINS, apriltag.origin))
        self._addRow('apriltag_order', 'Id order:', _comboBox(TRAVERSAL_ORDERS, apriltag.order, labels=traversal_label))
        self._addRow('apriltag_show_id', 'Show ids:', _checkBox(apriltag.show_ids))
        self._addRow('apriltag_show_intersections', 'Intersections:', _checkBox(apriltag.show_intersections))
        self._addRow('apriltag_intersection_px', 'Intersection size [px]:', _spinBox(apriltag.intersection_size, 1, 500))

    def _addRow(self, key, label, widget):
        self._widgets[key] = widget
        self._layout.addRow(label, widget)
        if isinstance(widget, QComboBox):
            widget.currentIndexChanged.connect(self._controlChanged)
        elif isinstance(widget, QCheckBox):
            widget.toggled.connect(self._controlChanged)
        else:
            widget.valueChanged.connect(self._controlChanged)

    def _isVisible(self, key, kind):
        if key.startswith('charuco_'):
            return kind is PatternKind.CHARUCO
        if key.startswith('apriltag_'):
            return kind is PatternKind.APRILTAG
        return kind in _VISIBILITY.get(key, tuple(PatternKind))

    def _updateVisibility(self):
        kind = self.patternKind()
        for key, widget in self._widgets.items():
            self._layout.setRowVisible(widget, self._isVisible(key, kind))

    def patternKind(self) -> PatternKind:
        return PatternKind.parse(self._widgets['pattern'].currentData())

    def controls(self) -> dict:
        """Returns the current control snapshot."""
        snapshot = dict()
        for key, widget in self._widgets.items():
            if isinstance(widget, QComboBox):
                snapshot[key] = widget.currentData()
            elif isinstance(widget, QCheckBox):
                snapshot[key] = widget.isChecked()
            else:
                snapshot[key] = widget.value()
        return snapshot

    def _controlChanged(self, *_):
        self._updateVisibility()
        self.configurationChanged.emit()
