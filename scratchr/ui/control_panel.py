from __future__ import annotations
from typing import Optional
from scratchr.qt import QtCore, QtWidgets
from scratchr.core.events import BrushSizeChanged, Reset
from scratchr.core.scratch_controller import ScratchController
from scratchr.ui.theme import Theme


class ControlPanel(QtWidgets.QWidget):
    """
    Brush size slider, reset button and progress readout.
    The slider only emits BrushSizeChanged; the controller owns the value and
    the panel mirrors whatever the controller settles on.
    """
    def __init__(self, controller: ScratchController, parent: Optional[QtWidgets.QWidget] = None) -> None:
        super().__init__(parent)
        self.controller = controller

        self.size_slider = QtWidgets.QSlider(QtCore.Qt.Orientation.Horizontal)
        self.size_slider.setMinimum(controller.brush.min_radius)
        self.size_slider.setMaximum(controller.brush.max_radius)
        self.size_slider.setValue(controller.brush_radius)
        self.size_slider.setToolTip("Brush radius  ( [ / ] )")
        self.size_label = QtWidgets.QLabel()
        self.size_label.setMinimumWidth(36)

        self.reset_btn = QtWidgets.QPushButton("Reset")
        self.progress_label = QtWidgets.QLabel()
        self.progress_label.setStyleSheet(f"color: {Theme.text_dim.name()};")

        row = QtWidgets.QHBoxLayout(self)
        row.setContentsMargins(8, 6, 8, 6)
        row.setSpacing(8)
        row.addWidget(QtWidgets.QLabel("Brush"))
        row.addWidget(self.size_slider, 1)
        row.addWidget(self.size_label)
        row.addSpacing(12)
        row.addWidget(self.reset_btn)
        row.addStretch()
        row.addWidget(self.progress_label)

        self.size_slider.valueChanged.connect(lambda v: self.controller.handle(BrushSizeChanged(v)))
        self.reset_btn.clicked.connect(lambda: self.controller.handle(Reset()))
        self.controller.brushRadiusChanged.connect(self._on_radius_changed)
        self.controller.layerChanged.connect(lambda _i: self._update_progress())
        self.controller.allCleared.connect(self._update_progress)

        self._on_radius_changed(controller.brush_radius)
        self._update_progress()

    @QtCore.Slot(int)
    def _on_radius_changed(self, radius: int) -> None:
        self.size_label.setText(str(radius))
        if self.size_slider.value() != radius:
            self.size_slider.blockSignals(True)
            self.size_slider.setValue(radius)
            self.size_slider.blockSignals(False)

    def _update_progress(self) -> None:
        total = len(self.controller.layers)
        idx = self.controller.current_layer_index
        if idx is None:
            self.progress_label.setText("All layers cleared")
        else:
            self.progress_label.setText(f"Layer {idx + 1} / {total}")
