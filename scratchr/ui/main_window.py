# scratchr/ui/main_window.py
from __future__ import annotations
from typing import List
import numpy as np
from scratchr.qt import QtCore, QtGui, QtWidgets
from scratchr.core.config import get_settings
from scratchr.core.assets import AssetLoadError, load_layer_images, placeholder_stack
from scratchr.core.events import BrushSizeChanged, Reset
from scratchr.core.logging import get_logger
from scratchr.core.scratch_controller import ScratchController
from scratchr.ui.scratch_view import ScratchView
from scratchr.ui.control_panel import ControlPanel
from app_config import APP_NAME, DEFAULTS, DEV_MODE, DEV_LAYER_IMAGES, IMAGE_EXTS


class MainWindow(QtWidgets.QMainWindow):
    def __init__(self):
        super().__init__()
        self._log = get_logger(__name__)
        self.setWindowTitle(APP_NAME)
        self.resize(1200, 720)
        self.settings = get_settings()

        self.controller = ScratchController(
            self._startup_images(),
            width=1200, height=680,
            radius=self.settings.get_int("brush/radius", self.settings.get_int("brush/default_radius")),
            min_radius=self.settings.get_int("brush/min_radius"),
            max_radius=self.settings.get_int("brush/max_radius"),
            clearance_mode=str(self.settings.get("clearance/mode")),
            parent=self,
        )
        self.view = ScratchView(self.controller, self)
        self.panel = ControlPanel(self.controller, self)

        central = QtWidgets.QWidget()
        col = QtWidgets.QVBoxLayout(central)
        col.setContentsMargins(0, 0, 0, 0)
        col.setSpacing(0)
        col.addWidget(self.view, 1)
        col.addWidget(self.panel)
        self.setCentralWidget(central)

        self.controller.allCleared.connect(self._on_all_cleared)

        self._build_menu()
        self._restore_state()

    def _startup_images(self) -> List[np.ndarray]:
        paths = DEV_LAYER_IMAGES if DEV_MODE else []
        if paths:
            try:
                return load_layer_images(paths)
            except AssetLoadError as ex:
                self._log.error("Startup layers failed to load: %s", ex)
        return placeholder_stack(DEFAULTS["layers"]["placeholder_colors"])

    def _build_menu(self):
        bar = self.menuBar()
        file_menu = bar.addMenu("&File")

        open_act = QtGui.QAction("&Open layer images...", self)
        open_act.triggered.connect(self._open_dialog)
        file_menu.addAction(open_act)

        reset_act = QtGui.QAction("&Reset", self)
        reset_act.setShortcut(QtGui.QKeySequence(DEFAULTS["hotkeys"]["reset"]))
        reset_act.triggered.connect(lambda: self.controller.handle(Reset()))
        file_menu.addAction(reset_act)

        file_menu.addSeparator()
        exit_act = QtGui.QAction("E&xit", self)
        exit_act.triggered.connect(self.close)
        file_menu.addAction(exit_act)

        grow = QtGui.QAction("Increase brush", self)
        grow.setShortcut(QtGui.QKeySequence(DEFAULTS["hotkeys"]["increase_brush"]))
        grow.triggered.connect(lambda: self._step_brush(+1))
        shrink = QtGui.QAction("Decrease brush", self)
        shrink.setShortcut(QtGui.QKeySequence(DEFAULTS["hotkeys"]["decrease_brush"]))
        shrink.triggered.connect(lambda: self._step_brush(-1))
        self.addAction(grow)
        self.addAction(shrink)

    def _step_brush(self, direction: int) -> None:
        step = max(1, self.controller.brush_radius // 10)
        self.controller.handle(BrushSizeChanged(self.controller.brush_radius + direction * step))

    def _open_dialog(self):
        paths, _ = QtWidgets.QFileDialog.getOpenFileNames(
            self, "Open layer images (top layer first)", self.settings.get("paths/last_open_dir", ""),
            "Images (" + " ".join(f"*{ext}" for ext in sorted(IMAGE_EXTS)) + ")"
        )
        if not paths:
            return
        self.settings.set("paths/last_open_dir", QtCore.QFileInfo(paths[0]).absolutePath())
        try:
            images = load_layer_images(paths)
        except AssetLoadError as ex:
            self._log.error("Open failed: %s", ex)
            QtWidgets.QMessageBox.warning(self, APP_NAME, str(ex))
            return
        self.controller.set_images(images)

    def _on_all_cleared(self) -> None:
        self.statusBar().showMessage("All layers cleared. Press Reset to start again.", 5000)

    def _restore_state(self):
        g = self.settings.get("ui/main_geometry")
        if isinstance(g, QtCore.QByteArray):
            self.restoreGeometry(g)

    def closeEvent(self, e: QtGui.QCloseEvent) -> None:
        self.settings.set("ui/main_geometry", self.saveGeometry())
        self.settings.set("brush/radius", self.controller.brush_radius)
        return super().closeEvent(e)
