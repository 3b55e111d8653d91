from __future__ import annotations
from typing import Optional
import numpy as np
from scratchr.qt import QtCore, QtGui, QtWidgets
from scratchr.core.events import PointerDown, PointerMove, PointerUp, Resize
from scratchr.core.scratch_controller import ScratchController, map_to_buffer
from scratchr.ui.theme import Theme


class ScratchView(QtWidgets.QWidget):
    """
    Draws the layer stack and feeds mouse/resize input to the controller.
    Layers are painted bottom-up; cleared layers are skipped so the one below shows.
    """
    def __init__(self, controller: ScratchController, parent: Optional[QtWidgets.QWidget] = None) -> None:
        super().__init__(parent)
        self.controller = controller
        self.setMinimumSize(320, 180)
        self.setMouseTracking(True)
        self.setCursor(QtCore.Qt.CursorShape.BlankCursor)
        self.setAttribute(QtCore.Qt.WidgetAttribute.WA_OpaquePaintEvent, True)
        self._ring_pos: Optional[QtCore.QPointF] = None

        self.controller.bufferChanged.connect(lambda _i: self.update())
        self.controller.layersReset.connect(self.update)
        self.controller.layerChanged.connect(lambda _i: self.update())
        self.controller.brushRadiusChanged.connect(lambda _r: self.update())

    @staticmethod
    def _np_to_qimage(rgba: np.ndarray) -> QtGui.QImage:
        # rgba shape expected (h, w, 4), uint8, C-contiguous; the QImage borrows the memory
        h, w, ch = rgba.shape
        assert ch == 4
        return QtGui.QImage(rgba.data, w, h, 4 * w, QtGui.QImage.Format.Format_RGBA8888)

    def _to_buffer(self, pos: QtCore.QPointF) -> tuple[int, int]:
        bw, bh = self.controller.buffer_size
        return map_to_buffer(pos.x(), pos.y(), self.width(), self.height(), bw, bh)

    # ──────────────────────────────────────────────────────────────────────────
    # Painting
    # ──────────────────────────────────────────────────────────────────────────
    def paintEvent(self, e: QtGui.QPaintEvent) -> None:
        p = QtGui.QPainter(self)
        p.fillRect(self.rect(), Theme.bg)
        target = QtCore.QRectF(self.rect())
        for layer in reversed(self.controller.layers):
            if layer.cleared:
                continue
            img = self._np_to_qimage(layer.buffer)
            p.drawImage(target, img)

        if self._ring_pos is not None:
            bw, _ = self.controller.buffer_size
            r = self.controller.brush_radius * (self.width() / max(1, bw))
            p.setRenderHint(QtGui.QPainter.RenderHint.Antialiasing, True)
            p.setPen(QtGui.QPen(Theme.ring, 1.5))
            p.setBrush(QtCore.Qt.BrushStyle.NoBrush)
            p.drawEllipse(self._ring_pos, r, r)
        p.end()

    # ──────────────────────────────────────────────────────────────────────────
    # Input → event stream
    # ──────────────────────────────────────────────────────────────────────────
    def mousePressEvent(self, e: QtGui.QMouseEvent) -> None:
        if e.button() != QtCore.Qt.MouseButton.LeftButton:
            return super().mousePressEvent(e)
        x, y = self._to_buffer(e.position())
        self.controller.handle(PointerDown(x, y))

    def mouseMoveEvent(self, e: QtGui.QMouseEvent) -> None:
        self._ring_pos = e.position()
        if e.buttons() & QtCore.Qt.MouseButton.LeftButton:
            x, y = self._to_buffer(e.position())
            self.controller.handle(PointerMove(x, y))
        self.update()

    def mouseReleaseEvent(self, e: QtGui.QMouseEvent) -> None:
        if e.button() == QtCore.Qt.MouseButton.LeftButton:
            self.controller.handle(PointerUp())
        super().mouseReleaseEvent(e)

    def leaveEvent(self, e: QtCore.QEvent) -> None:
        self._ring_pos = None
        self.update()
        super().leaveEvent(e)

    def resizeEvent(self, e: QtGui.QResizeEvent) -> None:
        super().resizeEvent(e)
        self.controller.handle(Resize(self.width(), self.height()))
