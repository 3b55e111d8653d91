# scratchr/ui/theme.py
from scratchr.qt import QtGui, QtWidgets


class Theme:
    bg          = QtGui.QColor("#1f2124")
    panel       = QtGui.QColor("#26292e")
    panel_alt   = QtGui.QColor("#2c3036")
    text        = QtGui.QColor("#d6d7d9")
    text_dim    = QtGui.QColor("#aab0b7")
    accent      = QtGui.QColor("#3fb6ff")
    ring        = QtGui.QColor(255, 255, 255, 200)   # cursor ring around the brush


def apply_fusion_theme(app: QtWidgets.QApplication) -> None:
    app.setStyle("Fusion")
    pal = QtGui.QPalette()
    pal.setColor(QtGui.QPalette.Window, Theme.bg)
    pal.setColor(QtGui.QPalette.Base, Theme.panel)
    pal.setColor(QtGui.QPalette.AlternateBase, Theme.panel_alt)
    pal.setColor(QtGui.QPalette.Text, Theme.text)
    pal.setColor(QtGui.QPalette.WindowText, Theme.text)
    pal.setColor(QtGui.QPalette.ButtonText, Theme.text)
    pal.setColor(QtGui.QPalette.Button, Theme.panel)
    pal.setColor(QtGui.QPalette.ToolTipBase, Theme.panel)
    pal.setColor(QtGui.QPalette.ToolTipText, Theme.text)
    pal.setColor(QtGui.QPalette.Highlight, Theme.accent)
    pal.setColor(QtGui.QPalette.HighlightedText, QtGui.QColor("#0c0d0e"))
    app.setPalette(pal)
