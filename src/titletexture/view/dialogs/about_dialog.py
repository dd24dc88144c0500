"""
About Dialog
"""
from PySide6.QtWidgets import QDialog, QVBoxLayout, QLabel, QDialogButtonBox
from PySide6.QtCore import Qt

from titletexture.model.io import APP_VERSION

ABOUT_TEXT = (
    "<h3>Minecraft Titles [Texture Generator]</h3>"
    "<p>Version {version}</p>"
    "<p>Renders a title with a bitmap or vector font onto a tiled UV guide "
    "and saves it as a texture map for title models.</p>"
    "<p>Fonts: AngelCode BMFont (.fnt, text format), TrueType and OpenType.</p>"
)


class AboutDialog(QDialog):
    def __init__(self, parent=None):
        super().__init__(parent)
        self.setWindowTitle("About")

        layout = QVBoxLayout(self)
        label = QLabel(ABOUT_TEXT.format(version=APP_VERSION))
        label.setTextFormat(Qt.RichText)
        label.setWordWrap(True)
        layout.addWidget(label)

        # Standard Buttons
        buttons = QDialogButtonBox(QDialogButtonBox.Ok)
        buttons.accepted.connect(self.accept)
        layout.addWidget(buttons)
