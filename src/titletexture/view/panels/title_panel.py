"""
Title Control Panel
The form on the left side: text, font, kerning and layout options.
Every edit is written straight into TitleSettings, then data_changed is emitted.
"""
import logging
import os
from typing import Optional

from PySide6.QtCore import Signal
from PySide6.QtGui import QColor
from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QGroupBox, QFormLayout, QPlainTextEdit,
    QCheckBox, QDoubleSpinBox, QSpinBox, QComboBox, QPushButton, QFileDialog,
    QColorDialog, QLabel
)

from titletexture.config import list_bundled_fonts
from titletexture.model.state import TitleSettings

logger = logging.getLogger(__name__)

BUILTIN_FONT_LABEL = "Built-in"
GENERATED_BG_LABEL = "UV checker (generated)"


class TitleControlPanel(QWidget):
    data_changed = Signal()

    def __init__(self, settings: TitleSettings) -> None:
        super().__init__()
        self.settings = settings

        layout = QVBoxLayout(self)

        # --- Text Group ---
        grp_text = QGroupBox("Text")
        text_layout = QVBoxLayout(grp_text)
        text_layout.addWidget(QLabel("Please enter the text to render:"))
        self.txt_input = QPlainTextEdit()
        self.txt_input.setPlaceholderText("MINECRAFT")
        self.txt_input.setMaximumHeight(90)
        self.txt_input.textChanged.connect(self.on_text_changed)
        text_layout.addWidget(self.txt_input)
        layout.addWidget(grp_text)

        # --- Font Group ---
        grp_font = QGroupBox("Font")
        form_font = QFormLayout(grp_font)

        font_row = QHBoxLayout()
        self.combo_font = QComboBox()
        self.combo_font.addItem(BUILTIN_FONT_LABEL, "")
        for path in list_bundled_fonts():
            self.combo_font.addItem(os.path.basename(path), path)
        self.combo_font.currentIndexChanged.connect(self.on_font_changed)
        font_row.addWidget(self.combo_font, 1)
        self.btn_font_browse = QPushButton("…")
        self.btn_font_browse.setFixedWidth(30)
        self.btn_font_browse.clicked.connect(self.on_font_browse_clicked)
        font_row.addWidget(self.btn_font_browse)
        form_font.addRow("Font:", font_row)

        self.spin_font_size = QSpinBox()
        self.spin_font_size.setRange(1, 256)
        self.spin_font_size.setSuffix(" px")
        self.spin_font_size.valueChanged.connect(self.on_font_size_changed)
        form_font.addRow("Size (vector fonts):", self.spin_font_size)

        self.chk_kerning = QCheckBox("Use kerning")
        self.chk_kerning.toggled.connect(self.on_kerning_toggled)
        form_font.addRow(self.chk_kerning)

        self.spin_scale = QDoubleSpinBox()
        self.spin_scale.setRange(0.1, 16.0)
        self.spin_scale.setSingleStep(0.25)
        self.spin_scale.setDecimals(2)
        self.spin_scale.setSuffix("×")
        self.spin_scale.valueChanged.connect(self.on_scale_changed)
        form_font.addRow("Scale:", self.spin_scale)

        self.chk_smooth = QCheckBox("Smooth scaling")
        self.chk_smooth.toggled.connect(self.on_smooth_toggled)
        form_font.addRow(self.chk_smooth)

        color_row = QHBoxLayout()
        self.btn_color = QPushButton()
        self.btn_color.clicked.connect(self.on_color_clicked)
        color_row.addWidget(self.btn_color, 1)
        self.btn_color_clear = QPushButton("Clear")
        self.btn_color_clear.clicked.connect(self.on_color_cleared)
        color_row.addWidget(self.btn_color_clear)
        form_font.addRow("Tint:", color_row)

        layout.addWidget(grp_font)

        # --- Background Group ---
        grp_bg = QGroupBox("Background")
        form_bg = QFormLayout(grp_bg)

        bg_row = QHBoxLayout()
        self.combo_bg = QComboBox()
        self.combo_bg.addItem(GENERATED_BG_LABEL, "")
        self.combo_bg.currentIndexChanged.connect(self.on_background_changed)
        bg_row.addWidget(self.combo_bg, 1)
        self.btn_bg_browse = QPushButton("…")
        self.btn_bg_browse.setFixedWidth(30)
        self.btn_bg_browse.clicked.connect(self.on_background_browse_clicked)
        bg_row.addWidget(self.btn_bg_browse)
        form_bg.addRow("Tile:", bg_row)

        self.spin_min_height = QSpinBox()
        self.spin_min_height.setRange(1, 4096)
        self.spin_min_height.setSuffix(" px")
        self.spin_min_height.valueChanged.connect(self.on_layout_changed)
        form_bg.addRow("Minimum height:", self.spin_min_height)

        self.spin_offset_x = QSpinBox()
        self.spin_offset_x.setRange(-512, 512)
        self.spin_offset_x.valueChanged.connect(self.on_layout_changed)
        form_bg.addRow("Text offset X:", self.spin_offset_x)

        self.spin_offset_y = QSpinBox()
        self.spin_offset_y.setRange(-512, 512)
        self.spin_offset_y.valueChanged.connect(self.on_layout_changed)
        form_bg.addRow("Text offset Y:", self.spin_offset_y)

        layout.addWidget(grp_bg)
        layout.addStretch()

        self.load_from_state()

    # --- HELPERS ---

    @staticmethod
    def _select_path(combo: QComboBox, path: Optional[str]) -> None:
        """Selects the item holding `path`, adding it first if needed."""
        # The default entry (built-in font / generated tile) holds ""
        path = path or ""
        index = combo.findData(path)
        if index < 0:
            combo.addItem(os.path.basename(path), path)
            index = combo.count() - 1
        combo.setCurrentIndex(index)

    def _update_font_size_enabled(self) -> None:
        path = self.settings.font_path
        self.spin_font_size.setEnabled(path is None or not path.lower().endswith(".fnt"))

    def _update_color_button(self) -> None:
        if self.settings.color:
            self.btn_color.setText(self.settings.color)
            self.btn_color.setStyleSheet(f"background-color: {self.settings.color};")
        else:
            self.btn_color.setText("None")
            self.btn_color.setStyleSheet("")
        self.btn_color_clear.setEnabled(bool(self.settings.color))

    def _adopt_clamped_values(self) -> None:
        """Spin boxes clamp out-of-range values; the settings follow what is shown."""
        shown = {
            "scale": float(self.spin_scale.value()),
            "font_size": self.spin_font_size.value(),
            "min_height": self.spin_min_height.value(),
            "offset_x": self.spin_offset_x.value(),
            "offset_y": self.spin_offset_y.value(),
        }
        for name, value in shown.items():
            current = getattr(self.settings, name)
            if current != value:
                logger.warning(f"Setting '{name}' = {current} is out of range, using {value}.")
                setattr(self.settings, name, value)

    # --- SLOTS ---

    def on_text_changed(self) -> None:
        self.settings.text = self.txt_input.toPlainText()
        self.data_changed.emit()

    def on_font_changed(self, index: int) -> None:
        self.settings.font_path = self.combo_font.itemData(index) or None
        self._update_font_size_enabled()
        self.data_changed.emit()

    def on_font_browse_clicked(self) -> None:
        fname, _ = QFileDialog.getOpenFileName(
            self, "Select Font", "", "Fonts (*.fnt *.ttf *.otf);;BMFont (*.fnt);;All Files (*)"
        )
        if fname:
            logger.info(f"Font selected: {fname}")
            self._select_path(self.combo_font, fname)

    def on_font_size_changed(self, value: int) -> None:
        self.settings.font_size = value
        self.data_changed.emit()

    def on_kerning_toggled(self, checked: bool) -> None:
        self.settings.use_kerning = checked
        self.data_changed.emit()

    def on_scale_changed(self, value: float) -> None:
        self.settings.scale = float(value)
        self.data_changed.emit()

    def on_smooth_toggled(self, checked: bool) -> None:
        self.settings.smooth = checked
        self.data_changed.emit()

    def on_color_clicked(self) -> None:
        initial = QColor(self.settings.color) if self.settings.color else QColor("white")
        color = QColorDialog.getColor(initial, self, "Text Tint")
        if color.isValid():
            self.settings.color = color.name()
            self._update_color_button()
            self.data_changed.emit()

    def on_color_cleared(self) -> None:
        self.settings.color = None
        self._update_color_button()
        self.data_changed.emit()

    def on_background_changed(self, index: int) -> None:
        self.settings.background_path = self.combo_bg.itemData(index) or None
        self.data_changed.emit()

    def on_background_browse_clicked(self) -> None:
        fname, _ = QFileDialog.getOpenFileName(
            self, "Select Background Tile", "", "Images (*.png *.jpg *.jpeg *.bmp *.gif);;All Files (*)"
        )
        if fname:
            logger.info(f"Background selected: {fname}")
            self._select_path(self.combo_bg, fname)

    def on_layout_changed(self) -> None:
        self.settings.min_height = self.spin_min_height.value()
        self.settings.offset_x = self.spin_offset_x.value()
        self.settings.offset_y = self.spin_offset_y.value()
        self.data_changed.emit()

    def load_from_state(self) -> None:
        """Pushes TitleSettings into the widgets without emitting data_changed."""
        self.blockSignals(True)
        widgets = (
            self.txt_input, self.combo_font, self.spin_font_size, self.chk_kerning,
            self.spin_scale, self.chk_smooth, self.combo_bg, self.spin_min_height,
            self.spin_offset_x, self.spin_offset_y,
        )
        for w in widgets:
            w.blockSignals(True)
        try:
            s = self.settings
            if self.txt_input.toPlainText() != s.text:
                self.txt_input.setPlainText(s.text)
            self._select_path(self.combo_font, s.font_path)
            self.spin_font_size.setValue(s.font_size)
            self.chk_kerning.setChecked(s.use_kerning)
            self.spin_scale.setValue(s.scale)
            self.chk_smooth.setChecked(s.smooth)
            self._select_path(self.combo_bg, s.background_path)
            self.spin_min_height.setValue(s.min_height)
            self.spin_offset_x.setValue(s.offset_x)
            self.spin_offset_y.setValue(s.offset_y)
            self._update_font_size_enabled()
            self._update_color_button()
            self._adopt_clamped_values()
        finally:
            for w in widgets:
                w.blockSignals(False)
            self.blockSignals(False)
