"""
Main Application Window
=======================
The primary GUI container that holds the Menu Bar, the control panel and the
texture preview.

Why is this file needed?
------------------------
1. Layout: It organizes the high-level visual structure of the application.
2. Routing: It connects global actions (Save Texture, presets, About) to the
   generator and the IO manager.
"""
import json
import logging
import os

from PySide6.QtWidgets import (
    QMainWindow, QSplitter, QFileDialog, QMessageBox
)
from PySide6.QtCore import Qt, QTimer, QSettings
from PySide6.QtGui import QAction

from titletexture.app.application import VISIBLE_APP_NAME, SESSION_KEY
from titletexture.controller.generator import TextureGenerator
from titletexture.model.io import IOManager
from titletexture.model.state import TitleSettings
from titletexture.view.dialogs.about_dialog import AboutDialog
from titletexture.view.panels.title_panel import TitleControlPanel
from titletexture.view.widgets.texture_preview import TexturePreview

logger = logging.getLogger(__name__)

PREVIEW_DELAY_MS = 150


class MainWindow(QMainWindow):
    def __init__(self, settings: TitleSettings) -> None:
        super().__init__()
        self.settings: TitleSettings = settings
        self.generator = TextureGenerator()
        self.preset_path: str | None = None
        self.is_modified: bool = False

        self.update_window_title()
        self.resize(1100, 600)

        # --- SPLITTER (CONTENT AREA) ---
        splitter = QSplitter(Qt.Horizontal)
        self.setCentralWidget(splitter)

        # --- LEFT SIDE: Controls ---
        self.panel = TitleControlPanel(self.settings)
        splitter.addWidget(self.panel)

        # --- RIGHT SIDE: Preview ---
        self.preview = TexturePreview()
        splitter.addWidget(self.preview)
        splitter.setSizes([320, 780])

        # Live preview is debounced so typing stays responsive
        self.preview_timer = QTimer(self)
        self.preview_timer.setSingleShot(True)
        self.preview_timer.setInterval(PREVIEW_DELAY_MS)
        self.preview_timer.timeout.connect(self.refresh_preview)

        # --- SIGNAL CONNECTIONS ---
        self.panel.data_changed.connect(self.on_data_changed)

        # --- ACTIONS & MENUS ---
        self._create_actions()
        self._create_menus()
        self.statusBar()

        # Initial Render
        self.refresh_preview()

    def _create_actions(self) -> None:
        # File Actions
        self.act_new = QAction("New", self)
        self.act_new.setShortcut("Ctrl+N")
        self.act_new.triggered.connect(self.on_file_new)

        self.act_open = QAction("Open Preset...", self)
        self.act_open.setShortcut("Ctrl+O")
        self.act_open.triggered.connect(self.on_preset_open)

        self.act_save_preset = QAction("Save Preset...", self)
        self.act_save_preset.setShortcut("Ctrl+Shift+S")
        self.act_save_preset.triggered.connect(self.on_preset_save)

        self.act_save_texture = QAction("Save Texture...", self)
        self.act_save_texture.setShortcut("Ctrl+S")
        self.act_save_texture.triggered.connect(self.on_save_texture)

        self.act_exit = QAction("Exit", self)
        self.act_exit.triggered.connect(self.close)

        # Help Actions
        self.act_about = QAction("About", self)
        self.act_about.triggered.connect(self.on_about)

    def _create_menus(self) -> None:
        menu_bar = self.menuBar()

        file_menu = menu_bar.addMenu("&File")
        file_menu.addAction(self.act_new)
        file_menu.addSeparator()
        file_menu.addAction(self.act_open)
        file_menu.addAction(self.act_save_preset)
        file_menu.addSeparator()
        file_menu.addAction(self.act_save_texture)
        file_menu.addSeparator()
        file_menu.addAction(self.act_exit)

        help_menu = menu_bar.addMenu("&Help")
        help_menu.addAction(self.act_about)

    # --- HELPER METHODS ---
    def update_window_title(self) -> None:
        """Updates the window title based on preset name and dirty state."""
        filename = os.path.basename(self.preset_path) if self.preset_path else "Untitled"
        title = f"{VISIBLE_APP_NAME} - [{filename}"
        if self.is_modified:
            title += "*"
        title += "]"
        self.setWindowTitle(title)

    def set_modified(self, modified: bool) -> None:
        """Sets the dirty flag and updates title if changed."""
        if self.is_modified != modified:
            self.is_modified = modified
            self.update_window_title()

    def on_data_changed(self) -> None:
        """Slot called when any setting changes."""
        self.set_modified(True)
        self.preview_timer.start()

    def refresh_preview(self) -> None:
        try:
            result = self.generator.generate(self.settings)
        except Exception as e:
            logger.error(f"Preview failed: {e}")
            self.preview.show_error(str(e))
            self.statusBar().showMessage(f"Error: {e}")
            return

        width, height = result.image.size
        self.preview.set_image(result.image, f"{width} × {height} px")
        self.statusBar().showMessage(
            f"Font: {result.font_name}  |  Text: {result.text_size[0]} × {result.text_size[1]} px"
            f"  |  Tiles: {result.tile_count}"
        )

    # --- FILE SLOTS ---

    def on_file_new(self) -> None:
        if not self._confirm_discard():
            return
        self.settings.reset()
        self.preset_path = None
        self.is_modified = False
        self.update_window_title()
        self.refresh_ui_from_state()

    def on_preset_open(self) -> None:
        if not self._confirm_discard():
            return
        fname, _ = QFileDialog.getOpenFileName(
            self, "Open Preset", "", "Preset Files (*.json)"
        )
        if fname:
            try:
                loaded = IOManager.load_preset(fname)
            except Exception as e:
                logger.error(f"Could not open preset '{fname}': {e}")
                QMessageBox.critical(self, "Error", f"Could not open the preset:\n{e}")
                return

            self._apply_settings(loaded)
            self.preset_path = fname
            self.is_modified = False
            self.update_window_title()
            self.refresh_ui_from_state()

    def on_preset_save(self) -> bool:
        fname, _ = QFileDialog.getSaveFileName(
            self, "Save Preset", self.preset_path or "", "Preset Files (*.json)"
        )
        if not fname:
            return False
        try:
            self.preset_path = IOManager.save_preset(self.settings, fname)
        except Exception as e:
            logger.error(f"Could not save preset '{fname}': {e}")
            QMessageBox.critical(self, "Error", f"Could not save the preset:\n{e}")
            return False

        self.is_modified = False
        self.update_window_title()
        return True

    def on_save_texture(self) -> None:
        fname, _ = QFileDialog.getSaveFileName(
            self, "Save Texture", os.path.abspath(self.settings.output_path), "PNG Images (*.png)"
        )
        if not fname:
            return
        try:
            written = self.generator.save(self.settings, fname)
        except Exception as e:
            logger.error(f"Could not save texture '{fname}': {e}")
            QMessageBox.critical(self, "Error", f"Could not save the texture:\n{e}")
            return

        if self.settings.output_path != written:
            self.settings.output_path = written
            self.set_modified(True)
        self.statusBar().showMessage(f"Texture saved to {written}", 5000)

    def on_about(self) -> None:
        AboutDialog(self).exec()

    def refresh_ui_from_state(self) -> None:
        """Forces the panel to re-read TitleSettings, then re-renders."""
        self.panel.load_from_state()
        self.generator.clear_cache()
        self.refresh_preview()

    def _apply_settings(self, other: TitleSettings) -> None:
        # The panel holds a reference to self.settings; update it in place
        for key, value in other.to_dict().items():
            setattr(self.settings, key, value)

    def _confirm_discard(self) -> bool:
        """Asks to save unsaved preset changes. False means abort."""
        if not self.is_modified:
            return True
        reply = QMessageBox.question(
            self,
            "Save changes?",
            "The settings were changed. Do you want to save them as a preset?",
            QMessageBox.Save | QMessageBox.Discard | QMessageBox.Cancel
        )
        if reply == QMessageBox.Save:
            return self.on_preset_save()
        return reply == QMessageBox.Discard

    def store_session(self) -> None:
        QSettings().setValue(SESSION_KEY, json.dumps(self.settings.to_dict()))
        logger.debug("Session settings stored.")

    def closeEvent(self, event, /) -> None:
        """Handle window close event to prompt for saving if modified."""
        if not self._confirm_discard():
            event.ignore()  # Don't close window
            return

        self.store_session()
        event.accept()


def restore_session() -> TitleSettings:
    """TitleSettings from the last session, or defaults."""
    raw = QSettings().value(SESSION_KEY, "", type=str)
    if not raw:
        return TitleSettings()
    try:
        data = json.loads(raw)
        if not isinstance(data, dict):
            raise ValueError("session value is not an object")
        settings = TitleSettings.from_dict(data)
        settings.validate()
    except ValueError as e:
        logger.warning(f"Stored session is invalid, starting with defaults: {e}")
        return TitleSettings()
    logger.info("Restored settings from the last session.")
    return settings
