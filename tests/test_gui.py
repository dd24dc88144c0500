import pytest
from PIL import Image

QtWidgets = pytest.importorskip("PySide6.QtWidgets")

from PySide6.QtCore import QCoreApplication, QSettings  # noqa: E402

from titletexture.app.application import SESSION_KEY, VISIBLE_APP_NAME  # noqa: E402
from titletexture.model.state import TitleSettings  # noqa: E402
from titletexture.view.main_window import MainWindow, restore_session  # noqa: E402
from titletexture.view.panels.title_panel import TitleControlPanel  # noqa: E402
from titletexture.view.widgets.texture_preview import pil_to_qimage  # noqa: E402


@pytest.fixture(scope="module")
def qapp():
    app = QtWidgets.QApplication.instance() or QtWidgets.QApplication([])
    yield app


@pytest.fixture
def isolated_qsettings(tmp_path):
    QCoreApplication.setOrganizationName("titletexture-tests")
    QCoreApplication.setApplicationName("tests")
    QSettings.setDefaultFormat(QSettings.Format.IniFormat)
    QSettings.setPath(QSettings.Format.IniFormat, QSettings.Scope.UserScope, str(tmp_path))
    yield
    QSettings().clear()


def test_pil_to_qimage_copies_pixels(qapp):
    image = Image.new("RGBA", (3, 2), (10, 20, 30, 255))
    image.putpixel((2, 1), (200, 100, 50, 255))

    qimage = pil_to_qimage(image)
    assert (qimage.width(), qimage.height()) == (3, 2)
    assert qimage.pixelColor(0, 0).getRgb() == (10, 20, 30, 255)
    assert qimage.pixelColor(2, 1).getRgb() == (200, 100, 50, 255)


def test_panel_writes_edits_into_settings(qapp):
    settings = TitleSettings()
    panel = TitleControlPanel(settings)
    emitted = []
    panel.data_changed.connect(lambda: emitted.append(True))

    panel.txt_input.setPlainText("HELLO")
    panel.chk_kerning.setChecked(True)
    panel.spin_scale.setValue(2.0)
    panel.spin_offset_x.setValue(3)

    assert settings.text == "HELLO"
    assert settings.use_kerning is True
    assert settings.scale == 2.0
    assert settings.offset_x == 3
    assert emitted


def test_panel_load_from_state_is_silent(qapp, fnt_path):
    settings = TitleSettings()
    panel = TitleControlPanel(settings)
    emitted = []
    panel.data_changed.connect(lambda: emitted.append(True))

    settings.text = "LOADED"
    settings.font_path = fnt_path
    settings.min_height = 64
    panel.load_from_state()

    assert panel.txt_input.toPlainText() == "LOADED"
    assert panel.combo_font.currentData() == fnt_path
    assert panel.spin_min_height.value() == 64
    # bitmap fonts have a fixed size
    assert not panel.spin_font_size.isEnabled()
    assert emitted == []


def test_panel_builtin_font_selected_by_default(qapp):
    panel = TitleControlPanel(TitleSettings())
    assert panel.combo_font.currentIndex() == 0
    assert panel.spin_font_size.isEnabled()


def test_main_window_renders_preview(qapp, fnt_path):
    window = MainWindow(TitleSettings(text="AV", font_path=fnt_path, scale=1.0))

    assert window.windowTitle() == f"{VISIBLE_APP_NAME} - [Untitled]"
    assert "Tiles: 1" in window.statusBar().currentMessage()
    assert window.preview.lbl_info.text() == "32 × 32 px"


def test_main_window_marks_edits_as_modified(qapp, fnt_path):
    window = MainWindow(TitleSettings(text="AV", font_path=fnt_path, scale=1.0))
    window.panel.txt_input.setPlainText("AVA")

    assert window.is_modified
    assert window.windowTitle().endswith("*]")


def test_main_window_shows_generation_errors(qapp, tmp_path):
    window = MainWindow(TitleSettings(text="A", font_path=str(tmp_path / "missing.fnt")))
    assert window.preview.lbl_info.text() == "Error"
    assert "Error" in window.statusBar().currentMessage()


def test_session_round_trip(qapp, isolated_qsettings, fnt_path):
    window = MainWindow(TitleSettings(text="SAVED", font_path=fnt_path, use_kerning=True))
    window.store_session()

    restored = restore_session()
    assert restored.text == "SAVED"
    assert restored.use_kerning is True
    assert restored.font_path == fnt_path


def test_corrupt_session_falls_back_to_defaults(qapp, isolated_qsettings):
    QSettings().setValue(SESSION_KEY, '{"scale": "huge"}')
    assert restore_session() == TitleSettings()


def test_panel_clamps_out_of_range_settings(qapp, caplog):
    settings = TitleSettings(scale=100.0, font_size=1000, min_height=99999, offset_x=-9000)
    panel = TitleControlPanel(settings)

    assert panel.spin_scale.value() == 16.0
    assert settings.scale == 16.0
    assert settings.font_size == 256
    assert settings.min_height == 4096
    assert settings.offset_x == -512
    assert "out of range" in caplog.text
