"""Qt application bootstrap (QApplication, QSettings)."""
