"""
The VIEW layer: PySide6 windows, panels, widgets and dialogs.
It reads TitleSettings and asks the controller for textures.
"""
