"""
The CONTROLLER layer glues the model together for the views:
it turns TitleSettings into a finished texture and writes it to disk.

Note: This package should be pure Python and should NOT import PySide6.
"""
