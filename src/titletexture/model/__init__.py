"""
The MODEL layer contains pure data structures and image logic.
It has NO knowledge of the GUI (Qt).
It deals with Fonts, Text Layout, Backgrounds, and I/O.
"""
