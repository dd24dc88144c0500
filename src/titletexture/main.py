"""
Application Initialization
==========================
This module constructs the MVC (Model-View-Controller) architecture and starts
the Qt Event Loop.

Why is this file needed?
------------------------
It acts as the "Dependency Injection" root. It:
1. Configures logging.
2. Creates the QApplication (organization/app ids for QSettings).
3. Restores the last session's TitleSettings (the Model).
4. Instantiates the Main Window (View) and passes the Model into it.
"""
import logging
import sys

from titletexture.app.application import create_app
from titletexture.logging_config import setup_logging
from titletexture.view.main_window import MainWindow, restore_session


def main() -> None:
    # 1. Setup Logging (Console); TITLETEXTURE_LOG_LEVEL=DEBUG to see everything
    setup_logging(level=logging.INFO)

    # 2. Create the Qt Application
    app = create_app()

    # 3. Initialize the Data Model
    settings = restore_session()

    # 4. Initialize the Main Window, passing the model
    window = MainWindow(settings)
    window.show()

    # 5. Start Event Loop
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
