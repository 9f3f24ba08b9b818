"""
Application Initialization
==========================
This module constructs the model, the controller and the window and starts
the Qt Event Loop.

Why is this file needed?
------------------------
It acts as the "Dependency Injection" root. It:
1. Instantiates the packing engine (Model) inside the SceneController.
2. Instantiates the Main Window (View) and hands it the controller.
3. Seeds the scene with one φ set.
"""
import argparse
import logging
import sys
from typing import Optional, Sequence

from PySide6.QtWidgets import QApplication

from phipacking.controller.scene import SceneController
from phipacking.logging_config import setup_logging
from phipacking.view.main_window import MainWindow, VISIBLE_APP_NAME


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="phipacking", description=VISIBLE_APP_NAME)
    parser.add_argument("--debug", action="store_true", help="log every drag step")
    parser.add_argument("--log-file", default=None, help="also write the log to this file")
    args, _ = parser.parse_known_args(argv)  # leave Qt's own options alone
    return args


def main() -> None:
    args = parse_args(sys.argv[1:])

    # 1. Setup Logging (Console + Optional File)
    setup_logging(level=logging.DEBUG if args.debug else logging.INFO, log_file=args.log_file)

    # 2. Create the Qt Application
    app = QApplication(sys.argv)
    app.setApplicationName(VISIBLE_APP_NAME)

    # 3. Initialize the controller (owns the model)
    controller = SceneController()

    # 4. Initialize the Main Window, passing the controller
    window = MainWindow(controller)
    controller.add_size_set()
    window.show()

    # 5. Start Event Loop
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
