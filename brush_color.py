import logging
import sys
from pathlib import Path

from PyQt5.QtWidgets import QApplication

from BC_Libs.constants import CONFIG_FILE_NAME
from BC_Libs.SessionLib.coloring_session import ColoringSession
from BC_Libs.SessionLib.session_config import load_config
from BC_Libs.WindowLib.coloring_window import ColoringWindow


def main() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = load_config(Path.home() / CONFIG_FILE_NAME)

    app = QApplication(sys.argv)
    window = ColoringWindow(ColoringSession(config))
    window.show()

    if len(sys.argv) > 1:
        window.open_picture(Path(sys.argv[1]))

    sys.exit(app.exec_())


if __name__ == "__main__":
    main()
