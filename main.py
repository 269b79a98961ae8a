import argparse
import logging
import sys

from PySide6.QtCore import QTimer
from PySide6.QtWidgets import QApplication

from fractals.base import ViewerSettings
from fractals.registry import list_fractals
from ui.view import FractalViewer
from utils.enums import EvaluatorMode


def main():
    parser = argparse.ArgumentParser(description="Explore escape-time fractals")
    parser.add_argument(
        "-f",
        "--fractal",
        choices=[rule.display_name() for rule in list_fractals()],
        default=None,
        help="Fractal to show first.",
    )
    parser.add_argument(
        "-e",
        "--evaluator",
        choices=[m.name.lower() for m in EvaluatorMode],
        default="auto",
        help="Grid evaluator; auto deduplicates exactly whenever the fractal allows it, "
             "grid merges trajectories at grid resolution.",
    )
    parser.add_argument("--width", type=int, default=800)
    parser.add_argument("--height", type=int, default=800)
    parser.add_argument("-s", "--spacing", type=int, default=1, help="Pixels per grid cell.")
    parser.add_argument("-log", "--log-level", choices=["debug", "info", "warning"], default="info")

    args = parser.parse_args()
    logging.basicConfig(format="%(levelname)s %(name)s: %(message)s",
                        level=args.log_level.upper())

    settings = ViewerSettings(width=args.width, height=args.height,
                              sample_spacing=args.spacing,
                              evaluator=EvaluatorMode[args.evaluator.upper()])

    app = QApplication(sys.argv)
    viewer = FractalViewer(settings, fractal_name=args.fractal)
    viewer.show()
    QTimer.singleShot(0, viewer.start)
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
