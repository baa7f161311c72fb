"""
Orb Drag Planner - Entry Point

Loads solver settings, builds a board and runs one solve on the
background worker thread, then logs the planned drag.

Example:
    python main.py
    python main.py --random --seed 7 --axis vertical --priority steps
    python main.py --board 0,2,3,4,5,1,2,0,0,2,4,1,...  # 36 cell codes
"""

import sys
import logging
import argparse
from typing import Optional

from PyQt5.QtCore import QCoreApplication

from orbdrag.generators import fixed_board, random_board
from orbdrag.settings import config_from_settings, load_settings, save_settings
from orbdrag.solver import (
    BoardState, BoardFormatError, SolveResult, build_config, get_strategy_names,
)
from orbdrag.solver_worker import SolverWorker


# Configure logging - output to both console and file
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%H:%M:%S",
    handlers=[
        logging.StreamHandler(),  # Console output
        logging.FileHandler("solver.log", mode='w', encoding='utf-8')  # File output
    ]
)
logger = logging.getLogger(__name__)


class Application:
    """
    Main application controller.

    Owns the worker thread for one solve and reports its result.
    """

    def __init__(self, app: QCoreApplication, board: BoardState, args: argparse.Namespace):
        """
        Initialize the application.

        Args:
            app: Qt application driving the event loop
            board: Board to solve
            args: Parsed command line arguments
        """
        self.app = app
        self.board = board
        self.args = args
        self.worker: Optional[SolverWorker] = None
        self.exit_code = 0

        # Load persistent settings, CLI flags override them
        self.settings = load_settings()
        if args.debug or self.settings.get("debug_enabled"):
            logging.getLogger().setLevel(logging.DEBUG)

        overrides = {
            "beam_width": args.beam_width,
            "max_steps": args.max_steps,
        }
        for key, value in overrides.items():
            if value is not None:
                self.settings[key] = value

        self.config = build_config(
            config_from_settings(self.settings),
            axis=args.axis,
            priority=args.priority,
            chain_enabled=True if args.chain else None,
            diagonal_enabled=False if args.no_diagonal else None,
        )
        self.target = args.target if args.target is not None else self.settings.get("target")

    def setup(self):
        """Create the worker and connect signals."""
        self.worker = SolverWorker(self.board, self.config, self.target,
                                   strategy_name=self.args.strategy)
        self.worker.status_changed.connect(self._on_status)
        self.worker.progress_changed.connect(self._on_progress)
        self.worker.solution_ready.connect(self._on_solution)
        self.worker.error_occurred.connect(self._on_error)
        self.worker.finished.connect(self.app.quit)

        if self.args.save_settings:
            self.settings.update(self.config.to_dict())
            self.settings["target"] = self.target
            save_settings(self.settings)
            logger.info("Settings saved")

    def run(self):
        logger.info(f"Board:\n{self.board}")
        logger.info(f"Config: {self.config.to_dict()}, target: {self.target}")
        self.worker.start()

    def _on_status(self, status: str):
        logger.info(f"Status: {status}")

    def _on_progress(self, percent: float, message: str):
        logger.debug(f"Progress {percent:.0%}: {message}")

    def _on_solution(self, result: SolveResult):
        logger.info(
            f"Clusters {result.total_clusters} (chain {result.chain_clusters}), "
            f"cleared {result.cleared_count}, steps {result.steps}, "
            f"H {result.horizontal_clusters} / V {result.vertical_clusters}"
        )
        if result.budget_exhausted:
            logger.warning("Search budget exhausted - result may be suboptimal")
        path_str = " -> ".join(f"({r},{c})" for r, c in result.path) or "(no path)"
        logger.info(f"Path: {path_str}")

    def _on_error(self, error_msg: str):
        logger.error(f"Worker error: {error_msg}")
        self.exit_code = 1


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Orb Drag Planner - single-drag beam search for 6x6 boards"
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--random", "-r", action="store_true",
                        help="Solve a uniformly random board")
    source.add_argument("--board", "-b",
                        help="36 comma separated cell codes, row-major, staging row first")
    parser.add_argument("--seed", type=int, default=None,
                        help="Seed for --random")
    parser.add_argument("--target", "-t", type=int, default=None,
                        help="Target clusters (default: board's theoretical maximum)")
    parser.add_argument("--axis", choices=["horizontal", "vertical"], default=None)
    parser.add_argument("--priority", choices=["clusters", "steps"], default=None)
    parser.add_argument("--chain", action="store_true", help="Count chain reactions")
    parser.add_argument("--no-diagonal", action="store_true", help="Disable diagonal moves")
    parser.add_argument("--beam-width", type=int, default=None)
    parser.add_argument("--max-steps", type=int, default=None)
    parser.add_argument("--strategy", choices=get_strategy_names(), default="beam",
                        help="Search strategy")
    parser.add_argument("--save-settings", action="store_true",
                        help="Persist the effective configuration to config.json")
    parser.add_argument("--debug", "-d", action="store_true",
                        help="Enable debug logging")
    return parser.parse_args(argv)


def load_board(args: argparse.Namespace) -> BoardState:
    """Build the board selected on the command line."""
    if args.board:
        codes = [int(v) for v in args.board.replace(" ", "").split(",") if v]
        return BoardState.from_codes(codes)
    if args.random:
        return random_board(args.seed)
    return fixed_board()


def main():
    """Initialize and run the Orb Drag Planner."""
    args = parse_args()

    try:
        board = load_board(args)
    except (BoardFormatError, ValueError) as e:
        logger.error(f"Invalid board: {e}")
        sys.exit(2)

    app = QCoreApplication(sys.argv)

    application = Application(app, board, args)
    application.setup()
    application.run()

    app.exec_()
    sys.exit(application.exit_code)


if __name__ == "__main__":
    main()
