"""Command line interface for the DSA sheet tracker."""

import asyncio
import logging
import sys
from typing import List, Optional

from . import config
from .api import SheetAPI
from .display import Display
from .errors import SheetError
from .events import ProgressEvents
from .views import DashboardView, TopicView


class SheetTracker:
    """Main application controller."""

    def __init__(self, api: SheetAPI, display: Optional[Display] = None):
        self.api = api
        self.events = ProgressEvents()
        self.display = display or Display()

    async def show_dashboard(self) -> None:
        dashboard = DashboardView(self.api, self.events)
        summary = await dashboard.refresh()
        self.display.display_dashboard(summary)

    async def show_topic(self, topic_id: str) -> None:
        view = TopicView(self.api, topic_id, self.events)
        await view.load()
        self.display.display_topic(view.topic, view.rows(), view.stats())
        view.close()

    async def toggle_problems(self, topic_id: str, problem_ids: List[str]) -> int:
        """Toggle problems concurrently and return how many failed."""
        view = TopicView(self.api, topic_id, self.events)
        if await view.load() is None:
            self.display.print_error(f"Topic {topic_id} not found.")
            return len(problem_ids)

        results = await asyncio.gather(
            *(view.toggle(pid) for pid in problem_ids),
            return_exceptions=True
        )

        failures = 0
        for pid, result in zip(problem_ids, results):
            if isinstance(result, SheetError):
                failures += 1
                self.display.print_error(str(result))
            elif isinstance(result, BaseException):
                raise result
            elif result:
                self.display.print_success(f"Marked problem {pid} as completed!")
            else:
                self.display.print_success(f"Marked problem {pid} as not completed.")

        self.display.display_topic(view.topic, view.rows(), view.stats())
        view.close()
        return failures


def print_help() -> None:
    """Display help message."""
    print("""
DSA Sheet Tracker 🚀

Track your progress through a data structures and algorithms sheet.

USAGE:
  dsa-sheet dashboard                          Show overall and per-topic progress
  dsa-sheet topic TOPIC_ID                     Show a topic's problems
  dsa-sheet toggle TOPIC_ID PROBLEM_ID [...]   Flip completion of problems

ENVIRONMENT:
  DSA_SHEET_API_URL      Backend base URL (default: http://localhost:5000/api)
  DSA_SHEET_TOKEN        Bearer token sent with every request
  DSA_SHEET_TIMEOUT      Request timeout in seconds (default: 10)
  DSA_SHEET_LOG_LEVEL    Logging level (default: WARNING)
  DEBUG                  Verbose logging and full tracebacks

EXAMPLES:
  dsa-sheet dashboard
  dsa-sheet topic 64f1c2
  dsa-sheet toggle 64f1c2 64f1d7 64f1d8
""")


def configure_logging() -> None:
    level = logging.DEBUG if config.DEBUG else getattr(logging, config.LOG_LEVEL, logging.WARNING)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


async def main(argv: Optional[List[str]] = None) -> int:
    """Main application entry point."""
    args = sys.argv[1:] if argv is None else argv
    if not args:
        print_help()
        return 0

    command = args[0]
    display = Display()

    try:
        if command in ("-h", "--help", "help"):
            print_help()
            return 0

        async with SheetAPI() as api:
            tracker = SheetTracker(api, display)

            if command in ("dashboard", "stats"):
                await tracker.show_dashboard()

            elif command == "topic" and len(args) == 2:
                await tracker.show_topic(args[1])

            elif command == "toggle" and len(args) >= 3:
                failures = await tracker.toggle_problems(args[1], args[2:])
                return 1 if failures else 0

            else:
                display.print_error(f"Unknown command: {' '.join(args)}")
                print_help()
                return 2

    except KeyboardInterrupt:
        print("\n👋 Goodbye!")
    except Exception as e:
        display.print_error(f"Unexpected error: {e}")
        if config.DEBUG:
            raise
        return 1

    return 0


def run() -> None:
    configure_logging()
    sys.exit(asyncio.run(main()))
