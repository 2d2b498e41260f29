"""Console rendering for the dashboard and topic views."""

from typing import List, Optional

from . import config
from .models import Difficulty, ProgressStats, Topic
from .views import DashboardSummary, ProblemRow


def progress_bar(percentage: int, width: int = config.PROGRESS_BAR_WIDTH) -> str:
    filled = max(0, min(width, int((percentage / 100) * width)))
    return "█" * filled + "░" * (width - filled)


class Display:
    """Handles all console output and formatting."""

    @staticmethod
    def print_header(text: str) -> None:
        """Print a formatted header."""
        print(f"\n🎯 {text}")
        print("=" * 50)

    @staticmethod
    def print_success(text: str) -> None:
        print(f"✅ {text}")

    @staticmethod
    def print_error(text: str) -> None:
        print(f"❌ {text}")

    @staticmethod
    def print_warning(text: str) -> None:
        print(f"⚠️ {text}")

    def display_dashboard(self, summary: DashboardSummary) -> None:
        """Display overall stats, difficulty breakdown and the topic list."""
        stats = summary.stats
        self.print_header("DSA Sheet Dashboard")

        print(f"Total Problems: {stats.total}")
        print(f"Completed:      {stats.completed}")
        print(f"Remaining:      {stats.remaining}")
        print(f"Progress:       {stats.percentage}%")

        print(f"\nOverall {progress_bar(stats.percentage)} {stats.completed}/{stats.total} problems")

        if summary.by_difficulty:
            print()
            for difficulty in Difficulty:
                diff_stats = summary.by_difficulty.get(difficulty)
                if diff_stats is None:
                    continue
                icon = config.DIFFICULTY_ICONS[difficulty]
                print(f"{icon} {difficulty.value:<6} {progress_bar(diff_stats.percentage)} "
                      f"{diff_stats.completed}/{diff_stats.total}")

        if not summary.topics:
            self.print_warning("No topics available.")
            return

        self.print_header("Topics")
        for item in summary.topics:
            topic_stats = item.stats
            print(f"\n[{item.topic.id}] {item.topic.title}  {topic_stats.completed}/{topic_stats.total}")
            if item.topic.description:
                print(f"   {item.topic.description}")
            print(f"   {progress_bar(topic_stats.percentage)} {topic_stats.percentage}%")

    def display_topic(self, topic: Optional[Topic], rows: List[ProblemRow], stats: ProgressStats) -> None:
        """Display a topic's problems with completion markers."""
        if topic is None:
            self.print_error("Topic not found.")
            return

        self.print_header(topic.title)
        if topic.description:
            print(topic.description)
        print(f"\nProgress {progress_bar(stats.percentage)} {stats.completed}/{stats.total} problems")
        print(f"{stats.percentage}% completed")

        for row in rows:
            problem = row.problem
            marker = "✅" if row.completed else "⬜"
            if row.updating:
                marker = "⏳"
            icon = config.DIFFICULTY_ICONS.get(problem.difficulty, "❓")
            print(f"\n{marker} #{row.position} {problem.title} {icon} {problem.difficulty.value}")
            print(f"   ID: {problem.id}")
            if problem.description:
                print(f"   {problem.description}")
            if problem.tags:
                print(f"   Tags: {', '.join(problem.tags)}")
            for label, url in problem.links.available():
                print(f"   {label}: {url}")
        print()
