"""Analysis package."""

from .statistics import StatisticsCalculator, QueueStats, OverallStats
from .charts import ChartGenerator

__all__ = ["StatisticsCalculator", "QueueStats", "OverallStats", "ChartGenerator"]
