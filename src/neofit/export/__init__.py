"""Export and formatting utilities."""

from neofit.export.formatters import format_report, report_to_dict, workouts_to_csv

__all__ = ["format_report", "report_to_dict", "workouts_to_csv"]
