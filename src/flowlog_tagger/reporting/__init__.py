from .report import build_report_frames, format_report, write_report

__all__ = ["build_report_frames", "format_report", "write_report"]
