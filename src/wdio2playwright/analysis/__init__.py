"""
File and project analysis reports.
"""

from wdio2playwright.analysis.audit import AnalysisReport, analyze
from wdio2playwright.analysis.project import ProjectState, detect_project_state

__all__ = ["AnalysisReport", "ProjectState", "analyze", "detect_project_state"]
