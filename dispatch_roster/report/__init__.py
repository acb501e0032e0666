"""
Report subsystem: renders the operations hand-over text.
"""

from dispatch_roster.report.renderer import (
    ReportRenderer,
    ValidationError,
    render_report,
)

__all__ = ["ReportRenderer", "ValidationError", "render_report"]
