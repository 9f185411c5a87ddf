"""
Shared utilities for Resume Improver.

Common functionality used across contexts:
- Logging setup and session event log
- Deployment settings
- PDF helpers
- Timestamps
"""

from resume_improver.utils.timestamp import now, now_exact

__all__ = ["now", "now_exact"]
