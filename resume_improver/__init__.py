"""
Resume Improver - resume vs. job description analysis client

Turns a resume (PDF, DOCX or pasted text) and a job description into a request
for a remote analysis endpoint and reduces whatever comes back to a single
markdown string for display.

Architecture:
- Intake Context: Source documents and text extraction (PDF, DOCX, raw text)
- Analysis Context: Request strategies, HTTP call, response normalization,
  and the session state machine
"""

__version__ = "0.1.0"
