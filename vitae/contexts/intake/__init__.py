"""
Intake Context

Responsibilities:
- Reads the résumé JSON data file
- Reports missing, unreadable, or malformed files as DataLoadError

Owns: Data file access
Never: Validates or normalizes the résumé schema
"""

from vitae.contexts.intake.data_loader import load_resume_data, read_resume_data
from vitae.contexts.intake.exceptions import DataLoadError

__all__ = ["load_resume_data", "read_resume_data", "DataLoadError"]
