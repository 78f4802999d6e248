"""
API endpoint modules for MockPrep
"""

from mockprep.api.endpoints import feedback, interview

__all__ = ["feedback", "interview"]
