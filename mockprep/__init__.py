"""
MockPrep - AI-Assisted Mock Interview Platform

Turns the transcript of a voice mock interview into a scored,
persisted performance evaluation.
"""

__version__ = "0.1.0"
__author__ = "MockPrep Team"
