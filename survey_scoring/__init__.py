"""
Survey Scoring Engine

Turns survey question definitions and respondent answers into normalized
scores, labeled bands, scoring traces and cross-response analytics.
"""

__version__ = "1.0.0"
