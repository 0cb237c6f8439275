"""Insider Risk Index service.

Scores an organisation's insider-risk program from a 20-question
self-assessment across five weighted pillars, classifies it into one of
five maturity levels, and compares it against industry and company-size
benchmarks.
"""

__version__ = "0.1.0"
