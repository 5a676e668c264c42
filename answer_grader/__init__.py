"""
Answer Grader - LLM-based grading for subjective questions.

This package grades free-text student answers on a 5-point scale using
one of several interchangeable LLM backends, and turns their loosely
formatted replies into strict, fully-populated grading results.
"""

__version__ = "1.0.0"
__author__ = "Answer Grader Team"
