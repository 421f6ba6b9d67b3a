"""
Interview Proxy - question generation and answer grading over Gemini.

This package exposes a small HTTP service that asks the Gemini
generative-language API for interview questions and grades candidate
answers, reshaping the replies for a front-end client.
"""

__version__ = "1.0.0"
__author__ = "Interview Proxy Team"
