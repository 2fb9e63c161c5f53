"""
AI Code Reviewer Backend

A web backend that reviews submitted source code (or replies to casual
messages) using a generative language model, and keeps user accounts
in MongoDB.
"""

__version__ = "1.0.0"
__author__ = "AI Code Reviewer Team"
