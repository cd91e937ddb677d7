"""Job Match Streamer: score job postings against a candidate profile with an LLM."""

__version__ = "0.1.0"
