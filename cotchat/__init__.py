"""
cotchat: a terminal chat client for OpenAI-compatible servers that separates
a model's chain-of-thought reasoning from its final answer as tokens stream in.
"""

__version__ = "0.1.0"
