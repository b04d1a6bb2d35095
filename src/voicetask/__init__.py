"""Offline voice-command interpreter.

Turns a transcribed utterance into a structured task: title, notes,
location, due instant and priority.
"""

__version__ = "0.1.0"
