"""
Visitor context - what the loader script reports about the current page view
"""
from dataclasses import dataclass


@dataclass(frozen=True)
class VisitorContext:
    """
    Request context for one resolution pass.

    All fields are blank/zero when the client did not send them.
    timestamp is accepted for completeness; no condition type reads it.
    """
    url: str = ""
    path: str = ""
    referrer: str = ""
    user_agent: str = ""
    language: str = ""
    screen_width: int = 0
    screen_height: int = 0
    timestamp: str = ""
