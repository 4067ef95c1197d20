"""
AI Adventure - A choose-your-own-adventure served by an LLM narrator.

This package provides:
- An HTTP API that tracks one conversation per browser session
- A story orchestrator that relays choices to a hosted LLM
- A terminal client for playing stories locally
"""

__version__ = "0.1.0"
