"""
Interface package: ways to play against the engine outside the browser.

Modules:
    console — Text command loop over stdin/stdout driving a GameSession.
              Run with: python -m interface.console
"""
