"""
Web application package for the tic-tac-toe engine.

Provides a FastAPI JSON API and a static browser page for playing against
the engine. Run with: uvicorn web.app:app
"""
