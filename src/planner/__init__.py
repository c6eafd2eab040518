"""
Planner backend package.

The FastAPI application lives in ``planner.main``; the pure list/calendar logic
in ``planner.core``.
"""
