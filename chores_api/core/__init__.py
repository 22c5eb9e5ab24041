"""Core configuration, errors, logging and Pydantic models.

Contains:
- config.py: environment-driven settings for the server and bootstrap script
- errors.py: exception types and JSON error handlers
- log.py: logging setup and timestamp helper
- models_io.py: response schemas used across routers
"""
