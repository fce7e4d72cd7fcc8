"""Application package for the product catalog web app.

This package exposes the model, repository, service and controller
modules used by the FastAPI application. It is intentionally
lightweight; individual modules contain the concrete implementations
and documentation.
"""
