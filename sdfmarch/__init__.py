"""Render implicit surfaces by sphere tracing signed distance fields."""
__version__ = '0.1'
