"""Gemini-backed analysis of recorded sealant product-testing interviews."""

__version__ = "0.1.0"
