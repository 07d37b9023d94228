"""
Server modules for Trapline application.

This package contains FastAPI router modules for authentication, each
record-keeping screen, the HTML pages, and PDF export.

Author: Matthew Picone (mail@matthewpicone.com)
Date: 2025-12-17
"""
