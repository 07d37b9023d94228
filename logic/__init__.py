"""
Domain helpers for Trapline application.

Configuration, input validation, license list conversion, coordinate
resolution, the map view model and the permission slip document.
"""
