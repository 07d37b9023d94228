"""
Trapline application.

A FastAPI-powered record keeper for licensed trappers: operating areas,
harvest logs, the trap shed, deployed traps on a map, and landowner
permission slips.

Author: Matthew Picone (mail@matthewpicone.com)
Date: 2025-12-17
"""
