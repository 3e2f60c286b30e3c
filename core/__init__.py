"""
Core Components.

Structure:
    models/: Pure data structures (no business logic)
"""

from . import models
