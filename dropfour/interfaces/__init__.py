"""
dropfour.interfaces - User-facing front ends for the engine
"""

# Don't import anything here to avoid circular imports
__all__ = []
