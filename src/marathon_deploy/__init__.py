"""
Deploy Marathon application definitions from a CI build step.
"""

__version__ = '0.4.0'
