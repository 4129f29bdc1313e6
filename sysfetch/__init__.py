"""
Print host system details beside an ASCII logo, in the style of common fetch tools.
"""

__all__ = ["system_state", "formatting", "logo", "cli"]
__version__ = "0.1.0"
