"""Interactive crop frames for photo composition practice."""

__version__ = "0.1.0"
