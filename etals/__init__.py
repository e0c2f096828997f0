"""List directory contents with LS_COLORS colours, column layout and a long format."""

__version__ = "0.0.1"
__all__ = ["__version__"]