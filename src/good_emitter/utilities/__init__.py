from .logger import DEFAULT_FORMAT, configure_library_logging

__all__ = ["DEFAULT_FORMAT", "configure_library_logging"]
