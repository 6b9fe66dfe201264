"""Desktop utilities: file listing and zip archives, text encoders, a work-time log and glTF export."""

__version__ = "0.1.0"