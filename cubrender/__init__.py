"""Ray-casting maze renderer for .cub scene files, with a pygame window and BMP screenshots."""

__version__ = "0.1.0"