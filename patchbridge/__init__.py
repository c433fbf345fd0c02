"""REST bridge exposing a patcher's boxes and patchlines over HTTP."""

__version__ = "0.1.0"
