"""Multi-user blogging API with comments and image uploads."""

__version__ = "1.0.0"
