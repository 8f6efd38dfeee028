"""Time-limited share links for objects in S3, with secrets held in Redis."""

__version__ = "1.0.0"
