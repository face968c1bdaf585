"""
Storage module: adapter exposing UrlBuilder behind a storage-style url() call.
"""

from s3presign.storage.adapter import S3UrlStorage

__all__ = ["S3UrlStorage"]
