from .file_source import FileSource
from .bytes_source import BytesSource
from .uploader import ChunkedUploader, ProgressCallback
from .source import ByteSource, block_count, block_length, as_byte_source

__all__ = [
    "ByteSource",
    "BytesSource",
    "ChunkedUploader",
    "FileSource",
    "ProgressCallback",
    "as_byte_source",
    "block_count",
    "block_length",
]
