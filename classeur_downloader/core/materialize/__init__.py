"""Writing node trees to the local filesystem."""
from .writer import FileWriter, MARKDOWN_EXTENSION, JSON_EXTENSION, FOLDER_METADATA_SUFFIX
from .materializer import Materializer, extract_payload

__all__ = [
    'FileWriter',
    'Materializer',
    'extract_payload',
    'MARKDOWN_EXTENSION',
    'JSON_EXTENSION',
    'FOLDER_METADATA_SUFFIX',
]
