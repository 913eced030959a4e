"""SQLModel database models for mergedfs."""

from mergedfs.models.files import FileRecord, FileRecordBase, new_file_record

__all__ = [
    "FileRecord",
    "FileRecordBase",
    "new_file_record",
]
