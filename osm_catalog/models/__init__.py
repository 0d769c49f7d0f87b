from .library import Category, Document, DownloadType, LibraryItem

__all__ = ["Category", "Document", "DownloadType", "LibraryItem"]
