"""SQLAlchemy models exposed for metadata creation and imports."""
from .review import ARTICLE_TYPES, CONTENT_TYPE_LIST, CONTENT_TYPES, Album, Article, ContentType, Song
from .session import SessionRecord
from .setting import SiteSetting
from .user import User

__all__ = [
    "User",
    "SessionRecord",
    "SiteSetting",
    "Album",
    "Song",
    "Article",
    "ContentType",
    "CONTENT_TYPES",
    "CONTENT_TYPE_LIST",
    "ARTICLE_TYPES",
]
