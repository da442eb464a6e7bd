# Importing the package registers every table on Base.metadata
from codeboard.backend.models.base import Base
from codeboard.backend.models.note import Note, NoteTagLink
from codeboard.backend.models.snippet import Snippet
from codeboard.backend.models.tag import NoteTag

__all__ = [
    "Base",
    "Note",
    "NoteTag",
    "NoteTagLink",
    "Snippet",
]
