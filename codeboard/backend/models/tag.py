"""
Note Tags.

The closed set of categories a note can be filed under. Tags are not stored
as rows of their own: notes reference them by enum name through the
note_tags join table, and unknown names are rejected rather than created.
"""

import enum


class NoteTag(enum.Enum):
    """Tag with a display name, an emoji and a one-line description."""

    # Development
    DATABASE = ("Database", "🗄️", "Data storage, queries, and database management")
    ALGORITHM = ("Algorithm", "🧮", "Algorithms, data structures, and computational logic")
    FRONTEND = ("Frontend", "🎨", "User interface, web design, and client-side development")
    BACKEND = ("Backend", "⚙️", "Server-side logic, APIs, and system architecture")

    # Learning and documentation
    TUTORIAL = ("Tutorial", "📚", "Step-by-step guides and learning materials")
    NOTES = ("Notes", "📋", "General notes, documentation, and reference materials")
    SNIPPET = ("Snippet", "✂️", "Reusable code snippets and utilities")

    # Project types
    DIY = ("DIY", "🔨", "Do-it-yourself projects and custom solutions")
    GAMES = ("Games", "🎮", "Game development and interactive applications")
    COMPONENTS = ("Components", "🧩", "Reusable components and modules")

    # Technologies
    MOBILE = ("Mobile", "📱", "Mobile app development and responsive design")
    WEB = ("Web", "🌐", "Web development and online applications")
    API = ("API", "🔌", "Application programming interfaces and integrations")

    # Tools
    TOOLS = ("Tools", "🛠️", "Development tools, scripts, and utilities")
    CONFIG = ("Config", "⚙️", "Configuration files and setup instructions")

    # General
    EXPERIMENTAL = ("Experimental", "🧪", "Experimental code and proof of concepts")
    ARCHIVE = ("Archive", "📦", "Archived projects and deprecated code")
    OTHER = ("Other", "🔖", "Miscellaneous notes that don't fit other categories")

    def __init__(self, display_name: str, emoji: str, description: str) -> None:
        self.display_name = display_name
        self.emoji = emoji
        self.description = description

    @property
    def display_with_emoji(self) -> str:
        return f"{self.emoji} {self.display_name}"

    @property
    def full_display(self) -> str:
        return f"{self.emoji} {self.display_name} - {self.description}"

    @classmethod
    def from_name(cls, name: str) -> "NoteTag":
        """
        Look a tag up by its enum name, ignoring case.

        Raises:
            ValueError: If no tag has that name
        """
        if not name or not name.strip():
            raise ValueError("Tag name must not be blank")
        try:
            return cls[name.strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown tag: {name}") from None

    @classmethod
    def is_valid_name(cls, name: str | None) -> bool:
        return bool(name) and name.strip().upper() in cls.__members__

    @classmethod
    def find_by_display_name(cls, display_name: str | None) -> "NoteTag":
        """Look a tag up by display name, falling back to OTHER."""
        if display_name:
            for tag in cls:
                if tag.display_name.lower() == display_name.strip().lower():
                    return tag
        return cls.OTHER

    @classmethod
    def development_tags(cls) -> list["NoteTag"]:
        return [cls.DATABASE, cls.ALGORITHM, cls.FRONTEND, cls.BACKEND, cls.API, cls.WEB, cls.MOBILE]

    @classmethod
    def learning_tags(cls) -> list["NoteTag"]:
        return [cls.TUTORIAL, cls.NOTES, cls.SNIPPET]
