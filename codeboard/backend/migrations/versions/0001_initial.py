"""Create notes, snippets and note tags.

Revision ID: 0001
Revises:
Create Date: 2026-10-16
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

revision: str = "0001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "code_notes",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("description", sa.String(length=1000), nullable=True),
        sa.Column("content", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_code_notes_title", "code_notes", ["title"])
    op.create_index("ix_code_notes_created_at", "code_notes", ["created_at"])

    op.create_table(
        "code_snippets",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("language", sa.String(length=50), nullable=True),
        sa.Column("content", sa.Text(), nullable=True),
        sa.Column("image_url", sa.String(length=1000), nullable=True),
        sa.Column("note_id", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["note_id"], ["code_notes.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_code_snippets_name", "code_snippets", ["name"])
    op.create_index("ix_code_snippets_language", "code_snippets", ["language"])
    op.create_index("ix_code_snippets_note_id", "code_snippets", ["note_id"])
    op.create_index("ix_code_snippets_created_at", "code_snippets", ["created_at"])

    op.create_table(
        "note_tags",
        sa.Column("note_id", sa.Integer(), nullable=False),
        sa.Column("tag", sa.String(length=32), nullable=False),
        sa.ForeignKeyConstraint(["note_id"], ["code_notes.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("note_id", "tag"),
    )
    op.create_index("ix_note_tags_tag", "note_tags", ["tag"])


def downgrade() -> None:
    op.drop_index("ix_note_tags_tag", table_name="note_tags")
    op.drop_table("note_tags")
    op.drop_index("ix_code_snippets_created_at", table_name="code_snippets")
    op.drop_index("ix_code_snippets_note_id", table_name="code_snippets")
    op.drop_index("ix_code_snippets_language", table_name="code_snippets")
    op.drop_index("ix_code_snippets_name", table_name="code_snippets")
    op.drop_table("code_snippets")
    op.drop_index("ix_code_notes_created_at", table_name="code_notes")
    op.drop_index("ix_code_notes_title", table_name="code_notes")
    op.drop_table("code_notes")
