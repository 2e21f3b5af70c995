"""Users, books, likes and direct messages."""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision = "0001_init"
down_revision = None
branch_labels = None
depends_on = None

_uuid = postgresql.UUID(as_uuid=True)
_ts = postgresql.TIMESTAMP(timezone=True)


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", _uuid, primary_key=True),
        sa.Column("first_name", sa.String(100), nullable=False),
        sa.Column("last_name", sa.String(100), nullable=False),
        sa.Column("username", sa.String(100), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("image", sa.String(1024), nullable=True),
        sa.Column("created_at", _ts, server_default=sa.text("now()"), nullable=False),
        sa.UniqueConstraint("email", name="uq_users_email"),
    )

    op.create_table(
        "books",
        sa.Column("id", _uuid, primary_key=True, server_default=sa.text("gen_random_uuid()")),
        sa.Column("isbn", sa.String(13), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("author", sa.String(255), nullable=False),
        sa.Column("genre", sa.String(100), nullable=False),
        sa.Column("review", sa.Text, nullable=False),
        sa.Column(
            "creator_id",
            _uuid,
            sa.ForeignKey("users.id", ondelete="CASCADE", name="fk_books_creator_id_users"),
            nullable=False,
        ),
        sa.Column("created_at", _ts, server_default=sa.text("now()"), nullable=False),
    )
    op.create_index("ix_books_creator", "books", ["creator_id", "created_at"])

    op.create_table(
        "book_likes",
        sa.Column("id", _uuid, primary_key=True, server_default=sa.text("gen_random_uuid()")),
        sa.Column(
            "book_id",
            _uuid,
            sa.ForeignKey("books.id", ondelete="CASCADE", name="fk_book_likes_book_id_books"),
            nullable=False,
        ),
        sa.Column("user_id", _uuid, nullable=False),
        sa.Column("created_at", _ts, server_default=sa.text("now()"), nullable=False),
        sa.UniqueConstraint("book_id", "user_id", name="uq_book_like_member"),
    )

    op.create_table(
        "messages",
        sa.Column("id", _uuid, primary_key=True, server_default=sa.text("gen_random_uuid()")),
        sa.Column("sender_id", _uuid, nullable=False),
        sa.Column("receiver_id", _uuid, nullable=False),
        sa.Column("text", sa.Text, nullable=False),
        sa.Column("read", sa.Boolean, server_default=sa.false(), nullable=False),
        sa.Column("read_at", _ts, nullable=True),
        sa.Column("created_at", _ts, server_default=sa.text("now()"), nullable=False),
    )
    op.create_index(
        "ix_messages_pair_timeline", "messages", ["sender_id", "receiver_id", "created_at"],
    )
    op.create_index(
        "ix_messages_receiver_unread", "messages", ["receiver_id", "read", "sender_id"],
    )


def downgrade() -> None:
    op.drop_index("ix_messages_receiver_unread", table_name="messages")
    op.drop_index("ix_messages_pair_timeline", table_name="messages")
    op.drop_table("messages")
    op.drop_table("book_likes")
    op.drop_index("ix_books_creator", table_name="books")
    op.drop_table("books")
    op.drop_table("users")
