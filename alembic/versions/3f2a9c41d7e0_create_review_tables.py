"""create review tables

Revision ID: 3f2a9c41d7e0
Revises:
Create Date: 2026-10-18 10:12:44.118203

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "3f2a9c41d7e0"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamp(name: str) -> sa.Column:
    return sa.Column(
        name,
        sa.TIMESTAMP(timezone=True),
        nullable=False,
        server_default=sa.func.now(),
    )


def _create_option_table(name: str, value_column: str, value_length: int) -> None:
    op.create_table(
        name,
        sa.Column("option_id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "user_id",
            sa.Integer(),
            sa.ForeignKey("users.user_id", ondelete="CASCADE"),
            nullable=True,
        ),
        sa.Column(value_column, sa.String(value_length), nullable=False),
        sa.Column(
            "is_default", sa.Boolean(), nullable=False, server_default=sa.false()
        ),
        _timestamp("created_at"),
    )
    op.create_index(f"idx_{name}_user_id", name, ["user_id"])


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("user_id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("open_id", sa.String(64), nullable=False, unique=True),
        sa.Column("name", sa.Text(), nullable=True),
        sa.Column("email", sa.String(320), nullable=True),
        sa.Column("role", sa.String(16), nullable=False, server_default="user"),
        _timestamp("created_at"),
        _timestamp("updated_at"),
        _timestamp("last_signed_in"),
        sa.CheckConstraint("role IN ('user', 'admin')", name="ck_users_valid_role"),
    )

    op.create_table(
        "reviews",
        sa.Column("review_id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "user_id",
            sa.Integer(),
            sa.ForeignKey("users.user_id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("student_name", sa.String(100), nullable=False),
        sa.Column("positive_traits", sa.Text(), nullable=False),
        sa.Column("weaknesses", sa.Text(), nullable=False),
        sa.Column("impressive_points", sa.Text(), nullable=False, server_default=""),
        sa.Column("suggestions", sa.Text(), nullable=False),
        sa.Column("generated_review", sa.Text(), nullable=False),
        sa.Column("used_quotes", sa.Text(), nullable=False),
        _timestamp("created_at"),
        _timestamp("updated_at"),
    )
    op.create_index("idx_reviews_user_id", "reviews", ["user_id"])

    op.create_table(
        "quotes",
        sa.Column("quote_id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("text", sa.Text(), nullable=False),
        sa.Column("author", sa.String(100), nullable=False),
        sa.Column("category", sa.String(50), nullable=True),
        _timestamp("created_at"),
    )

    _create_option_table("positive_trait_options", "trait", 100)
    _create_option_table("weakness_options", "weakness", 100)
    _create_option_table("suggestion_options", "suggestion", 200)


def downgrade() -> None:
    for name in ("suggestion_options", "weakness_options", "positive_trait_options"):
        op.drop_index(f"idx_{name}_user_id", table_name=name)
        op.drop_table(name)
    op.drop_table("quotes")
    op.drop_index("idx_reviews_user_id", table_name="reviews")
    op.drop_table("reviews")
    op.drop_table("users")
