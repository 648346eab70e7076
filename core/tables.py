"""
SQLAlchemy Core table definitions.

List-valued review columns (traits, weaknesses, suggestions, used quotes) are
TEXT holding JSON arrays; see core/queries/reviews.py for the codec.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    TIMESTAMP,
    false,
    func,
)

metadata = MetaData()


users = Table(
    "users",
    metadata,
    Column("user_id", Integer, primary_key=True, autoincrement=True),
    # Subject claim of the session token issued by the external auth provider
    Column("open_id", String(64), nullable=False, unique=True),
    Column("name", Text),
    Column("email", String(320)),
    Column("role", String(16), nullable=False, server_default="user"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default=func.now()
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default=func.now()
    ),
    Column(
        "last_signed_in",
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default=func.now(),
    ),
    CheckConstraint("role IN ('user', 'admin')", name="ck_users_valid_role"),
)


reviews = Table(
    "reviews",
    metadata,
    Column("review_id", Integer, primary_key=True, autoincrement=True),
    Column(
        "user_id",
        Integer,
        ForeignKey("users.user_id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("student_name", String(100), nullable=False),
    Column("positive_traits", Text, nullable=False),  # JSON array
    Column("weaknesses", Text, nullable=False),  # JSON array
    Column("impressive_points", Text, nullable=False, server_default=""),
    Column("suggestions", Text, nullable=False),  # JSON array
    Column("generated_review", Text, nullable=False),
    Column("used_quotes", Text, nullable=False),  # JSON array of quote dicts
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default=func.now()
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default=func.now()
    ),
    Index("idx_reviews_user_id", "user_id"),
)


quotes = Table(
    "quotes",
    metadata,
    Column("quote_id", Integer, primary_key=True, autoincrement=True),
    Column("text", Text, nullable=False),
    Column("author", String(100), nullable=False),
    Column("category", String(50)),  # e.g. 勇氣, 堅持, 學習
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default=func.now()
    ),
)


def _option_table(name: str, value_column: str, value_length: int) -> Table:
    """Option catalogs share one shape: user_id NULL marks a global default."""
    return Table(
        name,
        metadata,
        Column("option_id", Integer, primary_key=True, autoincrement=True),
        Column(
            "user_id",
            Integer,
            ForeignKey("users.user_id", ondelete="CASCADE"),
            nullable=True,
        ),
        Column(value_column, String(value_length), nullable=False),
        Column("is_default", Boolean, nullable=False, server_default=false()),
        Column(
            "created_at",
            TIMESTAMP(timezone=True),
            nullable=False,
            server_default=func.now(),
        ),
        Index(f"idx_{name}_user_id", "user_id"),
    )


positive_trait_options = _option_table("positive_trait_options", "trait", 100)
weakness_options = _option_table("weakness_options", "weakness", 100)
suggestion_options = _option_table("suggestion_options", "suggestion", 200)
