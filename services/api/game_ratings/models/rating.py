"""Ratings table.

One row per (game_id, user_id). The table name comes from configuration,
so the table is built at runtime rather than declared on a mapped class.
"""

from sqlalchemy import Column, Integer, MetaData, String, Table


def build_ratings_table(name: str, metadata: MetaData | None = None) -> Table:
    """Create the ratings Table bound to `metadata` under `name`.

    The composite primary key is the upsert conflict target.
    """
    return Table(
        name,
        metadata if metadata is not None else MetaData(),
        Column("game_id", String(200), primary_key=True),
        Column("user_id", String(200), primary_key=True),
        Column("rating", Integer, nullable=False),
    )
