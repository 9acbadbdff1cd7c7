"""SQLAlchemy metadata for the catalog entity store."""

from __future__ import annotations

from sqlalchemy import JSON, Column, Integer, MetaData, String, Table, UniqueConstraint

metadata = MetaData()

catalog_entities_table = Table(
    "catalog_entities",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("kind", String(32), nullable=False),
    Column("key", String(256), nullable=False),
    Column("version", Integer, nullable=False),
    Column("payload", JSON, nullable=False),
    UniqueConstraint("kind", "key", name="uq_catalog_entities_kind_key"),
)
