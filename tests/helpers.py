"""Test tables and helpers for asserting on generated SQL."""

from typing import Any

from sqlalchemy import Column, DateTime, Integer, MetaData, Numeric, String, Table
from sqlalchemy.dialects import postgresql
from sqlalchemy.orm import declarative_base

from querykit.core.relation import Relation

metadata = MetaData()

widgets = Table(
    "widgets",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("name", String(100)),
    Column("email", String(255)),
    Column("phone", String(50)),
    Column("price", Integer),
    Column("date", DateTime),
    Column("created_at", DateTime),
)

Base = declarative_base()


class Order(Base):
    """Declarative model used as a relation source."""

    __tablename__ = "orders"

    id = Column(Integer, primary_key=True)
    status = Column(String(50))
    customer_name = Column(String(100))
    total = Column(Numeric(10, 2))
    created_at = Column(DateTime)


def compile_sql(relation: Relation) -> tuple[str, dict[str, Any]]:
    """Compile a relation for PostgreSQL and return (sql, bound params)."""
    compiled = relation.to_select().compile(dialect=postgresql.dialect())
    return str(compiled), compiled.params


def render(clause: Any) -> str:
    """Render a single predicate for PostgreSQL."""
    return str(clause.compile(dialect=postgresql.dialect()))
