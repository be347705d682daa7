"""Shared fixtures: SQLAlchemy and pydantic models plus ready-made builders."""

import io
from datetime import date, datetime, time
from decimal import Decimal

import pytest
from pydantic import BaseModel, Field, SecretStr
from sqlalchemy import TIMESTAMP, Column, ForeignKey, Numeric, String, Table, Text, create_engine, select
from sqlalchemy.orm import DeclarativeBase, Mapped, Session, mapped_column, relationship

from semantic_forms.builder import SemanticFormBuilder
from semantic_forms.config import SemanticFormConfig
from semantic_forms.reflection.base import Reflection
from semantic_forms.logs import enable_logging, setup_logging


# SQLAlchemy models ---------------------------------------------------------


class Base(DeclarativeBase):
    pass


post_tags = Table(
    "post_tags",
    Base.metadata,
    Column("post_id", ForeignKey("posts.id"), primary_key=True),
    Column("tag_id", ForeignKey("tags.id"), primary_key=True),
)


class Author(Base):
    __tablename__ = "authors"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(50))


class Tag(Base):
    __tablename__ = "tags"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(30))


class Task(Base):
    __tablename__ = "tasks"

    id: Mapped[int] = mapped_column(primary_key=True)
    title: Mapped[str] = mapped_column(String(100))
    post_id: Mapped[int] = mapped_column(ForeignKey("posts.id"))
    post: Mapped["Post"] = relationship(back_populates="tasks")


class Post(Base):
    __tablename__ = "posts"

    id: Mapped[int] = mapped_column(primary_key=True)
    title: Mapped[str] = mapped_column(String(100))
    subtitle: Mapped[str | None] = mapped_column(String(100), info={"label": "Sub heading"})
    body: Mapped[str | None] = mapped_column(Text)
    time_zone: Mapped[str | None] = mapped_column(String(50))
    password: Mapped[str | None] = mapped_column(String(50))
    views: Mapped[int] = mapped_column(default=0)
    rating: Mapped[float | None]
    price: Mapped[Decimal | None] = mapped_column(Numeric(10, 2))
    published: Mapped[bool] = mapped_column(default=False)
    published_on: Mapped[date | None]
    published_at: Mapped[datetime | None]
    starts_at: Mapped[time | None]
    created_at: Mapped[datetime | None] = mapped_column(TIMESTAMP)

    author_id: Mapped[int] = mapped_column(ForeignKey("authors.id"))
    author: Mapped[Author] = relationship()
    tags: Mapped[list[Tag]] = relationship(secondary=post_tags)
    tasks: Mapped[list[Task]] = relationship(back_populates="post")

    @property
    def cover(self):
        return io.BytesIO(b"\x89PNG")


# Pydantic models -----------------------------------------------------------


class Category(BaseModel):
    id: int | None = None
    name: str


class Article(BaseModel):
    id: int | None = None
    title: str
    subtitle: str | None = Field(default=None, title="Sub heading")
    body: str | None = Field(default=None, json_schema_extra={"column_type": "text"})
    secret: SecretStr | None = None
    rating: float = 0.0
    published_on: date | None = None
    category_id: int | None = None
    category: Category | None = None
    categories: list[Category] = []


CATEGORIES = [Category(id=1, name="News"), Category(id=2, name="Sport")]


# Fixtures ------------------------------------------------------------------


@pytest.fixture
def session():
    """In-memory SQLite session seeded with two authors and a tag."""
    engine = create_engine("sqlite://")
    Base.metadata.create_all(engine)
    with Session(engine) as session:
        session.add_all([Author(name="Alice"), Author(name="Bob"), Tag(name="python")])
        session.commit()
        yield session
    engine.dispose()


@pytest.fixture
def authors(session):
    return list(session.scalars(select(Author).order_by(Author.id)))


@pytest.fixture
def config():
    return SemanticFormConfig()


@pytest.fixture
def reflection(session):
    return Reflection.for_sqlalchemy(session)


@pytest.fixture
def post(authors):
    """New post, not added to the session."""
    alice = authors[0]
    return Post(title="Hello", body="First post", author=alice, author_id=alice.id)


@pytest.fixture
def builder(post, config, reflection):
    return SemanticFormBuilder("post", post, config=config, reflection=reflection)


@pytest.fixture
def pydantic_reflection():
    return Reflection.for_pydantic(repository=lambda model: CATEGORIES, models=[Category])


@pytest.fixture(autouse=True)
def reset_logging():
    """Leave the semantic-forms logger the way each test found it."""
    yield
    setup_logging(enabled=False)
    enable_logging()
