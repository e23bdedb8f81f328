from datetime import UTC, datetime

from sqlalchemy import DateTime
from sqlalchemy.orm import Mapped, MappedAsDataclass, mapped_column
from sqlalchemy.types import TypeDecorator


class UTCDateTime(TypeDecorator):
    """Timezone-aware ``DateTime`` that always loads as UTC.

    PostgreSQL keeps the offset; SQLite stores the text without it and hands
    back naive values. Values are converted to UTC on the way in and naive
    values read back are marked as UTC, so both backends return aware
    datetimes.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is not None and value.tzinfo is not None:
            return value.astimezone(UTC)
        return value

    def process_result_value(self, value, dialect):
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value


class TimestampMixin(MappedAsDataclass):
    """Mixin for adding created_at and updated_at timestamp columns.

    Both columns are timezone aware and default to the current UTC time.
    They are excluded from the dataclass ``__init__`` so callers cannot set
    them when building an entity. ``updated_at`` is refreshed by FastCRUD on
    every update issued through a repository.

    Attributes:
        created_at: Timestamp when the record was created.
        updated_at: Timestamp when the record was last updated.
    """

    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        default_factory=lambda: datetime.now(UTC),
        nullable=False,
        init=False,
    )

    updated_at: Mapped[datetime | None] = mapped_column(
        UTCDateTime(),
        default_factory=lambda: datetime.now(UTC),
        nullable=True,
        init=False,
    )
