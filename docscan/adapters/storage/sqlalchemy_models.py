from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, Integer, LargeBinary, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


class DocumentRow(Base):
    __tablename__ = 'documents'
    __table_args__ = {'sqlite_autoincrement': True}

    # insertion order, breaks ties between equal timestamps
    seq: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    id: Mapped[str] = mapped_column(String(64), unique=True, nullable=False, index=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    # naive UTC
    date_created: Mapped[datetime] = mapped_column(DateTime, nullable=False, index=True)
    content: Mapped[bytes] = mapped_column(LargeBinary, nullable=False)
