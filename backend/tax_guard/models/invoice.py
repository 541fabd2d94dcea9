"""SQLAlchemy model definitions for issued invoices."""

from __future__ import annotations

from sqlalchemy import Boolean, Column, Index, Integer, String, false

from ..database import Base


class Invoice(Base):
    """An invoice issued to a client and counted towards yearly revenue."""

    __tablename__ = "invoices"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    date = Column(String, nullable=False)
    amount = Column(Integer, nullable=False)
    client_name = Column(String, nullable=False)
    is_paid = Column(Boolean, nullable=False, default=False, server_default=false())

    def __repr__(self) -> str:
        return f"<Invoice id={self.id} date={self.date!r} amount={self.amount}>"


Index("invoices_date_idx", Invoice.date)
