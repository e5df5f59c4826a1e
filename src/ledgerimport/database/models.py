"""SQLAlchemy models for ledgerimport database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    SmallInteger,
    String,
    Text,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
    Boolean,
    Index,
    UniqueConstraint,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


def _utcnow() -> datetime:
    return datetime.now(UTC)


class Account(Base):
    """Bank account model."""

    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True)
    user_id = Column(String(64), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    bank_name = Column(String(100), nullable=False)
    currency = Column(String(3), nullable=False, default="ZAR")
    current_balance = Column(Numeric(15, 2), nullable=False, default=0)
    created_at = Column(DateTime, default=_utcnow, nullable=False)

    __table_args__ = (UniqueConstraint("user_id", "name", name="uq_account_user_name"),)

    # Relationships
    transactions = relationship("Transaction", back_populates="account")
    statement_imports = relationship("StatementImport", back_populates="account")


class Category(Base):
    """Category model."""

    __tablename__ = "categories"

    id = Column(Integer, primary_key=True)
    user_id = Column(String(64), nullable=False, index=True)
    name = Column(String(50), nullable=False)
    category_type = Column(String(10), nullable=False, default="expense")
    created_at = Column(DateTime, default=_utcnow, nullable=False)

    # Relationships
    transactions = relationship("Transaction", back_populates="category")
    rules = relationship("CategorizationRule", back_populates="category")


class StatementImport(Base):
    """Statement import record model."""

    __tablename__ = "statement_imports"

    id = Column(Integer, primary_key=True)
    user_id = Column(String(64), nullable=False, index=True)
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False)
    filename = Column(String(255), nullable=True)
    file_type = Column(String(10), nullable=True)
    statement_start_date = Column(Date, nullable=True)
    statement_end_date = Column(Date, nullable=True)
    opening_balance = Column(Numeric(15, 2), nullable=True)
    closing_balance = Column(Numeric(15, 2), nullable=True)
    transactions_imported = Column(Integer, nullable=False, default=0)
    transactions_duplicates = Column(Integer, nullable=False, default=0)
    transactions_failed = Column(Integer, nullable=False, default=0)
    status = Column(String(12), nullable=False, default="processing")
    error_message = Column(Text, nullable=True)
    processing_started_at = Column(DateTime, nullable=True)
    imported_at = Column(DateTime, default=_utcnow, nullable=False)

    # Relationships
    account = relationship("Account", back_populates="statement_imports")
    transactions = relationship("Transaction", back_populates="statement_import")


class Transaction(Base):
    """Ledger transaction model. ``amount`` is unsigned."""

    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True)
    user_id = Column(String(64), nullable=False)
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=True)
    amount = Column(Numeric(15, 2), nullable=False)
    transaction_type = Column(String(6), nullable=False)
    transaction_date = Column(Date, nullable=False)
    posted_date = Column(Date, nullable=True)
    description = Column(String(500), nullable=False)
    merchant_original = Column(String(200), nullable=True)
    merchant_normalized = Column(String(200), nullable=True)
    external_id = Column(String(100), nullable=True)
    source = Column(String(10), nullable=False, default="manual")
    is_reviewed = Column(Boolean, nullable=False, default=False)
    categorization_confidence = Column(Numeric(3, 2), nullable=True)
    categorization_method = Column(String(20), nullable=True)
    import_id = Column(Integer, ForeignKey("statement_imports.id"), nullable=True)
    created_at = Column(DateTime, default=_utcnow, nullable=False)

    # Duplicate lookups go by (account, date, amount)
    __table_args__ = (
        Index("ix_transactions_account_date_amount", "account_id", "transaction_date", "amount"),
        Index("ix_transactions_import", "import_id"),
    )

    # Relationships
    account = relationship("Account", back_populates="transactions")
    category = relationship("Category", back_populates="transactions")
    statement_import = relationship("StatementImport", back_populates="transactions")


class MerchantMapping(Base):
    """Merchant name mapping model. ``user_id`` is NULL for global mappings."""

    __tablename__ = "merchant_mappings"

    id = Column(Integer, primary_key=True)
    user_id = Column(String(64), nullable=True, index=True)
    original_name = Column(String(200), nullable=False, index=True)
    normalized_name = Column(String(200), nullable=False)
    is_global = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, default=_utcnow, nullable=False)


class CategorizationRule(Base):
    """Categorization rule model.

    ``match_kind`` is one of merchant_exact, merchant_pattern or
    description_pattern and ``match_value`` holds its string.
    """

    __tablename__ = "categorization_rules"

    id = Column(Integer, primary_key=True)
    user_id = Column(String(64), nullable=False, index=True)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=False)
    match_kind = Column(String(20), nullable=False)
    match_value = Column(String(200), nullable=False)
    amount_min = Column(Numeric(15, 2), nullable=True)
    amount_max = Column(Numeric(15, 2), nullable=True)
    priority = Column(SmallInteger, nullable=False, default=50)
    confidence = Column(Numeric(3, 2), nullable=False, default=1)
    times_applied = Column(Integer, nullable=False, default=0)
    times_corrected = Column(Integer, nullable=False, default=0)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, default=_utcnow, nullable=False)

    # Relationships
    category = relationship("Category", back_populates="rules")


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
