# auction_house/models.py
"""SQLAlchemy ORM models for persisted entities.

Accounts own listings; a listing exclusively owns its ordered bid sequence.
`Listing.version_id` is the optimistic concurrency counter: any UPDATE of a
listing row whose version moved underneath the session raises StaleDataError.
"""
import uuid
from sqlalchemy import (
    Column, Integer, Text, Numeric, Boolean, TIMESTAMP, ForeignKey,
    UniqueConstraint, CheckConstraint, func, Index,
)
from sqlalchemy.orm import relationship
from .db import Base

MONEY = Numeric(12, 2)


def new_listing_id():
    return uuid.uuid4().hex


class Account(Base):
    __tablename__ = "accounts"
    id = Column(Integer, primary_key=True, index=True)
    username = Column(Text, nullable=False, unique=True, index=True)
    password_hash = Column(Text, nullable=False)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())

    listings = relationship("Listing", back_populates="owner", order_by="Listing.id")


class Listing(Base):
    __tablename__ = "listings"
    __table_args__ = (
        CheckConstraint("min_bid_value > 0", name="ck_listings_min_bid_positive"),
    )
    id = Column(Integer, primary_key=True, index=True)
    listing_id = Column(Text, nullable=False, unique=True, index=True, default=new_listing_id)
    owner_username = Column(Text, ForeignKey("accounts.username", ondelete="CASCADE"), nullable=False)
    title = Column(Text, nullable=False)
    description = Column(Text, nullable=False)
    image = Column(Text, nullable=False)
    min_bid_value = Column(MONEY, nullable=False)
    highest_bid = Column(MONEY)
    sold = Column(Boolean, nullable=False, default=False)
    winner_username = Column(Text)
    winning_price = Column(MONEY)
    version_id = Column(Integer, nullable=False)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now())

    owner = relationship("Account", back_populates="listings")
    bids = relationship(
        "Bid",
        back_populates="listing",
        order_by="Bid.position",
        cascade="all, delete-orphan",
    )

    __mapper_args__ = {"version_id_col": version_id}

    def __repr__(self):
        return f"<Listing {self.listing_id} owner={self.owner_username!r} sold={self.sold}>"


class Bid(Base):
    __tablename__ = "bids"
    __table_args__ = (
        UniqueConstraint("listing_pk", "position", name="uq_bids_listing_position"),
    )
    id = Column(Integer, primary_key=True, index=True)
    listing_pk = Column(Integer, ForeignKey("listings.id", ondelete="CASCADE"), nullable=False)
    position = Column(Integer, nullable=False)
    username = Column(Text, nullable=False)
    bid_value = Column(MONEY, nullable=False)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())

    listing = relationship("Listing", back_populates="bids")

Index("idx_listings_owner", Listing.owner_username)
Index("idx_listings_winner", Listing.winner_username)
