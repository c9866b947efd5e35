# auction_house/crud.py
"""Store operations for accounts, listings and their bids.

Reads and writes go through `store_guard`, which rolls the session back on
any database failure and translates it into a typed error: a lost optimistic
race becomes `Conflict`, an unreachable or timed-out database becomes
`StoreUnavailable`.
"""
from contextlib import contextmanager
from typing import List, Optional
from sqlalchemy.exc import IntegrityError, OperationalError, TimeoutError as PoolTimeout
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError
from . import errors
from .models import Account, Listing
from .utils import logger


@contextmanager
def store_guard(db: Session):
    try:
        yield
    except (StaleDataError, IntegrityError) as e:
        db.rollback()
        logger.warning("Write conflict: %s", e)
        raise errors.Conflict() from e
    except (OperationalError, PoolTimeout) as e:
        db.rollback()
        logger.exception("Store unavailable: %s", e)
        raise errors.StoreUnavailable() from e


def get_account(db: Session, username: str) -> Optional[Account]:
    with store_guard(db):
        return db.query(Account).filter(Account.username == username).first()

def account_exists(db: Session, username: str) -> bool:
    return get_account(db, username) is not None

def create_account(db: Session, username: str, password_hash: str) -> Account:
    obj = Account(username=username, password_hash=password_hash)
    with store_guard(db):
        db.add(obj)
        db.commit()
        db.refresh(obj)
    return obj


def get_listing(db: Session, listing_id: str) -> Optional[Listing]:
    with store_guard(db):
        return db.query(Listing).filter(Listing.listing_id == listing_id).first()

def save_listing(db: Session, listing: Listing) -> Listing:
    """Insert or fully replace `listing` and commit.

    Raises Conflict when another writer bumped the listing version first.
    """
    with store_guard(db):
        db.add(listing)
        db.commit()
        db.refresh(listing)
    return listing

def delete_listing(db: Session, listing: Listing) -> None:
    with store_guard(db):
        db.delete(listing)
        db.commit()

def list_listings(db: Session) -> List[Listing]:
    with store_guard(db):
        return db.query(Listing).order_by(Listing.id).all()

def list_listings_by_owner(db: Session, username: str, sold: Optional[bool] = None) -> List[Listing]:
    with store_guard(db):
        q = db.query(Listing).filter(Listing.owner_username == username)
        if sold is not None:
            q = q.filter(Listing.sold == sold)
        return q.order_by(Listing.id).all()

def list_listings_won_by(db: Session, username: str) -> List[Listing]:
    with store_guard(db):
        return (
            db.query(Listing)
            .filter(Listing.winner_username == username)
            .order_by(Listing.id)
            .all()
        )
