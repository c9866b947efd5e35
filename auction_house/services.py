# auction_house/services.py
"""Listing lifecycle and account directory.

All state transitions of a listing go through this module: creation, bid
acceptance, sale and deletion. Bids and sales are read-evaluate-write units
guarded by the listing's version counter; a lost race is retried a bounded
number of times before `Conflict` reaches the caller.
"""
import os
import bcrypt
from sqlalchemy.orm import Session
from typing import List, Tuple
from decimal import Decimal
from . import bidding, crud, errors
from .models import Account, Bid, Listing
from .utils import logger, parse_money, retry

BID_RETRY_TRIES = int(os.getenv("BID_RETRY_TRIES", 3))
BID_RETRY_DELAY = float(os.getenv("BID_RETRY_DELAY", 0.05))
BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", 12))
BCRYPT_MAX_BYTES = 72


def _require(*values):
    for value in values:
        if value is None or (isinstance(value, str) and not value.strip()):
            raise errors.InvalidInput()

def _positive_money(value, field: str) -> Decimal:
    amount = parse_money(value)
    if amount is None or amount <= 0:
        raise errors.InvalidInput(f"{field} must be a positive amount with at most two decimal places")
    return amount

def _owned_listing(db: Session, owner: str, listing_id: str) -> Listing:
    if not crud.account_exists(db, owner):
        raise errors.AccountNotFound()
    listing = crud.get_listing(db, listing_id)
    if listing is None or listing.owner_username != owner:
        raise errors.ListingNotFound("Listing not found for this seller")
    return listing


# --- accounts ---

def register_account(db: Session, username: str, password: str) -> Account:
    _require(username, password)
    if len(password.encode("utf-8")) > BCRYPT_MAX_BYTES:
        raise errors.InvalidInput(f"Password must be at most {BCRYPT_MAX_BYTES} bytes")
    if crud.account_exists(db, username):
        raise errors.UsernameTaken()
    hashed = bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=BCRYPT_ROUNDS))
    try:
        account = crud.create_account(db, username, hashed.decode("utf-8"))
    except errors.Conflict as e:
        raise errors.UsernameTaken() from e
    logger.info("Registered account %s", username)
    return account

def verify_credentials(db: Session, username: str, password: str) -> Account:
    _require(username, password)
    account = crud.get_account(db, username)
    if account is None:
        raise errors.InvalidCredentials()
    if not bcrypt.checkpw(password.encode("utf-8"), account.password_hash.encode("utf-8")):
        raise errors.InvalidCredentials()
    return account


# --- listings ---

def create_listing(db: Session, owner: str, title: str, description: str,
                   min_bid_value, image: str) -> Listing:
    _require(owner, title, description, min_bid_value, image)
    min_bid = _positive_money(min_bid_value, "min_bid_value")
    if not crud.account_exists(db, owner):
        raise errors.AccountNotFound()
    listing = Listing(
        owner_username=owner,
        title=title,
        description=description,
        image=image,
        min_bid_value=min_bid,
        sold=False,
    )
    crud.save_listing(db, listing)
    logger.info("Created listing %s for %s (min %s)", listing.listing_id, owner, min_bid)
    return listing

def get_listing(db: Session, listing_id: str) -> Listing:
    listing = crud.get_listing(db, listing_id)
    if listing is None:
        raise errors.ListingNotFound()
    return listing

def list_all(db: Session) -> List[Listing]:
    return crud.list_listings(db)

def list_by_owner(db: Session, owner: str) -> List[Listing]:
    if not crud.account_exists(db, owner):
        raise errors.AccountNotFound()
    return crud.list_listings_by_owner(db, owner)

def delete_listing(db: Session, owner: str, listing_id: str) -> None:
    _require(owner, listing_id)
    listing = _owned_listing(db, owner, listing_id)
    crud.delete_listing(db, listing)
    logger.info("Deleted listing %s of %s", listing_id, owner)

@retry(errors.Conflict, tries=BID_RETRY_TRIES, delay=BID_RETRY_DELAY)
def place_bid(db: Session, listing_id: str, bidder: str, value) -> Bid:
    _require(listing_id, bidder)
    listing = crud.get_listing(db, listing_id)
    if listing is None:
        raise errors.ListingNotFound()
    if not crud.account_exists(db, bidder):
        raise errors.AccountNotFound()
    # owners are refused whatever the amount or listing state
    if bidder == listing.owner_username:
        raise errors.SelfBid()
    if listing.sold:
        raise errors.AlreadySold()
    amount = _positive_money(value, "bid_value")
    decision = bidding.evaluate_bid(listing, bidder, amount)
    if isinstance(decision, bidding.Reject):
        logger.warning("Rejected bid %s by %s on %s: %s", amount, bidder, listing_id, decision.kind)
        raise decision.as_error()
    bid = Bid(username=bidder, bid_value=amount, position=len(listing.bids))
    listing.bids.append(bid)
    # touching the listing row bumps its version, serialising bids per listing
    listing.highest_bid = amount
    crud.save_listing(db, listing)
    logger.info("Accepted bid %s by %s on %s", amount, bidder, listing_id)
    return bid

@retry(errors.Conflict, tries=BID_RETRY_TRIES, delay=BID_RETRY_DELAY)
def sell_listing(db: Session, owner: str, listing_id: str) -> Tuple[str, Decimal]:
    _require(owner, listing_id)
    listing = _owned_listing(db, owner, listing_id)
    if listing.sold:
        raise errors.AlreadySold()
    best = bidding.winning_bid(listing)
    if best is None:
        raise errors.NoBids()
    listing.sold = True
    listing.winner_username = best.username
    listing.winning_price = best.bid_value
    crud.save_listing(db, listing)
    logger.info("Sold listing %s to %s for %s", listing_id, best.username, best.bid_value)
    return listing.winner_username, listing.winning_price

def bought_by(db: Session, username: str) -> List[Listing]:
    return crud.list_listings_won_by(db, username)

def sold_by(db: Session, owner: str) -> List[Listing]:
    if not crud.account_exists(db, owner):
        raise errors.AccountNotFound()
    return crud.list_listings_by_owner(db, owner, sold=True)
