# auction_house/bidding.py
"""Bid admission rules.

`evaluate_bid` looks only at the listing it is given and never touches the
session, so the same inputs always produce the same decision. Applying an
accepted bid is the lifecycle manager's job.
"""
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional, Union
from . import errors


@dataclass(frozen=True)
class Accept:
    pass


@dataclass(frozen=True)
class Reject:
    kind: str
    floor: Optional[Decimal] = None
    first_bid: bool = False

    def as_error(self) -> errors.AuctionError:
        if self.kind == errors.SelfBid.kind:
            return errors.SelfBid()
        return errors.BidTooLow(self.floor, first_bid=self.first_bid)


Decision = Union[Accept, Reject]


def current_floor(listing):
    """Return (floor, first_bid) for the next bid on `listing`."""
    if not listing.bids:
        return listing.min_bid_value, True
    return max(bid.bid_value for bid in listing.bids), False


def evaluate_bid(listing, bidder: str, value: Decimal) -> Decision:
    if bidder == listing.owner_username:
        return Reject(errors.SelfBid.kind)
    floor, first_bid = current_floor(listing)
    # the opening bid may equal the minimum, later bids must beat the leader
    admitted = value >= floor if first_bid else value > floor
    if not admitted:
        return Reject(errors.BidTooLow.kind, floor=floor, first_bid=first_bid)
    return Accept()


def winning_bid(listing):
    """Highest bid on `listing`, earliest first on equal values; None if no bids."""
    best = None
    for bid in listing.bids:
        if best is None or bid.bid_value > best.bid_value:
            best = bid
    return best
