# tests/test_bidding.py
from decimal import Decimal
import pytest
from auction_house import errors
from auction_house.bidding import Accept, Reject, evaluate_bid, winning_bid
from auction_house.models import Bid, Listing


def make_listing(min_bid="50", bids=()):
    listing = Listing(owner_username="alice", min_bid_value=Decimal(min_bid))
    for position, (username, value) in enumerate(bids):
        listing.bids.append(Bid(username=username, bid_value=Decimal(value), position=position))
    return listing


def test_owner_cannot_bid():
    listing = make_listing()
    assert evaluate_bid(listing, "alice", Decimal("1000")) == Reject(errors.SelfBid.kind)


def test_self_bid_checked_before_floor():
    listing = make_listing()
    assert evaluate_bid(listing, "alice", Decimal("1")).kind == "SelfBid"


def test_first_bid_may_equal_minimum():
    listing = make_listing(min_bid="50")
    assert evaluate_bid(listing, "bob", Decimal("50")) == Accept()


def test_first_bid_below_minimum_rejected():
    decision = evaluate_bid(make_listing(min_bid="50"), "bob", Decimal("49"))
    assert decision == Reject("BidTooLow", floor=Decimal("50"), first_bid=True)
    err = decision.as_error()
    assert isinstance(err, errors.BidTooLow)
    assert err.floor == Decimal("50")


def test_later_bid_must_beat_highest():
    listing = make_listing(bids=[("bob", "50")])
    decision = evaluate_bid(listing, "carol", Decimal("50"))
    assert decision == Reject("BidTooLow", floor=Decimal("50"))
    assert evaluate_bid(listing, "carol", Decimal("50.01")) == Accept()


def test_floor_is_max_of_all_bids():
    listing = make_listing(bids=[("bob", "60"), ("carol", "75"), ("bob", "80")])
    assert evaluate_bid(listing, "carol", Decimal("79")).floor == Decimal("80")


@pytest.mark.parametrize("bidder,value", [("bob", "49"), ("bob", "50"), ("alice", "70"), ("carol", "51")])
def test_evaluate_is_pure(bidder, value):
    listing = make_listing(bids=[("bob", "50")])
    first = evaluate_bid(listing, bidder, Decimal(value))
    second = evaluate_bid(listing, bidder, Decimal(value))
    assert first == second
    assert [b.bid_value for b in listing.bids] == [Decimal("50")]


def test_winning_bid_picks_highest():
    listing = make_listing(bids=[("bob", "10"), ("carol", "25"), ("bob", "40")])
    best = winning_bid(listing)
    assert best.bid_value == Decimal("40")
    assert best.position == 2


def test_winning_bid_prefers_earliest_on_tie():
    listing = make_listing(bids=[("bob", "40"), ("carol", "40")])
    assert winning_bid(listing).username == "bob"


def test_winning_bid_none_without_bids():
    assert winning_bid(make_listing()) is None
