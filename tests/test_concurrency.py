# tests/test_concurrency.py
"""Interleavings of two writers on the same listing.

Each "writer" is its own session. The late writer loads the listing first, so
its identity map holds a snapshot that goes stale once the early writer
commits; its write must then lose the version check and be re-evaluated.
"""
from decimal import Decimal
import pytest
from auction_house import crud, errors, services


@pytest.fixture
def open_listing(session_factory):
    setup = session_factory()
    for name in ("alice", "bob", "carol"):
        services.register_account(setup, name, "pw")
    listing = services.create_listing(setup, "alice", "Clock", "Wall clock", Decimal("10"), "aW1n")
    services.place_bid(setup, listing.listing_id, "bob", Decimal("50"))
    listing_id = listing.listing_id
    setup.close()
    return listing_id


def stale_session(session_factory, listing_id):
    session = session_factory()
    listing = crud.get_listing(session, listing_id)
    assert [b.bid_value for b in listing.bids] == [Decimal("50")]
    return session


def final_values(session_factory, listing_id):
    session = session_factory()
    try:
        return [b.bid_value for b in crud.get_listing(session, listing_id).bids]
    finally:
        session.close()


def test_stale_writer_is_reevaluated_and_appended(session_factory, open_listing):
    late = stale_session(session_factory, open_listing)
    early = session_factory()

    services.place_bid(early, open_listing, "carol", Decimal("60"))
    bid = services.place_bid(late, open_listing, "bob", Decimal("61"))

    assert bid.position == 2
    assert final_values(session_factory, open_listing) == [Decimal("50"), Decimal("60"), Decimal("61")]
    early.close()
    late.close()


def test_stale_writer_rejected_against_fresh_highest(session_factory, open_listing):
    late = stale_session(session_factory, open_listing)
    early = session_factory()

    services.place_bid(early, open_listing, "carol", Decimal("60"))
    # 55 beats the stale snapshot (50) but not the committed 60
    with pytest.raises(errors.BidTooLow) as exc:
        services.place_bid(late, open_listing, "bob", Decimal("55"))

    assert exc.value.floor == Decimal("60")
    assert final_values(session_factory, open_listing) == [Decimal("50"), Decimal("60")]
    early.close()
    late.close()


def test_sale_sees_bid_committed_after_its_read(session_factory, open_listing):
    seller = stale_session(session_factory, open_listing)
    bidder = session_factory()

    services.place_bid(bidder, open_listing, "carol", Decimal("70"))
    winner, price = services.sell_listing(seller, "alice", open_listing)

    assert (winner, price) == ("carol", Decimal("70"))
    bidder.close()
    seller.close()


def test_bid_after_concurrent_sale_is_refused(session_factory, open_listing):
    late = stale_session(session_factory, open_listing)
    seller = session_factory()

    services.sell_listing(seller, "alice", open_listing)
    with pytest.raises(errors.AlreadySold):
        services.place_bid(late, open_listing, "carol", Decimal("80"))

    assert final_values(session_factory, open_listing) == [Decimal("50")]
    seller.close()
    late.close()


def test_conflict_surfaces_after_retries(db, listing, monkeypatch):
    calls = []

    def always_stale(session, obj):
        calls.append(obj)
        session.rollback()
        raise errors.Conflict()

    monkeypatch.setattr(crud, "save_listing", always_stale)
    with pytest.raises(errors.Conflict):
        services.place_bid(db, listing.listing_id, "bob", Decimal("60"))
    assert len(calls) == services.BID_RETRY_TRIES
    monkeypatch.undo()
    assert crud.get_listing(db, listing.listing_id).bids == []
