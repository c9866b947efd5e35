# auction_house/errors.py
"""Typed failures raised by the store and the listing lifecycle.

Every error carries a `kind` and the HTTP status the router answers with, so
the transport never has to know which operation failed.
"""


class AuctionError(Exception):
    kind = "AuctionError"
    status_code = 500
    default_message = "Auction service error"

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self):
        return {"kind": self.kind, "message": self.message}


class InvalidInput(AuctionError):
    kind = "InvalidInput"
    status_code = 400
    default_message = "All fields are required"


class AccountNotFound(AuctionError):
    kind = "AccountNotFound"
    status_code = 404
    default_message = "User not found"


class ListingNotFound(AuctionError):
    kind = "ListingNotFound"
    status_code = 404
    default_message = "Listing not found"


class SelfBid(AuctionError):
    kind = "SelfBid"
    status_code = 403
    default_message = "You cannot bid on your own listing"


class BidTooLow(AuctionError):
    kind = "BidTooLow"
    status_code = 400

    def __init__(self, floor, first_bid=False):
        self.floor = floor
        if first_bid:
            message = f"First bid must be at least the minimum bid value of {floor}"
        else:
            message = f"Bid value must be higher than the current highest bid of {floor}"
        super().__init__(message)

    def to_dict(self):
        body = super().to_dict()
        body["floor"] = str(self.floor)
        return body


class NoBids(AuctionError):
    kind = "NoBids"
    status_code = 400
    default_message = "No bids available for this listing"


class AlreadySold(AuctionError):
    kind = "AlreadySold"
    status_code = 409
    default_message = "Listing has already been sold"


class Conflict(AuctionError):
    kind = "Conflict"
    status_code = 409
    default_message = "Listing was modified concurrently, try again"


class StoreUnavailable(AuctionError):
    kind = "StoreUnavailable"
    status_code = 503
    default_message = "Listing store unavailable"


class UsernameTaken(AuctionError):
    kind = "UsernameTaken"
    status_code = 400
    default_message = "Username already taken"


class InvalidCredentials(AuctionError):
    kind = "InvalidCredentials"
    status_code = 401
    default_message = "Invalid username or password"
