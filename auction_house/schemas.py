# auction_house/schemas.py
# Request fields are optional on purpose: emptiness and ranges are checked by
# the services so every rejection comes back as the same InvalidInput body.
from pydantic import BaseModel
from typing import List, Optional
from decimal import Decimal
from datetime import datetime

class AccountCredentials(BaseModel):
    username: Optional[str] = None
    password: Optional[str] = None

class AccountOut(BaseModel):
    username: str
    created_at: Optional[datetime] = None
    class Config:
        from_attributes = True

class ListingCreate(BaseModel):
    username: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    min_bid_value: Optional[Decimal] = None
    image: Optional[str] = None

class BidCreate(BaseModel):
    username: Optional[str] = None
    bid_value: Optional[Decimal] = None

class SaleRequest(BaseModel):
    username: Optional[str] = None

class BidOut(BaseModel):
    username: str
    bid_value: Decimal
    position: int
    created_at: Optional[datetime] = None
    class Config:
        from_attributes = True

class ListingOut(BaseModel):
    listing_id: str
    owner_username: str
    title: str
    description: str
    image: str
    min_bid_value: Decimal
    highest_bid: Optional[Decimal] = None
    bids: List[BidOut] = []
    sold: bool
    winner_username: Optional[str] = None
    winning_price: Optional[Decimal] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    class Config:
        from_attributes = True

class SaleOut(BaseModel):
    message: str = "Item sold successfully"
    listing_id: str
    winner_username: str
    winning_price: Decimal

class ErrorOut(BaseModel):
    kind: str
    message: str
    floor: Optional[Decimal] = None
