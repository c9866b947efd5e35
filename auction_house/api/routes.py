# auction_house/api/routes.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List
from .. import schemas, services
from ..db import get_db

router = APIRouter(responses={
    status: {"model": schemas.ErrorOut} for status in (400, 401, 403, 404, 409, 503)
})

@router.get("/health")
def health():
    return {"status": "ok"}


@router.post("/register", response_model=schemas.AccountOut)
def register(payload: schemas.AccountCredentials, db: Session = Depends(get_db)):
    return services.register_account(db, payload.username, payload.password)


@router.post("/login", response_model=schemas.AccountOut)
def login(payload: schemas.AccountCredentials, db: Session = Depends(get_db)):
    return services.verify_credentials(db, payload.username, payload.password)


@router.post("/listings", response_model=schemas.ListingOut)
def create_listing(payload: schemas.ListingCreate, db: Session = Depends(get_db)):
    return services.create_listing(
        db,
        owner=payload.username,
        title=payload.title,
        description=payload.description,
        min_bid_value=payload.min_bid_value,
        image=payload.image,
    )


@router.get("/listings", response_model=List[schemas.ListingOut])
def listings(db: Session = Depends(get_db)):
    return services.list_all(db)


@router.get("/listings/{listing_id}", response_model=schemas.ListingOut)
def get_listing(listing_id: str, db: Session = Depends(get_db)):
    return services.get_listing(db, listing_id)


@router.delete("/listings/{listing_id}")
def delete_listing(listing_id: str, username: str = Query(...), db: Session = Depends(get_db)):
    services.delete_listing(db, username, listing_id)
    return {"status": "deleted"}


@router.post("/listings/{listing_id}/bids", response_model=schemas.BidOut)
def place_bid(listing_id: str, payload: schemas.BidCreate, db: Session = Depends(get_db)):
    return services.place_bid(db, listing_id, payload.username, payload.bid_value)


@router.post("/listings/{listing_id}/sell", response_model=schemas.SaleOut)
def sell_listing(listing_id: str, payload: schemas.SaleRequest, db: Session = Depends(get_db)):
    winner, price = services.sell_listing(db, payload.username, listing_id)
    return schemas.SaleOut(listing_id=listing_id, winner_username=winner, winning_price=price)


@router.get("/users/{username}/listings", response_model=List[schemas.ListingOut])
def listings_by_owner(username: str, db: Session = Depends(get_db)):
    return services.list_by_owner(db, username)


@router.get("/users/{username}/sold", response_model=List[schemas.ListingOut])
def sold_by(username: str, db: Session = Depends(get_db)):
    return services.sold_by(db, username)


@router.get("/users/{username}/bought", response_model=List[schemas.ListingOut])
def bought_by(username: str, db: Session = Depends(get_db)):
    return services.bought_by(db, username)
