from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from auction_house.db import Base, engine
from auction_house.errors import AuctionError, InvalidInput
from auction_house.api.routes import router as api_router
from auction_house.utils import logger
import auction_house.models  # noqa: F401 ensure models are imported so tables are known

# create FastAPI instance
app = FastAPI(title="auction-house")
app.include_router(api_router)


@app.exception_handler(AuctionError)
def handle_auction_error(request: Request, exc: AuctionError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
def handle_validation_error(request: Request, exc: RequestValidationError):
    fields = ", ".join(".".join(str(p) for p in err["loc"][1:]) for err in exc.errors())
    err = InvalidInput(f"Invalid request fields: {fields}" if fields else None)
    return JSONResponse(status_code=err.status_code, content=err.to_dict())


@app.on_event("startup")
def on_startup_create_tables():
    # Ensure database tables are created on startup
    Base.metadata.create_all(bind=engine)
    logger.info("Tables ready")
