# storefront/main.py
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .errors import StatusConflict, SubmissionError, ValidationError
from .logging_config import setup_logging, get_logger
from .routes import admin, auth, bookings, cart, cashier, orders, products, profile, reviews, wishlist
from .settings import settings

setup_logging()
log = get_logger(__name__)

app = FastAPI(title="Kicks Studio Storefront API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(products.router)
app.include_router(cart.router)
app.include_router(orders.router)
app.include_router(bookings.router)
app.include_router(reviews.router)
app.include_router(wishlist.router)
app.include_router(profile.router)
app.include_router(auth.router)
app.include_router(cashier.router)
app.include_router(admin.router)


# Services raise plain domain errors; map them to HTTP once here.
@app.exception_handler(StatusConflict)
async def _status_conflict(request: Request, exc: StatusConflict):
    return JSONResponse(status_code=409, content={"detail": str(exc)})


@app.exception_handler(ValidationError)
async def _validation_error(request: Request, exc: ValidationError):
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.exception_handler(SubmissionError)
async def _submission_error(request: Request, exc: SubmissionError):
    return JSONResponse(status_code=502, content={"detail": str(exc)})


@app.get("/")
def root():
    return {"message": "Kicks Studio API is running"}


@app.get("/health")
def health_check():
    return {"status": "ok"}


@app.on_event("startup")
def _startup():
    log.info(f"Storefront API starting (project {settings.firebase_project_id}, currency {settings.currency})")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.api_host, port=settings.api_port)
