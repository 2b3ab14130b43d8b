"""FastAPI app entrypoint."""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import ALLOWED_ORIGINS, LOG_LEVEL
from app.routers import settlements

logging.basicConfig(level=LOG_LEVEL)

app = FastAPI(
    title="Settle Up API",
    description="Turn a household's net balances into the fewest payments that square everyone up.",
    version="1.0.0",
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(settlements.router, prefix="/api")


@app.get("/")
def root():
    return {"message": "Settle Up API", "docs": "/docs"}
