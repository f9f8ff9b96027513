from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.routers import balance, swap, token_price, tokens

app = FastAPI(title="Chain Quote API")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(balance.router)
app.include_router(token_price.router)
app.include_router(swap.router)
app.include_router(tokens.router)
