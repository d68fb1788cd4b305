from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv
import logging
import os

load_dotenv()

from db import Base, engine
import models  # registers tables on Base.metadata
from discovery.routes import router as discovery_router

logging.basicConfig(level=logging.INFO)
logging.info("App starting with DATABASE_URL")

ENV = os.getenv("ENV", "development")

app = FastAPI(title="Double Date Discovery API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["GET", "OPTIONS"],
    allow_headers=["*"],
)

Base.metadata.create_all(bind=engine)

app.include_router(discovery_router)


@app.get("/health", tags=["meta"], summary="Health check")
def health():
    return {"status": "ok", "environment": ENV}
