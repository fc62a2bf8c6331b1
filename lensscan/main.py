from __future__ import annotations

from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .app_logging import configure_logging
from .api.v1.dependencies import close_processing_client
from .api.v1.routers import exports, history, pages

load_dotenv()
configure_logging()


@asynccontextmanager
async def lifespan(_: FastAPI):
  yield
  await close_processing_client()


app = FastAPI(title="LensScan Backend", version="0.1.0", lifespan=lifespan)

app.add_middleware(
  CORSMiddleware,
  allow_origins=["*"],
  allow_credentials=True,
  allow_methods=["*"],
  allow_headers=["*"],
)

api_router = APIRouter(prefix="/api")
api_router.include_router(pages.router)
api_router.include_router(exports.router)
api_router.include_router(history.router)

app.include_router(api_router)
