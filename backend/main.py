from dotenv import load_dotenv
load_dotenv()

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import config
from routes import ingest, stats

app = FastAPI(title="Starship Stats API", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.allowed_origins(),
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(ingest.router)
app.include_router(stats.router)


@app.get("/")
def health():
    return {"status": "ok", "service": "starship-stats"}
