# src/tenureminer/config/config.py
import os
from dotenv import load_dotenv

# load .env next to repo root when process starts
load_dotenv()

class Config:
    SPARQL_ENDPOINT = os.getenv("SPARQL_ENDPOINT", "https://query.wikidata.org/sparql")
    USER_AGENT = os.getenv("USER_AGENT")
    ENV = os.getenv("ENV", "dev")

    @staticmethod
    def validate():
        missing = [k for k in ("SPARQL_ENDPOINT", "USER_AGENT") if not getattr(Config, k)]
        if missing:
            raise RuntimeError(f"Missing required env vars: {', '.join(missing)}")
