import os

server_mode = os.getenv("SERVER_MODE", "development")
"""The operational mode of the server."""

api_root = "/api"
"""The base url for the api."""

host = os.getenv("HOST", "0.0.0.0")
"""The interface to listen on."""

port = int(os.getenv("PORT", "3000"))
"""The port to listen on."""

database_url = os.getenv("DATABASE_URL", "sqlite://db.sqlite3")
"""The tortoise connection url for the store."""

tortoise_modules = {"models": ["cyclebook.models"]}
"""The modules tortoise loads the models from."""

secret_key = os.getenv("SECRET_KEY")
"""The key used to sign session tokens."""

token_lifetime = int(os.getenv("TOKEN_LIFETIME", "3600"))
"""How long (in seconds) a session token is valid for."""

institution_domain = os.getenv("INSTITUTION_DOMAIN", "sastra.ac.in")
"""The email domain that accounts must belong to."""

cycles = tuple(cycle.strip() for cycle in os.getenv("CYCLES", "Cycle 1,Cycle 2,Cycle 3").split(",") if cycle.strip())
"""The cycles that can be booked at every place."""

sentry_dsn = os.getenv("SENTRY_DSN")
"""The sentry DSN, if exception tracking is enabled."""
