"""Users: a CRUD resource over a declared table, plus a static landing page.

Demonstrates column specifications compiled to a table definition at
startup, register_resource for POST/GET/PUT/DELETE, a multi-stage route
that logs before answering, and the static-file fallback.

Run:
    cd examples/users && python app.py

Set TERN_DATABASE_URL to use a persistent store, e.g.
``sqlite:///users.db`` or ``mysql://root@localhost/app``.
"""

import logging
import os
from pathlib import Path

from tern import App, AppConfig
from tern.data import DIALECTS, Column, Database, Table
from tern.resource import CLIENT_ERROR_STATUS, register_resource

logger = logging.getLogger("users")

PUBLIC = Path(__file__).parent / "public"

db = Database(os.environ.get("TERN_DATABASE_URL", "sqlite:///:memory:"))
app = App(AppConfig(static_dir=PUBLIC), db=db)

users = Table(
    "user",
    [
        Column("id", "int", length=11, unsigned=True, primary_key=True, autoincrement=True),
        Column("name", "varchar", length=32, required=True),
        Column("dob", "date"),
        Column("address", "varchar", length=128),
        Column("description", "text"),
        Column("created_at", "timestamp", timestamp=True),
    ],
)


# ---------------------------------------------------------------------------
# Stages
# ---------------------------------------------------------------------------


async def log_request(request, response, next):
    logger.info("%s %s", request.method, request.path)
    await next()


async def health(request, response, next):
    await response.send(200, {"status": "ok"})


async def schema(request, response, next):
    dialect = request.query.get("dialect", db.dialect.name)
    if not isinstance(dialect, str) or dialect not in DIALECTS:
        choices = ", ".join(DIALECTS)
        await response.send(CLIENT_ERROR_STATUS, f"Unknown dialect; choose one of {choices}")
        return
    await response.send(200, "\n".join(users.definition(dialect).statements))


app.get("/health", log_request, health)
app.get("/schema", schema)
register_resource(app, db, users, "/user")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    app.run()
