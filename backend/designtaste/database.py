import sqlite3
from pathlib import Path
from sqlalchemy import create_engine, event
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from designtaste.config import settings
from designtaste.utils.filesystem import ensure_data_dir


class Base(DeclarativeBase):
    pass


def _set_sqlite_pragmas(dbapi_conn, connection_record):
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def get_engine(db_path: Path | None = None):
    path = db_path or settings.db_path
    engine = create_engine(
        f"sqlite:///{path}",
        connect_args={"check_same_thread": False},
    )
    event.listen(engine, "connect", _set_sqlite_pragmas)
    return engine


engine = get_engine()
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


SCHEMA_SQL = """\
-- ============================================================
-- PROCESSING QUEUE (one row per captured element)
-- ============================================================
CREATE TABLE IF NOT EXISTS processing_queue (
    id             TEXT PRIMARY KEY,
    source_url     TEXT NOT NULL,
    element_data   TEXT NOT NULL,
    screenshot_url TEXT,
    status         TEXT NOT NULL DEFAULT 'queued'
                   CHECK(status IN ('queued','processing','completed','error')),
    priority       INTEGER NOT NULL DEFAULT 1,
    error_message  TEXT,
    created_at     TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%fZ','now')),
    processed_at   TEXT
);

CREATE INDEX IF NOT EXISTS idx_queue_status ON processing_queue(status);
CREATE INDEX IF NOT EXISTS idx_queue_created ON processing_queue(created_at);

-- ============================================================
-- ELEMENT ANALYSES
-- ============================================================
CREATE TABLE IF NOT EXISTS element_analyses (
    id                    TEXT PRIMARY KEY,
    element_id            TEXT NOT NULL UNIQUE REFERENCES processing_queue(id) ON DELETE CASCADE,
    component_type        TEXT NOT NULL
                          CHECK(component_type IN ('hero','card','form','navigation',
                                                   'button','footer','sidebar','layout')),
    design_issues         TEXT NOT NULL DEFAULT '[]',
    style_characteristics TEXT NOT NULL DEFAULT '[]',
    recommendations       TEXT NOT NULL DEFAULT '[]',
    confidence_score      REAL NOT NULL,
    created_at            TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%fZ','now'))
);

-- ============================================================
-- INSPIRATIONS
-- ============================================================
CREATE TABLE IF NOT EXISTS inspirations (
    id               TEXT PRIMARY KEY,
    element_id       TEXT NOT NULL REFERENCES processing_queue(id) ON DELETE CASCADE,
    title            TEXT NOT NULL,
    image_url        TEXT NOT NULL,
    source           TEXT NOT NULL,
    category         TEXT,
    tags             TEXT NOT NULL DEFAULT '[]',
    similarity_score REAL NOT NULL,
    description      TEXT,
    source_url       TEXT,
    created_at       TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%fZ','now'))
);

CREATE INDEX IF NOT EXISTS idx_inspirations_element ON inspirations(element_id);

-- ============================================================
-- GENERATED CODE
-- ============================================================
CREATE TABLE IF NOT EXISTS generated_code (
    id           TEXT PRIMARY KEY,
    element_id   TEXT NOT NULL REFERENCES processing_queue(id) ON DELETE CASCADE,
    framework    TEXT NOT NULL,
    code         TEXT NOT NULL,
    description  TEXT,
    improvements TEXT NOT NULL DEFAULT '[]',
    created_at   TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%fZ','now'))
);

CREATE INDEX IF NOT EXISTS idx_generated_code_element ON generated_code(element_id);
"""


MIGRATIONS = [
    # v0.2: link back to the gallery page an inspiration came from
    "ALTER TABLE inspirations ADD COLUMN source_url TEXT",
]


def init_db(db_path: Path | None = None):
    path = db_path or settings.db_path
    ensure_data_dir(path.parent)
    conn = sqlite3.connect(str(path))
    conn.executescript(SCHEMA_SQL)
    # Run migrations idempotently (ALTER TABLE fails if the column exists)
    for migration in MIGRATIONS:
        try:
            conn.execute(migration)
            conn.commit()
        except sqlite3.OperationalError:
            pass  # already applied
    conn.close()
