# src/analysis_log.py
import csv
import json
import logging
import os
import sqlite3
import uuid
from datetime import datetime
from io import StringIO

from config import EXPORT_FOLDER, ID_COLLECTOR, SQLITE_CONFIG

logger = logging.getLogger(__name__)

COLUMNS = [
    "id_collector", "id", "timestamp", "event_type", "location",
    "uv_index", "risk_tier", "skin_type", "total_score",
    "recommendations", "status_message",
]


def get_db_connection_sqlite():
    conn = sqlite3.connect(SQLITE_CONFIG["path"], check_same_thread=False)
    conn.execute("PRAGMA foreign_keys = ON;")
    return conn


def ensure_table():
    """Garante que a tabela analysis_log existe no SQLite"""
    db_path = SQLITE_CONFIG["path"]
    if os.path.dirname(db_path):
        os.makedirs(os.path.dirname(db_path), exist_ok=True)

    conn = get_db_connection_sqlite()
    try:
        conn.execute("""
            CREATE TABLE IF NOT EXISTS analysis_log (
                id_collector TEXT,
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                timestamp TEXT NOT NULL,
                event_type TEXT NOT NULL,
                location TEXT,
                uv_index REAL,
                risk_tier TEXT,
                skin_type TEXT,
                total_score INTEGER,
                recommendations TEXT,
                status_message TEXT
            )
        """)
        conn.commit()
    finally:
        conn.close()


def log_analysis(event_type, location=None, **kwargs):
    """Grava um evento; falhas de banco são registradas e não propagam."""
    data = (
        ID_COLLECTOR,
        datetime.now().isoformat(),
        event_type,
        location,
        kwargs.get("uv_index"),
        kwargs.get("risk_tier"),
        kwargs.get("skin_type"),
        kwargs.get("total_score"),
        json.dumps(kwargs.get("recommendations", []), ensure_ascii=False),
        kwargs.get("status_message"),
    )
    try:
        ensure_table()
        conn = get_db_connection_sqlite()
        try:
            conn.execute("""
                INSERT INTO analysis_log
                (id_collector,timestamp,event_type,location,uv_index,
                 risk_tier,skin_type,total_score,recommendations,status_message)
                VALUES (?,?,?,?,?,?,?,?,?,?)
            """, data)
            conn.commit()
        finally:
            conn.close()
    except (sqlite3.Error, OSError):
        logger.exception("Could not write %s to analysis_log", event_type)
        return False
    return True


def count_analyses():
    ensure_table()
    conn = get_db_connection_sqlite()
    try:
        return conn.execute("SELECT COUNT(*) FROM analysis_log").fetchone()[0]
    finally:
        conn.close()


def export_csv(save=True):
    """Dump analysis_log as CSV; returns (filename, csv_text)."""
    ensure_table()
    conn = get_db_connection_sqlite()
    try:
        cur = conn.execute(f"SELECT {', '.join(COLUMNS)} FROM analysis_log ORDER BY id")
        rows = cur.fetchall()
    finally:
        conn.close()

    output = StringIO()
    writer = csv.writer(output)
    writer.writerow(COLUMNS)
    writer.writerows(rows)
    csv_data = output.getvalue()

    filename = f"{ID_COLLECTOR}_{uuid.uuid4().hex}.csv"
    if save:
        os.makedirs(EXPORT_FOLDER, exist_ok=True)
        with open(os.path.join(EXPORT_FOLDER, filename), "w", encoding="utf-8", newline="") as f:
            f.write(csv_data)
        logger.info("Exported %d rows to %s", len(rows), filename)

    return filename, csv_data
