"""
Centralized data-table storage for saved assessments.

Provides a lightweight SQLite-backed repository standing in for the hosted
key-value service. Every saved assessment is stored with copies of its key
scalar fields for indexing, alongside running statistics:
    - assessments
    - user_stats
    - community_stats

The engine never depends on this module. Results are pure functions of their
inputs, so anything stored here can be re-derived at any time.
"""

from __future__ import annotations

import enum
import json
import logging
import os
import sqlite3
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import pandas as pd

from .models import AssessmentInput, AssessmentResult

logger = logging.getLogger(__name__)

DEFAULT_DB_PATH_ENV = "RTRWH_DATABASE_PATH"
ANONYMOUS_USER = "anonymous"
TABLES = ("assessments", "user_stats", "community_stats")


def _utcnow_iso() -> str:
    return datetime.now(timezone.utc).replace(microsecond=0).isoformat().replace("+00:00", "Z")


def _to_json(value: Any) -> str:
    if value is None:
        return "{}"
    if isinstance(value, str):
        return value
    def _default(o: Any):
        if isinstance(o, enum.Enum):
            return o.value
        if hasattr(o, "to_dict") and callable(getattr(o, "to_dict")):
            return o.to_dict()
        # Fallback to string to avoid serialization crashes while preserving audit trail
        return str(o)
    return json.dumps(value, default=_default, separators=(",", ":"), sort_keys=True)


@dataclass(frozen=True)
class AssessmentRecord:
    """Index row for one saved assessment"""
    assessment_id: str
    user_id: str
    created_at: str
    address: str
    state: str
    feasibility_score: int
    annual_harvest: float
    total_cost: float


class AssessmentStore:
    """
    Thin wrapper around SQLite for saved assessments and statistics.

    Uses an in-memory database by default. Set `db_path` to a filesystem path
    to persist tables locally.
    """

    def __init__(self, db_path: Optional[str] = None):
        if db_path:
            self.conn = sqlite3.connect(db_path)
        else:
            self.conn = sqlite3.connect(":memory:")
        self.conn.row_factory = sqlite3.Row
        self._initialize_schema()

    @classmethod
    def from_env(cls) -> "AssessmentStore":
        return cls(db_path=os.environ.get(DEFAULT_DB_PATH_ENV))

    # --------------------------------------------------------------------- schema
    def _initialize_schema(self) -> None:
        cur = self.conn.cursor()
        cur.executescript(
            """
            CREATE TABLE IF NOT EXISTS assessments (
                assessment_id TEXT PRIMARY KEY,
                user_id TEXT NOT NULL,
                created_at TEXT NOT NULL,
                address TEXT NOT NULL,
                pincode TEXT,
                state TEXT,
                district TEXT,
                feasibility_score INTEGER NOT NULL,
                feasibility_category TEXT NOT NULL,
                annual_harvest REAL NOT NULL,
                total_cost REAL NOT NULL,
                annual_savings REAL NOT NULL,
                co2_saved REAL NOT NULL,
                inputs_json TEXT NOT NULL,
                result_json TEXT NOT NULL
            );

            CREATE INDEX IF NOT EXISTS idx_assessments_user
                ON assessments (user_id, created_at);

            CREATE TABLE IF NOT EXISTS user_stats (
                user_id TEXT PRIMARY KEY,
                joined_at TEXT NOT NULL,
                last_assessment_at TEXT,
                total_assessments INTEGER NOT NULL DEFAULT 0,
                total_water_harvest REAL NOT NULL DEFAULT 0,
                total_cost_savings REAL NOT NULL DEFAULT 0
            );

            CREATE TABLE IF NOT EXISTS community_stats (
                stats_id INTEGER PRIMARY KEY CHECK (stats_id = 1),
                total_assessments INTEGER NOT NULL DEFAULT 0,
                total_water_saved REAL NOT NULL DEFAULT 0,
                total_co2_reduced REAL NOT NULL DEFAULT 0,
                updated_at TEXT
            );

            INSERT OR IGNORE INTO community_stats (stats_id) VALUES (1);
            """
        )
        self.conn.commit()

    # --------------------------------------------------------------------- writes
    def save_assessment(
        self,
        inputs: AssessmentInput,
        result: AssessmentResult,
        *,
        user_id: Optional[str] = None,
        created_at: Optional[str] = None,
    ) -> AssessmentRecord:
        """
        Store one assessment and roll it into user and community statistics.

        All three writes happen in a single transaction.
        """
        record = AssessmentRecord(
            assessment_id=str(uuid.uuid4()),
            user_id=user_id or ANONYMOUS_USER,
            created_at=created_at or _utcnow_iso(),
            address=inputs.location.address,
            state=inputs.location.state,
            feasibility_score=result.feasibility.score,
            annual_harvest=result.potential.annual_harvest,
            total_cost=result.economics.total_cost,
        )

        with self.conn:
            self.conn.execute(
                """
                INSERT INTO assessments (
                    assessment_id, user_id, created_at, address, pincode, state,
                    district, feasibility_score, feasibility_category,
                    annual_harvest, total_cost, annual_savings, co2_saved,
                    inputs_json, result_json
                )
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    record.assessment_id,
                    record.user_id,
                    record.created_at,
                    record.address,
                    inputs.location.pincode,
                    record.state,
                    inputs.location.district,
                    record.feasibility_score,
                    result.feasibility.category.value,
                    record.annual_harvest,
                    record.total_cost,
                    result.economics.annual_savings,
                    result.environmental.co2_saved,
                    _to_json(inputs),
                    _to_json(result),
                ),
            )

            if record.user_id != ANONYMOUS_USER:
                self._update_user_stats(record, result)

            self.conn.execute(
                """
                UPDATE community_stats
                SET total_assessments = total_assessments + 1,
                    total_water_saved = total_water_saved + ?,
                    total_co2_reduced = total_co2_reduced + ?,
                    updated_at = ?
                WHERE stats_id = 1
                """,
                (result.potential.annual_harvest, result.environmental.co2_saved, record.created_at),
            )

        logger.info("Saved assessment %s for user %s", record.assessment_id, record.user_id)
        return record

    def _update_user_stats(self, record: AssessmentRecord, result: AssessmentResult) -> None:
        self.conn.execute(
            """
            INSERT INTO user_stats (
                user_id, joined_at, last_assessment_at,
                total_assessments, total_water_harvest, total_cost_savings
            )
            VALUES (?, ?, ?, 1, ?, ?)
            ON CONFLICT (user_id) DO UPDATE SET
                last_assessment_at = excluded.last_assessment_at,
                total_assessments = total_assessments + 1,
                total_water_harvest = total_water_harvest + excluded.total_water_harvest,
                total_cost_savings = total_cost_savings + excluded.total_cost_savings
            """,
            (
                record.user_id,
                record.created_at,
                record.created_at,
                result.potential.annual_harvest,
                result.economics.annual_savings,
            ),
        )

    # --------------------------------------------------------------------- reads
    @staticmethod
    def _record(row: sqlite3.Row) -> AssessmentRecord:
        return AssessmentRecord(
            assessment_id=row["assessment_id"],
            user_id=row["user_id"],
            created_at=row["created_at"],
            address=row["address"],
            state=row["state"] or "",
            feasibility_score=int(row["feasibility_score"]),
            annual_harvest=float(row["annual_harvest"]),
            total_cost=float(row["total_cost"]),
        )

    def list_assessments(self, user_id: str) -> List[AssessmentRecord]:
        """All assessments for a user, newest first"""
        cur = self.conn.execute(
            "SELECT * FROM assessments WHERE user_id = ? ORDER BY created_at DESC",
            (user_id,),
        )
        return [self._record(row) for row in cur.fetchall()]

    def get_assessment(self, assessment_id: str) -> Optional[Dict[str, Any]]:
        """Full stored payload: index fields plus decoded input and result dicts"""
        row = self.conn.execute(
            "SELECT * FROM assessments WHERE assessment_id = ?", (assessment_id,)
        ).fetchone()
        if row is None:
            return None
        payload = dict(row)
        payload["input"] = json.loads(payload.pop("inputs_json"))
        payload["result"] = json.loads(payload.pop("result_json"))
        return payload

    def get_user_stats(self, user_id: str) -> Optional[Dict[str, Any]]:
        row = self.conn.execute("SELECT * FROM user_stats WHERE user_id = ?", (user_id,)).fetchone()
        return dict(row) if row is not None else None

    def get_community_stats(self) -> Dict[str, Any]:
        row = self.conn.execute(
            """
            SELECT total_assessments, total_water_saved, total_co2_reduced, updated_at,
                   (SELECT COUNT(*) FROM user_stats) AS total_members
            FROM community_stats WHERE stats_id = 1
            """
        ).fetchone()
        return dict(row)

    # --------------------------------------------------------------------- fetch
    def fetch_dataframe(self, table: str) -> pd.DataFrame:
        if table not in TABLES:
            raise ValueError(f"Unknown table '{table}'. Expected one of {TABLES}")
        df = pd.read_sql_query(f"SELECT * FROM {table}", self.conn)
        return df

    def close(self) -> None:
        self.conn.close()
