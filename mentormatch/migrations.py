# mentormatch/migrations.py
"""Schema setup as one all-or-nothing transaction.

Each step is named; if any step fails the whole transaction rolls back and a
MigrationError carries the report of what ran, what failed and what was skipped.
"""
import json
import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from sqlalchemy import Text, cast, select, update
from sqlalchemy.engine import Connection, Engine

from .database import Base, engine as default_engine
from .exceptions import MigrationError
from .models import User, UserRole
from .utils.skills import normalize_skills

logger = logging.getLogger(__name__)

@dataclass
class FailedStep:
    name: str
    error: str

@dataclass
class MigrationReport:
    applied: List[str] = field(default_factory=list)
    failed: List[FailedStep] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    rolled_back: bool = False

    @property
    def ok(self) -> bool:
        return not self.failed

@dataclass
class MigrationStep:
    name: str
    apply: Callable[[Connection], None]

def create_schema(conn: Connection) -> None:
    Base.metadata.create_all(bind=conn)

def _decode_skills(raw: Optional[str]):
    if raw is None:
        return None
    try:
        decoded = json.loads(raw)
    except ValueError:
        # Plain delimited text that was never JSON-encoded
        return raw
    if decoded is None or isinstance(decoded, (str, list)):
        return decoded
    # JSON scalars such as 5 or true are kept as their text
    return raw

def normalize_legacy_skills(conn: Connection) -> None:
    """Rewrites delimited or JSON-encoded skill strings as canonical lists."""
    users = User.__table__
    rows = conn.execute(select(users.c.id, users.c.role, cast(users.c.skills, Text))).all()
    rewritten = 0
    for user_id, role, raw in rows:
        current = _decode_skills(raw)
        canonical = normalize_skills(current) if role == UserRole.MENTOR.value else []
        if current != canonical:
            conn.execute(update(users).where(users.c.id == user_id).values(skills=canonical))
            rewritten += 1
    logger.info(f"Normalised skills on {rewritten} of {len(rows)} users")

MIGRATION_STEPS = [
    MigrationStep("create_schema", create_schema),
    MigrationStep("normalize_legacy_skills", normalize_legacy_skills),
]

def run_migrations(bind: Optional[Engine] = None, steps: Optional[List[MigrationStep]] = None) -> MigrationReport:
    """Runs every step in a single transaction; raises MigrationError on any failure."""
    bind = bind if bind is not None else default_engine
    steps = steps if steps is not None else MIGRATION_STEPS
    report = MigrationReport()

    try:
        with bind.begin() as conn:
            for index, step in enumerate(steps):
                try:
                    step.apply(conn)
                except Exception as e:
                    logger.error(f"Migration step '{step.name}' failed: {e}")
                    report.failed.append(FailedStep(step.name, str(e)))
                    report.skipped = [s.name for s in steps[index + 1:]]
                    raise
                report.applied.append(step.name)
                logger.info(f"Migration step '{step.name}' applied")
    except Exception as e:
        report.rolled_back = True
        raise MigrationError(report) from e

    logger.info(f"Migrations complete: {', '.join(report.applied)}")
    return report
