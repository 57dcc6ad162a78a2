# Connectivity and schema check against the configured database
from sqlalchemy import text
from mentormatch.database import engine
from mentormatch.exceptions import MigrationError
from mentormatch.migrations import run_migrations

try:
    with engine.connect() as conn:
        conn.execute(text("SELECT 1"))
        print("Connection successful!")
except Exception as e:
    print(f"Connection failed: {e}")
else:
    try:
        report = run_migrations(engine)
        print(f"Migrations applied: {', '.join(report.applied)}")
    except MigrationError as e:
        for step in e.report.failed:
            print(f"Migration step {step.name} failed: {step.error}")
