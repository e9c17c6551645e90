"""
Versioned schema migrations for the sales database.

Every ``vNNN_name.sql`` file beside this module is applied once, in version
order. A migration runs in a single transaction together with its
``schema_migrations`` row, so a failing script leaves neither partial DDL
nor a bookkeeping record behind. Applying stops at the first failure.

When the database already exists and migrations are pending, a copy is
taken first with SQLite's online backup API and restored if any migration
fails.

Also exposed as the ``billwise-migrate`` command.
"""

import asyncio
import hashlib
import re
import sys
import time
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

import aiosqlite

from billwise.config import configure_logging, get_logger, get_settings

logger = get_logger(__name__)

MIGRATIONS_DIR = Path(__file__).parent

REQUIRED_TABLES = (
    "schema_migrations",
    "products",
    "customers",
    "invoices",
    "invoice_items",
    "sequences",
)

_FILENAME = re.compile(r"^v(\d{3})_([a-z0-9_]+)\.sql$")


@dataclass(frozen=True)
class Migration:
    """A migration script on disk."""

    version: str
    name: str
    path: Path
    checksum: str

    @classmethod
    def load(cls, path: Path) -> "Migration":
        """Read a ``v001_name.sql`` file. Raises ValueError on a bad filename."""
        match = _FILENAME.match(path.name)
        if not match:
            raise ValueError(f"Invalid migration filename: {path.name}")
        digest = hashlib.sha256(path.read_bytes()).hexdigest()
        return cls(
            version=match.group(1),
            name=match.group(2),
            path=path,
            checksum=digest[:16],
        )

    def script(self) -> str:
        # version, name and checksum are constrained to [0-9a-z_], so inlining is safe
        return (
            "BEGIN;\n"
            f"{self.path.read_text(encoding='utf-8')}\n"
            "INSERT INTO schema_migrations (version, name, checksum) "
            f"VALUES ('{self.version}', '{self.name}', '{self.checksum}');\n"
            "COMMIT;\n"
        )


@dataclass
class MigrationResult:
    version: str
    name: str
    success: bool
    execution_time_ms: int
    error: str | None = None


@dataclass
class MigrationStatus:
    """Where a database file stands against the bundled migrations."""

    exists: bool
    applied: list[str] = field(default_factory=list)
    pending: list[str] = field(default_factory=list)

    @property
    def current_version(self) -> str | None:
        return self.applied[-1] if self.applied else None

    @property
    def up_to_date(self) -> bool:
        return self.exists and not self.pending


@dataclass
class SchemaCheck:
    name: str
    passed: bool
    detail: str = ""


def _resolve_db_path(db_path: Path | None) -> Path:
    return db_path or get_settings().storage.db_path


def discover_migrations(directory: Path = MIGRATIONS_DIR) -> list[Migration]:
    """All well-named migration files in version order."""
    migrations = []
    for path in sorted(directory.glob("v*.sql")):
        try:
            migrations.append(Migration.load(path))
        except ValueError as e:
            logger.warning("skipping_invalid_migration", path=str(path), error=str(e))
    return migrations


async def get_applied_migrations(conn: aiosqlite.Connection) -> dict[str, str]:
    """Applied versions mapped to the checksum they were applied with."""
    cursor = await conn.execute(
        "SELECT name FROM sqlite_master WHERE type = 'table' AND name = 'schema_migrations'"
    )
    if await cursor.fetchone() is None:
        return {}
    cursor = await conn.execute("SELECT version, checksum FROM schema_migrations")
    return {row[0]: row[1] for row in await cursor.fetchall()}


async def apply_migration(
    conn: aiosqlite.Connection,
    migration: Migration,
) -> MigrationResult:
    """Apply one migration atomically. Failures are reported, not raised."""
    logger.info("applying_migration", version=migration.version, name=migration.name)
    start = time.perf_counter()

    try:
        await conn.executescript(migration.script())
    except aiosqlite.Error as e:
        if conn.in_transaction:
            await conn.execute("ROLLBACK")
        elapsed = int((time.perf_counter() - start) * 1000)
        logger.error(
            "migration_failed",
            version=migration.version,
            name=migration.name,
            error=str(e),
        )
        return MigrationResult(migration.version, migration.name, False, elapsed, str(e))

    elapsed = int((time.perf_counter() - start) * 1000)
    await conn.execute(
        "UPDATE schema_migrations SET execution_time_ms = ? WHERE version = ?",
        (elapsed, migration.version),
    )
    logger.info(
        "migration_applied",
        version=migration.version,
        name=migration.name,
        execution_time_ms=elapsed,
    )
    return MigrationResult(migration.version, migration.name, True, elapsed)


async def _copy_database(source: Path, target: Path) -> None:
    async with aiosqlite.connect(source) as src, aiosqlite.connect(target) as dst:
        await src.backup(dst)


async def create_backup(db_path: Path) -> Path:
    """Snapshot the database next to itself and return the snapshot path."""
    stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    backup_path = db_path.with_name(f"{db_path.stem}.backup_{stamp}{db_path.suffix}")
    await _copy_database(db_path, backup_path)
    logger.info("database_backup_created", backup_path=str(backup_path))
    return backup_path


async def restore_backup(db_path: Path, backup_path: Path) -> None:
    await _copy_database(backup_path, db_path)
    logger.warning("database_restored_from_backup", backup_path=str(backup_path))


async def initialize_database(
    db_path: Path | None = None,
    create_backup_before: bool = True,
    migrations_dir: Path = MIGRATIONS_DIR,
) -> list[MigrationResult]:
    """
    Apply every pending migration.

    Args:
        db_path: Database file (default from settings). Created if missing.
        create_backup_before: Snapshot an existing database before migrating
            and restore it if a migration fails.
        migrations_dir: Where to look for migration scripts.

    Returns:
        One result per attempted migration. Already applied versions are
        skipped and not reported, so an up-to-date database yields [].
    """
    db_path = _resolve_db_path(db_path)
    db_path.parent.mkdir(parents=True, exist_ok=True)
    existed = db_path.exists()
    logger.info("initializing_database", db_path=str(db_path), exists=existed)

    migrations = discover_migrations(migrations_dir)
    if not migrations:
        logger.warning("no_migrations_found", directory=str(migrations_dir))
        return []

    results: list[MigrationResult] = []
    backup_path: Path | None = None

    async with aiosqlite.connect(db_path, isolation_level=None) as conn:
        await conn.execute("PRAGMA journal_mode=WAL")
        await conn.execute("PRAGMA foreign_keys=ON")

        applied = await get_applied_migrations(conn)
        pending = [m for m in migrations if m.version not in applied]

        for migration in migrations:
            recorded = applied.get(migration.version)
            if recorded is not None and recorded != migration.checksum:
                logger.warning(
                    "migration_checksum_changed",
                    version=migration.version,
                    recorded=recorded,
                    current=migration.checksum,
                )

        if pending and existed and create_backup_before:
            backup_path = await create_backup(db_path)

        for migration in pending:
            result = await apply_migration(conn, migration)
            results.append(result)
            if not result.success:
                logger.error("migration_failed_stopping", version=migration.version)
                break

    failed = any(not r.success for r in results)
    if backup_path is not None:
        if failed:
            await restore_backup(db_path, backup_path)
        backup_path.unlink()

    return results


# Name used by the API lifespan
run_migrations = initialize_database


async def get_migration_status(
    db_path: Path | None = None,
    migrations_dir: Path = MIGRATIONS_DIR,
) -> MigrationStatus:
    db_path = _resolve_db_path(db_path)
    bundled = [m.version for m in discover_migrations(migrations_dir)]

    if not db_path.exists():
        return MigrationStatus(exists=False, pending=bundled)

    async with aiosqlite.connect(db_path) as conn:
        applied = await get_applied_migrations(conn)

    return MigrationStatus(
        exists=True,
        applied=sorted(applied),
        pending=[v for v in bundled if v not in applied],
    )


async def verify_schema_integrity(db_path: Path | None = None) -> list[SchemaCheck]:
    """Foreign key, page integrity, required table and invoice sequence checks."""
    db_path = _resolve_db_path(db_path)
    checks: list[SchemaCheck] = []

    async with aiosqlite.connect(db_path) as conn:
        cursor = await conn.execute("PRAGMA foreign_key_check")
        violations = await cursor.fetchall()
        checks.append(
            SchemaCheck("foreign_keys", not violations, f"{len(violations)} violation(s)")
        )

        cursor = await conn.execute("PRAGMA integrity_check")
        row = await cursor.fetchone()
        checks.append(SchemaCheck("integrity", row[0] == "ok", row[0]))

        cursor = await conn.execute("SELECT name FROM sqlite_master WHERE type = 'table'")
        tables = {r[0] for r in await cursor.fetchall()}
        missing = [t for t in REQUIRED_TABLES if t not in tables]
        checks.append(
            SchemaCheck("required_tables", not missing, ", ".join(missing) or "all present")
        )

        if not missing:
            # The counter must never trail the invoices already issued
            cursor = await conn.execute(
                """
                SELECT
                    (SELECT current_value FROM sequences WHERE name = 'invoice'),
                    (SELECT COUNT(*) FROM invoices)
                """
            )
            counter, issued = await cursor.fetchone()
            checks.append(
                SchemaCheck(
                    "invoice_sequence",
                    counter is not None and counter >= issued,
                    f"counter={counter} invoices={issued}",
                )
            )

    return checks


def main() -> None:
    """CLI entry point for database migration."""
    import argparse

    parser = argparse.ArgumentParser(description="BillWise database migrator")
    parser.add_argument("--db-path", type=Path, help="Database path (default from settings)")
    parser.add_argument("--status", action="store_true", help="Show migration status")
    parser.add_argument("--verify", action="store_true", help="Verify schema integrity")
    parser.add_argument(
        "--no-backup", action="store_true", help="Skip the backup taken before migrating"
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
    )
    args = parser.parse_args()
    configure_logging(args.log_level)

    async def run() -> bool:
        if args.status:
            status = await get_migration_status(args.db_path)
            print(f"Database exists: {status.exists}")
            print(f"Current version: {status.current_version or 'N/A'}")
            print(f"Applied: {', '.join(status.applied) or '-'}")
            print(f"Pending: {', '.join(status.pending) or '-'}")
            return True

        if args.verify:
            checks = await verify_schema_integrity(args.db_path)
            for check in checks:
                print(f"[{'PASS' if check.passed else 'FAIL'}] {check.name}: {check.detail}")
            return all(c.passed for c in checks)

        results = await initialize_database(
            args.db_path, create_backup_before=not args.no_backup
        )
        if not results:
            print("Database is up to date")
        for result in results:
            label = "OK" if result.success else "FAILED"
            print(f"[{label}] v{result.version} {result.name} ({result.execution_time_ms}ms)")
            if result.error:
                print(f"    {result.error}")
        return all(r.success for r in results)

    if not asyncio.run(run()):
        sys.exit(1)


if __name__ == "__main__":
    main()
