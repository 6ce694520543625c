#!/usr/bin/env python3
"""
Schema migration runner for the eBuddy Supabase database.

Applies the SQL files in migrations/ in name order and records each one,
with a checksum, in the _migrations table.

Usage:
    python run_migrations.py             # Apply pending migrations
    python run_migrations.py --status    # Show applied and pending files
    python run_migrations.py --dry-run   # List what would be applied

Configuration:
    Set SUPABASE_DB_URL in your .env file to the database connection URI
    (Supabase Dashboard → Settings → Database → Connection string → URI).
"""

import argparse
import hashlib
import sys
from dataclasses import dataclass
from pathlib import Path

import psycopg2
from psycopg2 import sql
from rich.console import Console
from rich.table import Table

from shared.config import get_settings

console = Console()

MIGRATIONS_DIR = Path(__file__).parent / "migrations"
MIGRATIONS_TABLE = "_migrations"


@dataclass
class Migration:
    name: str
    path: Path
    checksum: str

    @classmethod
    def from_file(cls, path: Path) -> "Migration":
        digest = hashlib.sha256(path.read_bytes()).hexdigest()[:16]
        return cls(name=path.name, path=path, checksum=digest)


def discover_migrations(directory: Path = MIGRATIONS_DIR) -> list[Migration]:
    """All migration files, sorted by name."""
    if not directory.exists():
        return []
    return [Migration.from_file(path) for path in sorted(directory.glob("*.sql"))]


def connect():
    """Open a connection to the database named by SUPABASE_DB_URL, or exit."""
    settings = get_settings()
    if not settings.supabase_db_url:
        console.print("[red]Error:[/red] SUPABASE_DB_URL is not set.")
        sys.exit(1)
    try:
        return psycopg2.connect(settings.supabase_db_url)
    except psycopg2.Error as e:
        console.print(f"[red]Database connection failed:[/red] {e}")
        sys.exit(1)


def ensure_tracking_table(conn) -> None:
    with conn.cursor() as cur:
        cur.execute(
            sql.SQL(
                "CREATE TABLE IF NOT EXISTS {} ("
                " name TEXT PRIMARY KEY,"
                " checksum TEXT NOT NULL,"
                " applied_at TIMESTAMPTZ NOT NULL DEFAULT NOW())"
            ).format(sql.Identifier(MIGRATIONS_TABLE))
        )
    conn.commit()


def applied_checksums(conn) -> dict[str, str]:
    with conn.cursor() as cur:
        cur.execute(
            sql.SQL("SELECT name, checksum FROM {}").format(sql.Identifier(MIGRATIONS_TABLE))
        )
        return dict(cur.fetchall())


def pending_migrations(migrations: list[Migration], applied: dict[str, str]) -> list[Migration]:
    """
    Migrations not yet recorded as applied.

    An applied file whose checksum changed is reported but not re-run.
    """
    pending = []
    for migration in migrations:
        recorded = applied.get(migration.name)
        if recorded is None:
            pending.append(migration)
        elif recorded != migration.checksum:
            console.print(
                f"[yellow]Warning:[/yellow] {migration.name} changed after it was applied"
            )
    return pending


def apply_migration(conn, migration: Migration) -> None:
    """Run one migration and record it, in a single transaction."""
    console.print(f"[blue]Applying[/blue] {migration.name}")
    try:
        with conn.cursor() as cur:
            cur.execute(migration.path.read_text())
            cur.execute(
                sql.SQL("INSERT INTO {} (name, checksum) VALUES (%s, %s)").format(
                    sql.Identifier(MIGRATIONS_TABLE)
                ),
                (migration.name, migration.checksum),
            )
        conn.commit()
    except psycopg2.Error as e:
        conn.rollback()
        console.print(f"[red]✗[/red] {migration.name} failed: {e}")
        raise
    console.print(f"[green]✓[/green] {migration.name}")


def print_status(migrations: list[Migration], applied: dict[str, str]) -> None:
    if not migrations:
        console.print("[dim]No migrations found.[/dim]")
        return

    table = Table(title="Migration Status")
    table.add_column("Migration", style="cyan")
    table.add_column("Status")
    table.add_column("Checksum")
    for migration in migrations:
        recorded = applied.get(migration.name)
        if recorded is None:
            status = "[yellow]Pending[/yellow]"
        elif recorded != migration.checksum:
            status = "[red]Changed[/red]"
        else:
            status = "[green]Applied[/green]"
        table.add_row(migration.name, status, migration.checksum)
    console.print(table)


def main():
    parser = argparse.ArgumentParser(description="Apply eBuddy database migrations")
    parser.add_argument("--status", action="store_true", help="Show migration status only")
    parser.add_argument("--dry-run", action="store_true", help="List pending migrations only")
    args = parser.parse_args()

    migrations = discover_migrations()
    conn = connect()
    try:
        ensure_tracking_table(conn)
        applied = applied_checksums(conn)

        if args.status:
            print_status(migrations, applied)
            return

        pending = pending_migrations(migrations, applied)
        if not pending:
            console.print("[green]All migrations are up to date.[/green]")
            return

        for migration in pending:
            if args.dry_run:
                console.print(f"[cyan]Would apply[/cyan] {migration.name}")
            else:
                apply_migration(conn, migration)
    finally:
        conn.close()


if __name__ == "__main__":
    main()
