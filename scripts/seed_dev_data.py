"""Seed dev accounts into Postgres and print a bearer token for each.

Loads accounts from a JSON file (a list of objects with role, tenant_id,
display_name, email, company_name, department, plan) or, without a path, a
built-in set: one firm admin, one lawyer, and two tenants with an owner and
employees each. Accounts whose email already exists are left alone.

Usage:
    python -m scripts.seed_dev_data [path/to/accounts.json]

Requires: DATABASE_URL (Postgres) and SECRET_KEY; run `alembic upgrade head` first.
"""

from __future__ import annotations

import asyncio
import json
import sys
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from sqlalchemy import select

from backoffice.application.dtos.account import AccountResult
from backoffice.core.config import get_settings
from backoffice.infrastructure.persistence.database import _ensure_engine
from backoffice.infrastructure.persistence.models import Account
from backoffice.infrastructure.persistence.repositories import AccountRepository
from backoffice.infrastructure.security.jwt import token_for

DEFAULT_ACCOUNTS: list[dict[str, Any]] = [
    {"role": "admin", "display_name": "Firm Admin", "email": "admin@firm.local"},
    {"role": "lawyer", "display_name": "Firm Lawyer", "email": "lawyer@firm.local"},
    {
        "role": "owner",
        "tenant_id": "1208800767",
        "display_name": "Alpha Owner",
        "email": "owner@alpha.local",
        "company_name": "Alpha Trading",
        "department": "Management",
        "plan": "standard",
    },
    {
        "role": "user",
        "tenant_id": "1208800767",
        "display_name": "Alpha Employee",
        "email": "staff@alpha.local",
        "company_name": "Alpha Trading",
        "department": "Operations",
    },
    {
        "role": "owner",
        "tenant_id": "2118814523",
        "display_name": "Beta Owner",
        "email": "owner@beta.local",
        "company_name": "Beta Foods",
        "plan": "basic",
    },
    {
        "role": "manager",
        "tenant_id": "2118814523",
        "display_name": "Beta Manager",
        "email": "manager@beta.local",
        "company_name": "Beta Foods",
        "department": "Sales",
    },
]

_ACCOUNT_KEYS = ("role", "tenant_id", "display_name", "email", "company_name", "department", "plan")


def _project_root() -> Path:
    return Path(__file__).resolve().parent.parent


def _load_env() -> None:
    """Load .env from project root so get_settings() sees DATABASE_URL when run as script."""
    load_dotenv(_project_root() / ".env", override=True)


def _load_accounts(path: Path | None) -> list[dict[str, Any]]:
    if path is None:
        return DEFAULT_ACCOUNTS
    if not path.exists():
        print(f"Seed file not found: {path}", file=sys.stderr)
        sys.exit(1)
    with path.open() as f:
        data = json.load(f)
    if not isinstance(data, list):
        print("Seed file must hold a JSON list of accounts", file=sys.stderr)
        sys.exit(1)
    return data


async def run(path: Path | None) -> None:
    _load_env()
    get_settings()
    session_factory = _ensure_engine()
    seeded: list[AccountResult] = []

    async with session_factory() as session:
        async with session.begin():
            repo = AccountRepository(session)
            for raw in _load_accounts(path):
                email = raw.get("email")
                if email:
                    existing = await session.execute(
                        select(Account.id).where(Account.email == email).limit(1)
                    )
                    account_id = existing.scalar_one_or_none()
                    if account_id is not None:
                        print(f"Account {email} already exists, skip")
                        found = await repo.get_by_id(account_id)
                        if found is not None:
                            seeded.append(found)
                        continue
                account = await repo.create_account(
                    **{k: raw[k] for k in _ACCOUNT_KEYS if raw.get(k) is not None}
                )
                print(f"Account {account.email or account.id} ({account.role}) -> {account.id}")
                seeded.append(account)

    print("\nDev bearer tokens:")
    for account in seeded:
        print(f"  {account.role:<8} {account.email or account.id}: {token_for(account.to_identity())}")


def main() -> None:
    path = Path(sys.argv[1]) if len(sys.argv) > 1 else None
    asyncio.run(run(path))


if __name__ == "__main__":
    main()
