"""
Seed script for a running Report Service.

Usage:
  - Dry run (default): python scripts/seed_db.py
  - Apply to the configured service: python scripts/seed_db.py --apply
  - Another service: python scripts/seed_db.py --apply --url http://localhost:3000

Behavior:
  - Loads `db_seed.json` from repo root.
  - Registers each user (existing accounts are reported and skipped).
  - Logs in as each report's author and submits it through the client,
    so seeded reports pass the same validation as real ones.
  - Applies listed status changes as the first administrator.

NOTE: administrators must be listed in ADMIN_EMAILS of the service's .env.
"""

import argparse
import asyncio
import json
import os
from datetime import date

from ireporter.core.exceptions import RemoteServiceError
from ireporter.core.settings import settings
from ireporter.models.report import ReportStatus, ReportType
from ireporter.services.auth_client import AuthClient
from ireporter.services.report_client import ReportServiceClient
from ireporter.views import AdminView, SubmitterView


def load_seed(path: str = "./db_seed.json") -> dict:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


async def submit_reports(auth: AuthClient, url: str, seed: dict, apply: bool) -> dict:
    """Returns {seed report key: created id}."""
    passwords = {u["email"]: u["password"] for u in seed.get("users", [])}
    created = {}
    for key, data in seed.get("reports", {}).items():
        print(f"Preparing report: {key} ({data['author']})")
        if not apply:
            continue
        session = auth.login(data["author"], passwords[data["author"]])
        view = SubmitterView(session, ReportServiceClient(base_url=url, token=session.token))
        view.form.type = ReportType(data["type"])
        view.form.title = data["title"]
        view.form.description = data["description"]
        view.form.incident_date = date.fromisoformat(data["incidentDate"])
        view.form.latitude = data.get("latitude")
        view.form.longitude = data.get("longitude")
        result = await view.submit()
        if result.success:
            created[key] = result.report.id
            print(f"Created: {key} -> {result.report.id}")
        else:
            print(f"Failed to create {key}: {result.message}")
    return created


async def apply_statuses(auth: AuthClient, url: str, seed: dict, created: dict) -> None:
    admins = [u for u in seed.get("users", []) if u.get("admin")]
    if not admins:
        return
    session = auth.login(admins[0]["email"], admins[0]["password"])
    if not session.is_admin:
        print(f"{admins[0]['email']} is not an administrator; skipping status changes")
        return

    view = AdminView(session, ReportServiceClient(base_url=url, token=session.token))
    await view.mount()
    for key, steps in seed.get("statuses", {}).items():
        report_id = created.get(key)
        if report_id is None:
            continue
        for step in steps:
            result = await view.change_status(report_id, ReportStatus(step))
            print(f"{key}: {step} -> {result.message}")


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("--apply", action="store_true", help="Write seed to the service instead of dry-run")
    parser.add_argument("--url", default=settings.REPORT_SERVICE_URL, help="Report Service base URL")
    args = parser.parse_args()

    seed_path = os.path.join(os.getcwd(), "db_seed.json")
    if not os.path.exists(seed_path):
        print(f"Seed file not found: {seed_path}")
        return

    seed = load_seed(seed_path)
    auth = AuthClient(base_url=args.url)

    for user in seed.get("users", []):
        print(f"Preparing user: {user['email']}")
        if not args.apply:
            continue
        try:
            auth.register(user["name"], user["email"], user["password"])
            print(f"Registered: {user['email']}")
        except RemoteServiceError as e:
            print(f"Skipped {user['email']}: {e}")

    created = asyncio.run(submit_reports(auth, args.url, seed, args.apply))
    if args.apply:
        asyncio.run(apply_statuses(auth, args.url, seed, created))
        print("Seeding completed.")
    else:
        print("Dry run complete. Re-run with --apply to write to the service.")


if __name__ == "__main__":
    main()
