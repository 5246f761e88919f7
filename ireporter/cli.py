"""
Command-line client for the Report Service.

Usage:
  - python -m ireporter.cli serve --port 3000
  - python -m ireporter.cli register --name Ada --email ada@example.com --password secret1
  - python -m ireporter.cli list --email ada@example.com --password secret1 --search pothole
  - python -m ireporter.cli create --email ... --password ... --type RED_FLAG \
        --title "Bribe at checkpoint" --description "..." --incident-date 2024-05-01 --locate
  - python -m ireporter.cli edit REPORT_ID --email ... --password ... --title "New title"
  - python -m ireporter.cli delete REPORT_ID --email ... --password ...
  - python -m ireporter.cli status REPORT_ID UNDER_INVESTIGATION --email admin@... --password ...

Every command except serve and register logs in first and works on a
freshly mounted view, so the listing always reflects the service.
"""

import argparse
import asyncio
import logging
import sys
from datetime import date
from typing import List, Optional

from ireporter.core.exceptions import RemoteServiceError
from ireporter.core.logging_config import configure_logging
from ireporter.core.session import SessionContext
from ireporter.core.settings import settings
from ireporter.models.report import ALL_STATUSES, Report, ReportStatus, ReportType
from ireporter.services.auth_client import AuthClient
from ireporter.services.report_client import ReportServiceClient
from ireporter.services.sync_controller import SyncResult
from ireporter.views import AdminView, SubmitterView

logger = logging.getLogger(__name__)


def format_report(report: Report) -> str:
    location = (
        f"{report.location.latitude}, {report.location.longitude}" if report.location else "no location"
    )
    return (
        f"{report.id}  [{report.status.value}] {report.type.value}  {report.title}\n"
        f"    incident {report.incident_date.isoformat()}, reported {report.report_date.isoformat()}, {location}\n"
        f"    {report.description}"
    )


def print_result(result: SyncResult) -> int:
    stream = sys.stdout if result.success else sys.stderr
    print(result.message, file=stream)
    for field, error in result.errors.items():
        print(f"  {field}: {error}", file=stream)
    return 0 if result.success else 1


def login(args) -> SessionContext:
    return AuthClient(base_url=args.url).login(args.email, args.password)


def open_view(args, session: SessionContext):
    transport = ReportServiceClient(base_url=args.url, token=session.token)
    if session.is_admin:
        return AdminView(session, transport)
    return SubmitterView(session, transport)


async def cmd_list(args) -> int:
    view = open_view(args, login(args))
    result = await view.mount()
    if not result.success:
        return print_result(result)

    view.set_search(args.search)
    view.set_status_facet(args.status)
    reports = view.visible_reports()
    if not reports:
        print("No reports match your search criteria." if args.search else "No reports found.")
        return 0
    for report in reports:
        print(format_report(report))
    return 0


async def cmd_create(args) -> int:
    session = login(args)
    view = SubmitterView(session, ReportServiceClient(base_url=args.url, token=session.token))
    form = view.form
    form.type = ReportType(args.type)
    form.title = args.title
    form.description = args.description
    form.incident_date = date.fromisoformat(args.incident_date)
    form.latitude = args.latitude
    form.longitude = args.longitude
    if args.locate and not view.use_current_location():
        print(view.location_error, file=sys.stderr)

    result = await view.submit()
    if result.success and result.report is not None:
        print(format_report(result.report))
    return print_result(result)


async def cmd_edit(args) -> int:
    session = login(args)
    view = SubmitterView(session, ReportServiceClient(base_url=args.url, token=session.token))
    mounted = await view.mount()
    if not mounted.success:
        return print_result(mounted)
    if not view.start_edit(args.report_id):
        print(f"Report {args.report_id} cannot be edited", file=sys.stderr)
        return 1

    if args.title is not None:
        view.edit.title = args.title
    if args.description is not None:
        view.edit.description = args.description
    if args.incident_date is not None:
        view.edit.incident_date = date.fromisoformat(args.incident_date)
    return print_result(await view.save_edit())


async def cmd_delete(args) -> int:
    session = login(args)
    view = SubmitterView(session, ReportServiceClient(base_url=args.url, token=session.token))
    mounted = await view.mount()
    if not mounted.success:
        return print_result(mounted)
    return print_result(await view.delete(args.report_id))


async def cmd_status(args) -> int:
    view = open_view(args, login(args))
    if not isinstance(view, AdminView):
        print("Only administrators can change report status", file=sys.stderr)
        return 1
    mounted = await view.mount()
    if not mounted.success:
        return print_result(mounted)
    return print_result(await view.change_status(args.report_id, ReportStatus(args.new_status)))


def cmd_register(args) -> int:
    AuthClient(base_url=args.url).register(args.name, args.email, args.password)
    print("Registration successful")
    return 0


def cmd_serve(args) -> int:
    import uvicorn

    uvicorn.run("ireporter.main:app", host=args.host, port=args.port, reload=args.reload)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="ireporter", description="Red-flag and intervention reports")
    parser.add_argument("--url", default=settings.REPORT_SERVICE_URL, help="Report Service base URL")
    parser.add_argument("--log-level", default=None, help="Override LOG_LEVEL")
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the local Report Service")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=3000)
    serve.add_argument("--reload", action="store_true")

    register = sub.add_parser("register", help="Create an account")
    register.add_argument("--name", required=True)
    register.add_argument("--email", required=True)
    register.add_argument("--password", required=True)

    def with_credentials(p):
        p.add_argument("--email", required=True)
        p.add_argument("--password", required=True)
        return p

    listing = with_credentials(sub.add_parser("list", help="List reports visible to you"))
    listing.add_argument("--search", default="", help="Case-insensitive text in title or description")
    listing.add_argument(
        "--status", default=ALL_STATUSES,
        choices=[ALL_STATUSES] + [s.value for s in ReportStatus if s is not ReportStatus.DRAFT],
    )

    create = with_credentials(sub.add_parser("create", help="Submit a new report"))
    create.add_argument("--type", default=ReportType.RED_FLAG.value, choices=[t.value for t in ReportType])
    create.add_argument("--title", required=True)
    create.add_argument("--description", required=True)
    create.add_argument("--incident-date", required=True, help="YYYY-MM-DD, not in the future")
    create.add_argument("--latitude", type=float, default=None)
    create.add_argument("--longitude", type=float, default=None)
    create.add_argument("--locate", action="store_true", help="Use the configured geolocation provider")

    edit = with_credentials(sub.add_parser("edit", help="Edit a pending report"))
    edit.add_argument("report_id")
    edit.add_argument("--title", default=None)
    edit.add_argument("--description", default=None)
    edit.add_argument("--incident-date", default=None)

    delete = with_credentials(sub.add_parser("delete", help="Delete a pending report"))
    delete.add_argument("report_id")

    change = with_credentials(sub.add_parser("status", help="Change a report's status (administrators)"))
    change.add_argument("report_id")
    change.add_argument("new_status", choices=[s.value for s in ReportStatus if s is not ReportStatus.DRAFT])

    return parser


COMMANDS = {
    "list": cmd_list,
    "create": cmd_create,
    "edit": cmd_edit,
    "delete": cmd_delete,
    "status": cmd_status,
}


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)

    try:
        if args.command == "serve":
            return cmd_serve(args)
        if args.command == "register":
            return cmd_register(args)
        return asyncio.run(COMMANDS[args.command](args))
    except RemoteServiceError as e:
        print(str(e), file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"Invalid input: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
