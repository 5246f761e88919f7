"""
Tests for the submitter and administrator views.
"""

import asyncio

from ireporter.models.report import ALL_STATUSES, ReportStatus
from ireporter.services.geolocation import NoOpProvider, StaticProvider
from ireporter.views import AdminView, SubmitterView
from tests.conftest import FakeTransport, make_report


def run(coro):
    return asyncio.run(coro)


def mounted_submitter(submitter_session, strict_policy, geolocation=None):
    transport = FakeTransport([
        make_report("1", ReportStatus.PENDING, title="Pothole"),
        make_report("2", ReportStatus.UNDER_INVESTIGATION, title="Bribery"),
    ])
    view = SubmitterView(submitter_session, transport, policy=strict_policy,
                         geolocation=geolocation or NoOpProvider())
    run(view.mount())
    return view


def test_edit_controls_follow_policy(submitter_session, strict_policy):
    view = mounted_submitter(submitter_session, strict_policy)
    assert view.can_edit(view.store.get("1"))
    assert not view.can_edit(view.store.get("2"))
    assert view.start_edit("1")
    assert not view.start_edit("2")


def test_location_failure_keeps_form_usable(submitter_session, strict_policy):
    view = mounted_submitter(submitter_session, strict_policy)
    assert not view.use_current_location()
    assert view.location_error
    assert view.form.latitude is None


def test_location_success_fills_form(submitter_session, strict_policy):
    view = mounted_submitter(submitter_session, strict_policy, geolocation=StaticProvider(1.5, 2.5))
    assert view.use_current_location()
    assert (view.form.latitude, view.form.longitude) == (1.5, 2.5)
    assert view.location_error is None


def test_close_discards_store(submitter_session, strict_policy):
    view = mounted_submitter(submitter_session, strict_policy)
    view.close()
    assert len(view.store) == 0
    assert view.controller.closed


def test_filter_inputs(submitter_session, strict_policy):
    view = mounted_submitter(submitter_session, strict_policy)
    view.set_search("POT")
    assert [r.id for r in view.visible_reports()] == ["1"]
    view.set_search("")
    view.set_status_facet("UNDER_INVESTIGATION")
    assert [r.id for r in view.visible_reports()] == ["2"]
    view.set_status_facet(ALL_STATUSES)
    assert len(view.visible_reports()) == 2


def test_admin_status_options(admin_session, strict_policy):
    transport = FakeTransport([make_report("1", ReportStatus.RESOLVED)])
    view = AdminView(admin_session, transport, policy=strict_policy)
    run(view.mount())
    assert view.status_options(view.store.get("1")) == [ReportStatus.RESOLVED]
    result = run(view.change_status("1", ReportStatus.PENDING))
    assert not result.success
    assert [n.level.value for n in view.notifications()] == ["error"]
