"""
Services layer.

Client side:
- lifecycle_policy.py: status state machine and mutability rules
- report_store.py: per-view in-memory report collection
- sync_controller.py: remote calls reconciled into the store
- view_filter.py: search/status projection
- report_client.py, auth_client.py: HTTP transports

Local Report Service:
- report_repository.py, user_service.py
"""
