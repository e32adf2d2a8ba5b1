"""
Metrics definitions for the roll-call service.

This module defines Prometheus metrics for monitoring
roll-call sessions and their collaborators.
"""

from prometheus_client import Counter, Histogram, Gauge

# 카운터 메트릭
events_initiated = Counter(
    "rollcall_events_initiated_total",
    "Number of roll-call events initiated",
    ["event_type", "drill"]
)

initiate_rejected = Counter(
    "rollcall_initiate_rejected_total",
    "Initiate calls rejected",
    ["reason"]
)

members_marked_safe = Counter(
    "rollcall_members_marked_safe_total",
    "Roster members transitioned to safe"
)

mark_safe_noop = Counter(
    "rollcall_mark_safe_noop_total",
    "mark-safe calls that changed nothing",
    ["reason"]
)

events_resolved = Counter(
    "rollcall_events_resolved_total",
    "Roll-call events auto-resolved with everyone accounted for",
    ["event_type", "drill"]
)

events_reset = Counter(
    "rollcall_events_reset_total",
    "Roll-call events closed by reset",
    ["resolved"]
)

directory_failures = Counter(
    "rollcall_directory_failures_total",
    "Personnel directory fetch failures"
)

notification_failures = Counter(
    "rollcall_notification_failures_total",
    "Notification sink failures",
    ["sink", "signal"]
)

publish_retries = Counter(
    "rollcall_publish_retries_total",
    "MQTT publish retries",
    ["topic"]
)

# 히스토그램 메트릭
time_to_resolution_seconds = Histogram(
    "rollcall_time_to_resolution_seconds",
    "Seconds from initiation until everyone was accounted for",
    buckets=[30, 60, 120, 180, 300, 600, 900, 1800, 3600]
)

directory_fetch_seconds = Histogram(
    "rollcall_directory_fetch_seconds",
    "Time spent fetching the roster",
    buckets=[0.01, 0.05, 0.1, 0.5, 1.0, 5.0, 10.0]
)

# 게이지 메트릭
active_event = Gauge(
    "rollcall_active_event",
    "1 while a roll-call event is active"
)

pending_members = Gauge(
    "rollcall_pending_members",
    "Roster members not yet accounted for"
)

outbox_size = Gauge(
    "rollcall_outbox_size",
    "Current number of items in outbox"
)
