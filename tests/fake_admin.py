"""
In-memory stand-in for ServiceBusAdministrationClient used by the tests.
"""
from __future__ import annotations

from datetime import timedelta
from types import SimpleNamespace
from typing import Any, Dict, List, Optional, Tuple

from azure.servicebus.management import CorrelationRuleFilter, TrueRuleFilter


class FakeAdminClient:
    """
    Serves a fixed topology and records every call.

    Args:
        topics: Mapping of topic name -> topic properties namespace.
        subscriptions: Mapping of topic name -> list of subscription namespaces.
        rules: Mapping of (topic, subscription) -> list of rule namespaces.
        failures: Mapping of (method, first argument) -> exception to raise.
    """

    def __init__(
            self,
            topics: Optional[Dict[str, Any]] = None,
            subscriptions: Optional[Dict[str, List[Any]]] = None,
            rules: Optional[Dict[Tuple[str, str], List[Any]]] = None,
            failures: Optional[Dict[Tuple[str, str], Exception]] = None
    ):
        self.topics = topics or {}
        self.subscriptions = subscriptions or {}
        self.rules = rules or {}
        self.failures = failures or {}
        self.calls: List[Tuple[str, ...]] = []

    def _record(self, method: str, *args: str) -> None:
        self.calls.append((method,) + args)
        key = (method, args[0] if args else "")
        if key in self.failures:
            raise self.failures[key]

    def list_topics(self):
        self._record("list_topics")
        return [SimpleNamespace(name=name) for name in self.topics]

    def get_topic(self, topic_name: str):
        self._record("get_topic", topic_name)
        return self.topics[topic_name]

    def list_subscriptions(self, topic_name: str):
        self._record("list_subscriptions", topic_name)
        return list(self.subscriptions.get(topic_name, []))

    def list_rules(self, topic_name: str, subscription_name: str):
        self._record("list_rules", topic_name, subscription_name)
        return list(self.rules.get((topic_name, subscription_name), []))


def topic_properties(ttl: timedelta, window: timedelta, requires_duplicate_detection: bool = False):
    return SimpleNamespace(
        default_message_time_to_live=ttl,
        duplicate_detection_history_time_window=window,
        requires_duplicate_detection=requires_duplicate_detection,
    )


def subscription(name: str, **overrides):
    values = dict(
        name=name,
        dead_lettering_on_message_expiration=False,
        default_message_time_to_live=timedelta(days=14),
        lock_duration=timedelta(minutes=1),
        max_delivery_count=10,
        forward_dead_lettered_messages_to=None,
        forward_to=None,
        requires_session=False,
    )
    values.update(overrides)
    return SimpleNamespace(**values)


def rule(name: str, rule_filter: Any):
    return SimpleNamespace(name=name, filter=rule_filter)


def sample_client(**kwargs) -> FakeAdminClient:
    """
    Two topics: 'orders' without subscriptions, 'payments' with an 'audit'
    subscription (one correlation rule) and a 'billing' subscription (one
    true-filter rule).
    """
    return FakeAdminClient(
        topics={
            "orders": topic_properties(timedelta(days=14), timedelta(minutes=10)),
            "payments": topic_properties(timedelta(hours=1), timedelta(seconds=30), True),
        },
        subscriptions={
            "payments": [
                subscription(
                    "audit",
                    dead_lettering_on_message_expiration=True,
                    default_message_time_to_live=timedelta(days=1),
                    lock_duration=timedelta(seconds=30),
                ),
                subscription(
                    "billing",
                    default_message_time_to_live=timedelta(hours=2, minutes=30),
                    max_delivery_count=5,
                    forward_dead_lettered_messages_to="billing-dlq",
                    forward_to="invoices",
                    requires_session=True,
                ),
            ],
        },
        rules={
            ("payments", "audit"): [
                rule("by-type", CorrelationRuleFilter(
                    content_type="application/json",
                    properties={"eventType": "PaymentCaptured", "version": 2},
                )),
            ],
            ("payments", "billing"): [rule("$Default", TrueRuleFilter())],
        },
        **kwargs
    )
