"""
Topology Builder

Walks a Service Bus namespace through its administrative API (topics, then
subscriptions, then rules) and maps every broker record into the immutable
topology model.
"""
from __future__ import annotations

from typing import Any, List

from azure.core.exceptions import AzureError

from .durations import format_timespan
from .errors import ErrorKind, ExplorationResult
from .filters import build_rule_properties
from .models import (
    DEFAULT_NAMESPACE_NAME,
    Namespace,
    Rule,
    Subscription,
    SubscriptionProperties,
    Topic,
    TopicProperties,
)


class TopologyBuilder:
    """
    Builds a Namespace from an administrative client.

    The client only needs ``list_topics()``, ``get_topic(name)``,
    ``list_subscriptions(topic_name)`` and ``list_rules(topic_name, subscription_name)``,
    as offered by ``azure.servicebus.management.ServiceBusAdministrationClient``.

    Attributes:
        admin_client: The administrative API handle (used read-only)
        namespace_name: Label given to the built namespace
    """

    def __init__(self, admin_client: Any, namespace_name: str = DEFAULT_NAMESPACE_NAME):
        self.admin_client = admin_client
        self.namespace_name = namespace_name

    def build(self) -> ExplorationResult:
        """
        Traverse the whole namespace.

        Returns:
            An ExplorationResult holding the namespace, or an API error. The
            first failing call aborts the traversal and no partial tree is kept.
        """
        try:
            namespace = self._build_namespace()
        except AzureError as e:
            return ExplorationResult.failure(ErrorKind.API, str(e) or type(e).__name__, cause=e)
        return ExplorationResult(namespace=namespace)

    def _build_namespace(self) -> Namespace:
        print("[EXPLORE] Retrieving topics...")
        topic_names: List[str] = [topic.name for topic in self.admin_client.list_topics()]

        if not topic_names:
            print("[EXPLORE] No topics found in the namespace.")
            return Namespace(name=self.namespace_name)

        print(f"[EXPLORE] Found {len(topic_names)} topics.")
        topics = tuple(self._build_topic(topic_name) for topic_name in topic_names)
        return Namespace(name=self.namespace_name, topics=topics)

    def _build_topic(self, topic_name: str) -> Topic:
        """
        Fetch a topic's properties and all of its subscriptions.

        Args:
            topic_name: Name of the topic
        """
        topic = self.admin_client.get_topic(topic_name)
        properties = TopicProperties(
            default_message_time_to_live=format_timespan(topic.default_message_time_to_live),
            duplicate_detection_history_time_window=format_timespan(topic.duplicate_detection_history_time_window),
            requires_duplicate_detection=bool(topic.requires_duplicate_detection),
        )

        subscriptions = tuple(
            self._build_subscription(topic_name, subscription)
            for subscription in self.admin_client.list_subscriptions(topic_name)
        )
        print(f"[EXPLORE] Topic '{topic_name}': {len(subscriptions)} subscriptions")
        return Topic(name=topic_name, properties=properties, subscriptions=subscriptions)

    def _build_subscription(self, topic_name: str, subscription: Any) -> Subscription:
        properties = SubscriptionProperties(
            dead_lettering_on_message_expiration=bool(subscription.dead_lettering_on_message_expiration),
            default_message_time_to_live=format_timespan(subscription.default_message_time_to_live),
            lock_duration=format_timespan(subscription.lock_duration),
            max_delivery_count=subscription.max_delivery_count,
            forward_dead_lettered_messages_to=subscription.forward_dead_lettered_messages_to or "",
            forward_to=subscription.forward_to or "",
            requires_session=bool(subscription.requires_session),
        )

        rules = tuple(
            Rule(name=rule.name, properties=build_rule_properties(rule.filter))
            for rule in self.admin_client.list_rules(topic_name, subscription.name)
        )
        return Subscription(name=subscription.name, properties=properties, rules=rules)
