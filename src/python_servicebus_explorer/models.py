"""
Service Bus topology model

Immutable representation of a namespace's topics, subscriptions and rules,
plus the envelope written to disk. Every type renders itself with the
PascalCase field names expected by the Service Bus emulator configuration.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

DEFAULT_NAMESPACE_NAME = "DefaultNamespace"
DEFAULT_LOGGING_TYPE = "File"

CORRELATION_FILTER_FIELD = "CorrelationFilter"
SQL_FILTER_FIELD = "SqlFilter"


@dataclass(frozen=True)
class CorrelationFilterProperties:
    """
    Payload of a correlation rule filter.

    Attributes:
        content_type: The matched content type, or None when the filter has none.
        properties: Application properties matched by the filter (always a mapping).
    """
    content_type: Optional[str] = None
    properties: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "properties", MappingProxyType(dict(self.properties)))

    def __hash__(self):
        return hash((self.content_type, tuple(sorted(self.properties.items()))))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ContentType": self.content_type,
            "Properties": dict(self.properties),
        }


@dataclass(frozen=True)
class SqlFilterProperties:
    """Payload of a SQL rule filter."""
    sql_expression: str

    def to_dict(self) -> Dict[str, Any]:
        return {"SqlExpression": self.sql_expression}


@dataclass(frozen=True)
class RuleProperties:
    """
    Filter description of a rule.

    ``filter_type`` is the discriminant tag (e.g. "Correlation", "Sql", "True").
    ``payloads`` maps a JSON field name to the kind-specific payload; kinds
    without a payload leave it empty and nothing extra is serialized.
    """
    filter_type: str
    payloads: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "payloads", MappingProxyType(dict(self.payloads)))

    def __hash__(self):
        return hash((self.filter_type, tuple(sorted(self.payloads.items()))))

    @property
    def correlation_filter(self) -> Optional[CorrelationFilterProperties]:
        return self.payloads.get(CORRELATION_FILTER_FIELD)

    @property
    def sql_filter(self) -> Optional[SqlFilterProperties]:
        return self.payloads.get(SQL_FILTER_FIELD)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"FilterType": self.filter_type}
        for field_name, payload in self.payloads.items():
            data[field_name] = payload.to_dict()
        return data


@dataclass(frozen=True)
class Rule:
    name: str
    properties: RuleProperties

    def to_dict(self) -> Dict[str, Any]:
        return {"Name": self.name, "Properties": self.properties.to_dict()}


@dataclass(frozen=True)
class SubscriptionProperties:
    """
    Subscription settings. Forwarding targets are empty strings when unset.
    """
    dead_lettering_on_message_expiration: bool
    default_message_time_to_live: str
    lock_duration: str
    max_delivery_count: int
    forward_dead_lettered_messages_to: str = ""
    forward_to: str = ""
    requires_session: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "DeadLetteringOnMessageExpiration": self.dead_lettering_on_message_expiration,
            "DefaultMessageTimeToLive": self.default_message_time_to_live,
            "LockDuration": self.lock_duration,
            "MaxDeliveryCount": self.max_delivery_count,
            "ForwardDeadLetteredMessagesTo": self.forward_dead_lettered_messages_to,
            "ForwardTo": self.forward_to,
            "RequiresSession": self.requires_session,
        }


@dataclass(frozen=True)
class Subscription:
    name: str
    properties: SubscriptionProperties
    rules: Tuple[Rule, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "Name": self.name,
            "Properties": self.properties.to_dict(),
            "Rules": [rule.to_dict() for rule in self.rules],
        }


@dataclass(frozen=True)
class TopicProperties:
    default_message_time_to_live: str
    duplicate_detection_history_time_window: str
    requires_duplicate_detection: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            "DefaultMessageTimeToLive": self.default_message_time_to_live,
            "DuplicateDetectionHistoryTimeWindow": self.duplicate_detection_history_time_window,
            "RequiresDuplicateDetection": self.requires_duplicate_detection,
        }


@dataclass(frozen=True)
class Topic:
    name: str
    properties: TopicProperties
    subscriptions: Tuple[Subscription, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "Name": self.name,
            "Properties": self.properties.to_dict(),
            "Subscriptions": [subscription.to_dict() for subscription in self.subscriptions],
        }


@dataclass(frozen=True)
class Namespace:
    """
    A namespace and its topics, in the order the administrative API listed them.
    """
    name: str = DEFAULT_NAMESPACE_NAME
    topics: Tuple[Topic, ...] = ()

    def summary(self) -> Dict[str, int]:
        """
        Count the entities in the namespace.

        Returns:
            A dictionary with 'topics', 'subscriptions' and 'rules' counts.
        """
        subscriptions = [s for topic in self.topics for s in topic.subscriptions]
        return {
            "topics": len(self.topics),
            "subscriptions": len(subscriptions),
            "rules": sum(len(s.rules) for s in subscriptions),
        }

    def to_dict(self) -> Dict[str, Any]:
        return {
            "Name": self.name,
            "Topics": [topic.to_dict() for topic in self.topics],
        }


@dataclass(frozen=True)
class LoggingConfig:
    type: str = DEFAULT_LOGGING_TYPE

    def to_dict(self) -> Dict[str, Any]:
        return {"Type": self.type}


@dataclass(frozen=True)
class UserConfig:
    namespaces: Tuple[Namespace, ...] = ()
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "Namespaces": [namespace.to_dict() for namespace in self.namespaces],
            "Logging": self.logging.to_dict(),
        }


@dataclass(frozen=True)
class ExplorerDocument:
    """Top-level envelope of the exported file."""
    user_config: UserConfig = field(default_factory=UserConfig)

    @classmethod
    def for_namespace(cls, namespace: Namespace, logging_type: str = DEFAULT_LOGGING_TYPE) -> "ExplorerDocument":
        return cls(user_config=UserConfig(namespaces=(namespace,), logging=LoggingConfig(type=logging_type)))

    def to_dict(self) -> Dict[str, Any]:
        return {"UserConfig": self.user_config.to_dict()}
