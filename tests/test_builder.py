from __future__ import annotations

import unittest
from datetime import timedelta

from azure.core.exceptions import ClientAuthenticationError, ServiceRequestError
from azure.servicebus.management import CorrelationRuleFilter, SqlRuleFilter

from fake_admin import FakeAdminClient, rule, sample_client, subscription, topic_properties
from python_servicebus_explorer.builder import TopologyBuilder
from python_servicebus_explorer.errors import ErrorKind


class TestTopologyBuilder(unittest.TestCase):
    """
    Tests for the TopologyBuilder traversal against an in-memory administrative client.
    """

    def test_empty_namespace(self):
        """A namespace without topics builds into an empty, valid Namespace."""
        client = FakeAdminClient()
        result = TopologyBuilder(client).build()

        self.assertTrue(result.ok)
        self.assertEqual(result.namespace.name, "DefaultNamespace")
        self.assertEqual(result.namespace.topics, ())
        self.assertEqual(result.namespace.to_dict()["Topics"], [])
        self.assertEqual(client.calls, [("list_topics",)])

    def test_order_follows_api_enumeration(self):
        """Topics, subscriptions and rules keep the order returned by the API."""
        client = FakeAdminClient(
            topics={
                "zeta": topic_properties(timedelta(hours=1), timedelta(minutes=1)),
                "alpha": topic_properties(timedelta(hours=1), timedelta(minutes=1)),
            },
            subscriptions={"zeta": [subscription("s2"), subscription("s1")]},
            rules={("zeta", "s2"): [rule("r2", SqlRuleFilter("a = 1")), rule("r1", SqlRuleFilter("b = 2"))]},
        )
        namespace = TopologyBuilder(client).build().namespace

        self.assertEqual([t.name for t in namespace.topics], ["zeta", "alpha"])
        self.assertEqual([s.name for s in namespace.topics[0].subscriptions], ["s2", "s1"])
        self.assertEqual([r.name for r in namespace.topics[0].subscriptions[0].rules], ["r2", "r1"])

    def test_traversal_is_sequential(self):
        """Every call happens in topic -> subscription -> rule order."""
        client = sample_client()
        TopologyBuilder(client).build()

        self.assertEqual(client.calls, [
            ("list_topics",),
            ("get_topic", "orders"),
            ("list_subscriptions", "orders"),
            ("get_topic", "payments"),
            ("list_subscriptions", "payments"),
            ("list_rules", "payments", "audit"),
            ("list_rules", "payments", "billing"),
        ])

    def test_topic_properties_mapping(self):
        namespace = TopologyBuilder(sample_client()).build().namespace
        payments = namespace.topics[1].properties

        self.assertEqual(payments.default_message_time_to_live, "01:00:00")
        self.assertEqual(payments.duplicate_detection_history_time_window, "00:00:30")
        self.assertTrue(payments.requires_duplicate_detection)

    def test_absent_forwarding_targets_become_empty_strings(self):
        """Absent ForwardTo / ForwardDeadLetteredMessagesTo are flattened to ''."""
        namespace = TopologyBuilder(sample_client()).build().namespace
        audit, billing = namespace.topics[1].subscriptions

        self.assertEqual(audit.properties.forward_to, "")
        self.assertEqual(audit.properties.forward_dead_lettered_messages_to, "")
        self.assertEqual(billing.properties.forward_to, "invoices")
        self.assertEqual(billing.properties.forward_dead_lettered_messages_to, "billing-dlq")

        serialized = audit.properties.to_dict()
        self.assertEqual(serialized["ForwardTo"], "")
        self.assertEqual(serialized["ForwardDeadLetteredMessagesTo"], "")

    def test_correlation_rule(self):
        namespace = TopologyBuilder(sample_client()).build().namespace
        by_type = namespace.topics[1].subscriptions[0].rules[0]

        self.assertEqual(by_type.properties.filter_type, "Correlation")
        correlation = by_type.properties.correlation_filter
        self.assertEqual(correlation.content_type, "application/json")
        self.assertEqual(dict(correlation.properties), {"eventType": "PaymentCaptured", "version": "2"})

    def test_non_correlation_rule_has_no_correlation_filter(self):
        namespace = TopologyBuilder(sample_client()).build().namespace
        default_rule = namespace.topics[1].subscriptions[1].rules[0]

        self.assertEqual(default_rule.properties.filter_type, "True")
        self.assertIsNone(default_rule.properties.correlation_filter)
        self.assertNotIn("CorrelationFilter", default_rule.to_dict()["Properties"])

    def test_correlation_rule_without_application_properties(self):
        client = FakeAdminClient(
            topics={"t": topic_properties(timedelta(hours=1), timedelta(minutes=1))},
            subscriptions={"t": [subscription("s")]},
            rules={("t", "s"): [rule("r", CorrelationRuleFilter(correlation_id="abc"))]},
        )
        rule_properties = TopologyBuilder(client).build().namespace.topics[0].subscriptions[0].rules[0].properties

        payload = rule_properties.to_dict()["CorrelationFilter"]
        self.assertEqual(payload["Properties"], {})
        self.assertIsNone(payload["ContentType"])

    def test_custom_namespace_name(self):
        namespace = TopologyBuilder(FakeAdminClient(), namespace_name="orders-ns").build().namespace
        self.assertEqual(namespace.name, "orders-ns")

    def test_api_failure_aborts_without_partial_tree(self):
        """A failure on the second topic's subscription listing aborts the whole build."""
        client = sample_client(failures={("list_subscriptions", "payments"): ServiceRequestError("connection reset")})
        result = TopologyBuilder(client).build()

        self.assertFalse(result.ok)
        self.assertIsNone(result.namespace)
        self.assertEqual(result.error.kind, ErrorKind.API)
        self.assertIn("connection reset", result.error.message)
        self.assertIsInstance(result.error.cause, ServiceRequestError)
        self.assertEqual(client.calls[-1], ("list_subscriptions", "payments"))

    def test_authentication_failure_on_listing(self):
        client = sample_client(failures={("list_topics", ""): ClientAuthenticationError("unauthorized")})
        result = TopologyBuilder(client).build()

        self.assertEqual(result.error.kind, ErrorKind.API)
        self.assertEqual(client.calls, [("list_topics",)])


if __name__ == '__main__':
    unittest.main()
