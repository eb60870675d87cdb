#!/usr/bin/env python3
"""
Example: Library usage without writing files

This script builds the topology of a namespace and prints a short report,
using the TopologyBuilder directly instead of the CLI.
"""
import sys

from azure.servicebus.management import ServiceBusAdministrationClient

from python_servicebus_explorer.builder import TopologyBuilder


def main():
    """Print every topic, subscription and rule of a namespace."""
    if len(sys.argv) < 2:
        print("Usage: summarize_topology.py <connection-string>")
        return 1

    admin_client = ServiceBusAdministrationClient.from_connection_string(sys.argv[1])
    result = TopologyBuilder(admin_client).build()

    if not result.ok:
        print(f"❌ {result.error.kind.value} error: {result.error.message}")
        return 1

    summary = result.namespace.summary()
    print("=" * 60)
    print(f"NAMESPACE {result.namespace.name}")
    print(f"  Topics: {summary['topics']}  Subscriptions: {summary['subscriptions']}  Rules: {summary['rules']}")
    print("=" * 60)

    for topic in result.namespace.topics:
        print(f"\n📌 {topic.name} (TTL {topic.properties.default_message_time_to_live})")
        for subscription in topic.subscriptions:
            forward = subscription.properties.forward_to or "-"
            print(f"   ➜ {subscription.name} (forward to: {forward})")
            for rule in subscription.rules:
                print(f"      • {rule.name}: {rule.properties.filter_type}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
