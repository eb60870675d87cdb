"""
Python Service Bus Explorer

Exports the topics, subscriptions and rules of an Azure Service Bus namespace
to JSON files usable as a Service Bus emulator configuration.

No external dependencies beyond the Azure Service Bus SDK and PyYAML.
"""

__version__ = "0.1.0"

from .builder import TopologyBuilder
from .errors import ErrorKind, ExplorationResult, ExplorerError
from .explorer import ServiceBusExplorer
from .models import ExplorerDocument, Namespace
from .writer import TopologyWriter

__all__ = [
    "ServiceBusExplorer",
    "TopologyBuilder",
    "TopologyWriter",
    "ExplorerDocument",
    "Namespace",
    "ExplorationResult",
    "ExplorerError",
    "ErrorKind",
    "__version__",
]
