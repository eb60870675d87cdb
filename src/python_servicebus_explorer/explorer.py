"""
Service Bus Explorer - connects to a namespace, builds its topology and
writes it to disk as JSON.

Library Usage:
    Example:
        from pathlib import Path
        from python_servicebus_explorer.explorer import ServiceBusExplorer

        explorer = ServiceBusExplorer(
            connection_string="Endpoint=sb://...;SharedAccessKeyName=...;SharedAccessKey=...",
            output_dir=Path("./out"),
        )
        result = explorer.explore_once()

        if result.ok:
            print(result.namespace.summary())
        else:
            print(f"{result.error.kind.value} error: {result.error.message}")
"""
from __future__ import annotations

from dataclasses import replace
from pathlib import Path
from typing import Any, Callable, Optional, Sequence

from azure.servicebus.management import ServiceBusAdministrationClient

from .builder import TopologyBuilder
from .config_helper import ConfigHelper
from .errors import ErrorKind, ExplorationResult, ExplorerError
from .models import DEFAULT_LOGGING_TYPE, DEFAULT_NAMESPACE_NAME, ExplorerDocument
from .writer import DEFAULT_OUTPUT_FILES, TopologyWriter

ClientFactory = Callable[[str], Any]


class ServiceBusExplorer:
    """
    Explores one namespace and exports it. A run is all-or-nothing: the output
    files are only touched once the whole topology has been built.
    """

    def __init__(
            self,
            connection_string: Optional[str],
            namespace_name: str = DEFAULT_NAMESPACE_NAME,
            output_dir: Optional[Path] = None,
            output_files: Sequence[str] = DEFAULT_OUTPUT_FILES,
            logging_type: str = DEFAULT_LOGGING_TYPE,
            indent: int = 2,
            client_factory: Optional[ClientFactory] = None
    ):
        """
        Initialize explorer

        Args:
            connection_string: Service Bus connection string.
            namespace_name: Label given to the exported namespace.
            output_dir: Directory for the output files (None for the working directory).
            output_files: Output file names; each receives identical content.
            logging_type: Value of the emulator's Logging.Type setting.
            indent: JSON indentation width.
            client_factory: Callable creating the administrative client from the
                   connection string. Defaults to
                   ServiceBusAdministrationClient.from_connection_string.
        """
        self.connection_string = connection_string
        self.namespace_name = namespace_name
        self.logging_type = logging_type
        self.client_factory = client_factory or ServiceBusAdministrationClient.from_connection_string
        self.writer = TopologyWriter(output_dir=output_dir, file_names=output_files, indent=indent)

    @classmethod
    def from_config(
            cls,
            connection_string: Optional[str],
            config: ConfigHelper,
            client_factory: Optional[ClientFactory] = None
    ) -> "ServiceBusExplorer":
        """
        Creates a ServiceBusExplorer from a ConfigHelper object.

        Args:
            connection_string: Service Bus connection string.
            config: A fully initialized ConfigHelper instance.
            client_factory: Optional administrative client factory.

        Returns:
            A configured instance of ServiceBusExplorer.
        """
        return cls(
            connection_string=connection_string,
            namespace_name=config.get_namespace_name(),
            output_dir=config.get_output_dir(),
            output_files=config.get_output_files(),
            logging_type=config.get_logging_type(),
            indent=config.get_indent(),
            client_factory=client_factory
        )

    def explore_once(self) -> ExplorationResult:
        """
        Build the topology and write it to every output file.

        Returns:
            The ExplorationResult. On any error nothing has been written.
        """
        if not self.connection_string or not self.connection_string.strip():
            return ExplorationResult.failure(ErrorKind.INPUT, "Connection string cannot be empty.")

        try:
            admin_client = self.client_factory(self.connection_string.strip())
        except ValueError as e:
            return ExplorationResult.failure(ErrorKind.INPUT, f"Invalid connection string: {e}", cause=e)

        result = TopologyBuilder(admin_client, namespace_name=self.namespace_name).build()
        if not result.ok:
            return result

        summary = result.namespace.summary()
        print(f"[EXPLORE] Built {summary['topics']} topics, "
              f"{summary['subscriptions']} subscriptions, {summary['rules']} rules")

        document = ExplorerDocument.for_namespace(result.namespace, logging_type=self.logging_type)
        try:
            written = self.writer.write(document)
        except ExplorerError as e:
            return replace(result, error=e)

        return replace(result, written=tuple(written))
