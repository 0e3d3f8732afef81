"""Batch Executor.

Runs one (resource, operation) over a batch of input items, sequentially,
turning handler results into output records.
"""

import time
from typing import Any

from chatwoot_obs.logging import bind_context, get_logger
from chatwoot_obs.metrics import operation_duration, operation_executions_total
from chatwoot_obs.tracing import operation_span
from chatwoot_tools.adapters.chatwoot.client import ChatwootClient
from chatwoot_tools.adapters.chatwoot.context import OperationContext
from chatwoot_tools.adapters.chatwoot.exceptions import (
    ChatwootAPIError,
    ChatwootConfigurationError,
    ChatwootError,
    ChatwootTimeoutError,
)
from chatwoot_tools.adapters.chatwoot.schemas import ResponseFilters
from chatwoot_tools.adapters.chatwoot.utils import filter_response_fields
from chatwoot_tools.base import ExecutionItem, ExecutionResult, OperationOutput
from chatwoot_tools.registry import OperationRegistry

logger = get_logger(__name__)

# Only remote failures may be turned into error records
CONTINUABLE_ERRORS = (ChatwootAPIError, ChatwootTimeoutError)


class ChatwootNode:
    """Executes registered operations against one Chatwoot client."""

    def __init__(
        self,
        registry: OperationRegistry,
        client: ChatwootClient,
        settings: Any = None,
        node_name: str = "Chatwoot",
    ):
        self.registry = registry
        self.client = client
        self.settings = settings
        self.node_name = node_name

    async def execute(
        self,
        resource: str,
        operation: str,
        items: list[dict[str, Any]],
        continue_on_fail: bool = False,
    ) -> ExecutionResult:
        """Run the operation once per item.

        Args:
            resource: Resource name, e.g. "contact"
            operation: Operation name, e.g. "create"
            items: Parameters for each item
            continue_on_fail: Emit {"error": ...} records for remote failures
                instead of aborting

        Returns:
            ExecutionResult with output records and hints

        Raises:
            ChatwootError: First aborting error, annotated with node name and
                item index
        """
        bind_context(resource=resource, operation=operation)
        result = ExecutionResult()
        handler = self.registry.get(resource, operation)

        for index, parameters in enumerate(items):
            ctx = OperationContext(
                client=self.client,
                parameters=parameters,
                item_index=index,
                node_name=self.node_name,
                settings=self.settings,
            )
            start_time = time.time()

            try:
                if handler is None:
                    raise ChatwootConfigurationError(
                        f'The operation "{operation}" is not supported for resource "{resource}"'
                    )
                with operation_span(resource, operation, index):
                    output = await handler.execute(ctx)
                result.items.extend(self._to_items(output, index, parameters))

            except ChatwootError as e:
                self._annotate(e, index)
                if continue_on_fail and isinstance(e, CONTINUABLE_ERRORS):
                    operation_executions_total.labels(resource, operation, "continued").inc()
                    logger.warning(
                        "operation_item_failed",
                        resource=resource,
                        operation=operation,
                        item_index=index,
                        error=e.message,
                    )
                    result.items.append(ExecutionItem(data={"error": e.message}, paired_item=index))
                    continue

                operation_executions_total.labels(resource, operation, "failure").inc()
                logger.error(
                    "operation_failed",
                    resource=resource,
                    operation=operation,
                    item_index=index,
                    error_type=type(e).__name__,
                    error=e.message,
                )
                raise

            finally:
                operation_duration.labels(resource, operation).observe(time.time() - start_time)
                result.hints.extend(ctx.hints)

            operation_executions_total.labels(resource, operation, "success").inc()
            logger.info(
                "operation_executed",
                resource=resource,
                operation=operation,
                item_index=index,
                duration_ms=int((time.time() - start_time) * 1000),
            )

        return result

    def _annotate(self, error: ChatwootError, index: int) -> None:
        error.node_name = self.node_name
        if error.item_index is None:
            error.item_index = index

    def _to_items(
        self, output: OperationOutput, index: int, parameters: dict[str, Any]
    ) -> list[ExecutionItem]:
        """Fan lists out into records and apply response field filters."""
        if isinstance(output, ExecutionItem):
            records = [output.model_copy(update={"paired_item": index})]
        elif isinstance(output, list):
            records = [
                ExecutionItem(data=entry if isinstance(entry, dict) else {"value": entry}, paired_item=index)
                for entry in output
            ]
        else:
            records = [ExecutionItem(data=output or {}, paired_item=index)]

        filters = ResponseFilters.model_validate(parameters.get("response_filters") or {})
        if filters.mode == "none" or not filters.fields:
            return records

        select_fields = filters.fields if filters.mode == "select" else None
        except_fields = filters.fields if filters.mode == "except" else None
        for record in records:
            record.data = filter_response_fields(record.data, select_fields, except_fields)
        return records
