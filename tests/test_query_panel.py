import asyncio

import pytest

from dt_console.core.exceptions import EmptyResultError, QueryError
from dt_console.core.models import QueryResult
from dt_console.core.query_executor import QueryExecutor
from dt_console.core.query_panel import PanelState, QueryPanel
from dt_console.core.schema import infer_columns

from .conftest import LOG_RECORDS, QUERY_ENDPOINT

pytestmark = pytest.mark.asyncio


class FakeExecutor:
    endpoint = QUERY_ENDPOINT

    def __init__(self, *outcomes):
        self.outcomes = list(outcomes)
        self.calls = []
        self.gate: asyncio.Event | None = None

    async def execute(self, query_text, timeout_ms=None):
        self.calls.append((query_text, timeout_ms))
        if self.gate is not None:
            await self.gate.wait()
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


def result_of(records):
    return QueryResult(records=tuple(records), columns=tuple(infer_columns(records)))


async def test_default_query_text():
    panel = QueryPanel(FakeExecutor())
    assert panel.state.value == PanelState(query_text="fetch logs\n| limit 100")
    assert panel.state.value.button_label == "Run DQL"


async def test_run_query_success():
    result = result_of(LOG_RECORDS)
    executor = FakeExecutor(result)
    panel = QueryPanel(executor)
    panel.set_query("fetch logs | limit 100")
    transitions = []
    panel.state.subscribe(transitions.append)

    state = await panel.run_query()

    assert executor.calls == [("fetch logs | limit 100", 30000)]
    assert state.result == result
    assert state.error is None
    assert not state.running
    assert [t.running for t in transitions] == [True, False]


async def test_empty_result_clears_previous_table():
    executor = FakeExecutor(result_of(LOG_RECORDS), EmptyResultError())
    panel = QueryPanel(executor)

    await panel.run_query()
    assert panel.state.value.result is not None

    state = await panel.run_query()
    assert state.result is None
    assert state.error == "No data returned from query"


async def test_failure_message():
    panel = QueryPanel(FakeExecutor(QueryError("PARSE_ERROR")))
    state = await panel.run_query()
    assert state.error == "Failed to execute DQL query: PARSE_ERROR"
    assert state.result is None
    assert not state.running


async def test_error_cleared_on_next_run():
    result = result_of(LOG_RECORDS)
    panel = QueryPanel(FakeExecutor(QueryError("boom"), result))
    await panel.run_query()
    state = await panel.run_query()
    assert state.error is None
    assert state.result == result


async def test_trigger_disabled_while_running():
    executor = FakeExecutor(result_of(LOG_RECORDS))
    executor.gate = asyncio.Event()
    panel = QueryPanel(executor)

    first = asyncio.ensure_future(panel.run_query())
    await asyncio.sleep(0)
    assert panel.state.value.running
    assert panel.state.value.button_label == "Running..."

    second = await panel.run_query()
    assert second.running
    assert len(executor.calls) == 1

    executor.gate.set()
    state = await first
    assert not state.running
    assert state.result is not None


async def test_cancelled_run_resets_running():
    executor = FakeExecutor(result_of(LOG_RECORDS))
    executor.gate = asyncio.Event()
    panel = QueryPanel(executor)

    task = asyncio.ensure_future(panel.run_query())
    await asyncio.sleep(0)
    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task
    assert not panel.state.value.running


async def test_end_to_end_with_executor(client, rmock):
    rmock.post(QUERY_ENDPOINT, payload={"result": {"records": LOG_RECORDS}})
    panel = QueryPanel(QueryExecutor(client), query_text="fetch logs | limit 100")

    state = await panel.run_query()

    assert [c.header for c in state.result.columns] == ["Ts", "Content"]
    assert state.result.rows == [
        {"id": 0, "ts": "t1", "content": "x"},
        {"id": 1, "ts": "t2", "content": "y"},
    ]
