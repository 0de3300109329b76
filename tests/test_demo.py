import logging
import threading
import time

import pytest

from collectors.core.config import Settings
from collectors.core.data import PEOPLE
from collectors.demo import main, run_demo, tracing_list_collector
from collectors.functional.collector import collect
from collectors.logger.logger import logger


@pytest.fixture(
    params=[
        Settings(PARALLEL=False),
        Settings(PARALLEL=True, CHUNK_SIZE=1),
        Settings(PARALLEL=True, CHUNK_SIZE=2, MAX_WORKERS=2),
    ],
    ids=["sequential", "parallel-1", "parallel-2"],
)
def settings(request):
    return request.param


def test_demo_results(settings):
    lines = []
    result = run_demo(settings=settings, emit=lines.append)

    assert set(result.groups) == {"US", "UK", "CN", "FR"}
    for country, people in result.groups.items():
        assert all(p.country == country for p in people)
    flattened = [p for people in result.groups.values() for p in people]
    assert len(flattened) == 5
    assert set(flattened) == set(PEOPLE)

    assert {p.name for p in result.partition[True]} == {"Alan", "Crane", "Ella"}
    assert {p.name for p in result.partition[False]} == {"Bruce", "Dolly"}

    assert result.joined == "Alan, Bruce, Crane, Dolly, Ella"

    assert len(result.collected) == 5
    assert set(result.collected) == set(PEOPLE)


def test_demo_output_sections(settings):
    lines = []
    run_demo(settings=settings, emit=lines.append)

    headers = [line for line in lines if line.startswith("-----")]
    assert headers == ["-----Group:", "-----Partition:", "-----join:", "-----Collector:"]

    join_index = lines.index("-----join:")
    assert lines[join_index + 1] == "Alan, Bruce, Crane, Dolly, Ella"

    partition_index = lines.index("-----Partition:")
    assert lines[partition_index + 1].startswith("False -> [Person(name=Bruce")
    assert lines[partition_index + 2].startswith("True -> [Person(name=Alan")

    accumulated = [line for line in lines if line.startswith("Accumulator: ")]
    assert sorted(accumulated) == sorted(f"Accumulator: {p}" for p in PEOPLE)


def test_demo_group_lines():
    lines = []
    run_demo(settings=Settings(PARALLEL=False), emit=lines.append)

    start = lines.index("-----Group:") + 1
    end = lines.index("-----Partition:")
    group_lines = lines[start:end]

    assert len(group_lines) == 4
    assert {line.split(" -> ")[0] for line in group_lines} == {"US", "UK", "CN", "FR"}
    assert (
        "US -> [Person(name=Alan, age=44, country=US), "
        "Person(name=Bruce, age=17, country=US)]"
    ) in group_lines


def test_demo_is_idempotent():
    first = run_demo(settings=Settings(PARALLEL=True), emit=lambda _: None)
    second = run_demo(settings=Settings(PARALLEL=True), emit=lambda _: None)

    assert first.groups == second.groups
    assert first.partition == second.partition
    assert first.joined == second.joined
    assert set(first.collected) == set(second.collected)


def test_sequential_demo_has_no_combiner_calls():
    lines = []
    run_demo(settings=Settings(PARALLEL=False), emit=lines.append)
    assert not any(line.startswith("Combiner: ") for line in lines)


def test_tracing_collector_reports_merges():
    lines = []
    result = collect(
        PEOPLE, tracing_list_collector(lines.append), parallel=True, chunk_size=1
    )

    assert set(result) == set(PEOPLE)
    # 5 chunks need 4 merges
    assert len([line for line in lines if line.startswith("Combiner: ")]) == 4


@pytest.fixture
def info_logging():
    previous = logger.level
    logger.setLevel(logging.INFO)
    yield
    logger.setLevel(previous)


def test_main_prints_and_exits_zero(capsys, monkeypatch, info_logging):
    monkeypatch.setenv("COLLECTORS_PARALLEL", "false")
    assert main() == 0

    captured = capsys.readouterr()
    out = captured.out
    assert "-----Group:" in out
    assert "Alan, Bruce, Crane, Dolly, Ella" in out
    assert out.count("Accumulator: ") == 5

    # Log records go to stderr only
    assert "Running collector demo over 5 records" in captured.err
    assert "Running collector demo" not in out
    assert "-----Group:" not in captured.err


def test_tracing_collector_serialises_emit():
    active = []
    overlaps = []
    guard = threading.Lock()

    def slow_emit(line):
        with guard:
            active.append(line)
            if len(active) > 1:
                overlaps.append(list(active))
        time.sleep(0.001)
        with guard:
            active.remove(line)

    collector = tracing_list_collector(slow_emit)
    result = collect(PEOPLE, collector, parallel=True, chunk_size=1, max_workers=5)

    assert set(result) == set(PEOPLE)
    assert overlaps == []
