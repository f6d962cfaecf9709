"""
Tests for loading the knowledge base and intent patterns from JSON files.
"""

from __future__ import annotations

import json
import threading
import time

from app.application.ports.knowledge_base import KnowledgeSourcePort
from app.domain.entities.knowledge_base import KnowledgeBase, PatternTable
from app.infrastructure.knowledge.context_loader import KnowledgeContextLoader
from app.infrastructure.knowledge.default_patterns import DEFAULT_PATTERNS
from app.infrastructure.knowledge.json_source import JsonKnowledgeSource
from app.wiring import dependencies


class CountingSource(KnowledgeSourcePort):
    def __init__(self, delay: float = 0.0) -> None:
        self.kb_loads = 0
        self.pattern_loads = 0
        self._delay = delay

    def load_knowledge_base(self) -> KnowledgeBase:
        self.kb_loads += 1
        time.sleep(self._delay)
        return KnowledgeBase()

    def load_pattern_table(self) -> PatternTable:
        self.pattern_loads += 1
        return PatternTable(patterns={"greeting": ("hello",)})


def test_context_loads_once():
    source = CountingSource()
    loader = KnowledgeContextLoader(source)
    assert not loader.loaded

    first = loader.get()
    second = loader.get()

    assert first is second
    assert first == second
    assert loader.load_count == 1
    assert source.kb_loads == 1
    assert source.pattern_loads == 1


def test_concurrent_first_calls_share_one_load():
    source = CountingSource(delay=0.05)
    loader = KnowledgeContextLoader(source)
    barrier = threading.Barrier(8)
    results = []

    def worker():
        barrier.wait()
        results.append(loader.get())

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(results) == 8
    assert all(r is results[0] for r in results)
    assert source.kb_loads == 1
    assert loader.load_count == 1


def test_load_knowledge_base_builds_one_loader_for_concurrent_callers(monkeypatch):
    sources = []

    def slow_source(data_dir=None):
        time.sleep(0.05)
        source = CountingSource(delay=0.05)
        sources.append(source)
        return source

    monkeypatch.setattr(dependencies, "_context_loader", None)
    monkeypatch.setattr(dependencies, "JsonKnowledgeSource", slow_source)
    barrier = threading.Barrier(4)
    results = []

    def worker():
        barrier.wait()
        results.append(dependencies.load_knowledge_base())

    threads = [threading.Thread(target=worker) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(results) == 4
    assert all(kb is results[0] for kb in results)
    assert dependencies.load_knowledge_base() is results[0]
    assert len(sources) == 1
    assert sources[0].kb_loads == 1


def test_bundled_data():
    source = JsonKnowledgeSource()
    kb = source.load_knowledge_base()
    assert kb.category_names[0] == "Manicuras"
    assert len(kb.services) == 8
    assert kb.schedule.business_hours["sunday"] == "Closed"
    assert kb.schedule.location.public_transport.bus[0].line == "18"
    assert len(kb.schedule.parking.options) == 2

    table = source.load_pattern_table()
    assert table.phrases_for("greeting")[0] == "hello"
    assert table.response_for("goodbye", "es").startswith("Gracias")


def test_missing_directory_degrades_to_empty(tmp_path):
    source = JsonKnowledgeSource(tmp_path / "nowhere")
    kb = source.load_knowledge_base()
    assert kb.services == ()
    assert kb.schedule.business_hours is None
    assert kb.schedule.location is None

    table = source.load_pattern_table()
    assert set(table.patterns) == set(DEFAULT_PATTERNS)


def test_each_file_degrades_on_its_own(tmp_path):
    (tmp_path / "products.json").write_text("{not json", encoding="utf-8")
    (tmp_path / "schedule.json").write_text(
        json.dumps({"business_hours": {"monday": "10:00 - 14:00"}}), encoding="utf-8"
    )
    (tmp_path / "intents.json").write_text(
        json.dumps({"intents": {"hours_inquiry": {"patterns": ["Abren"]}}}), encoding="utf-8"
    )

    source = JsonKnowledgeSource(tmp_path)
    kb = source.load_knowledge_base()
    assert kb.services == ()
    assert kb.schedule.business_hours == {"monday": "10:00 - 14:00"}
    assert kb.schedule.parking is None

    table = source.load_pattern_table()
    assert table.patterns == {"hours_inquiry": ("abren",)}


def test_invalid_prices_are_rejected(tmp_path):
    products = {"services": [{"category": "Manicuras", "variants": [{"name": "X", "price_original_eur": -5}]}]}
    (tmp_path / "products.json").write_text(json.dumps(products), encoding="utf-8")
    kb = JsonKnowledgeSource(tmp_path).load_knowledge_base()
    assert kb.services == ()


def test_empty_intents_file_uses_defaults(tmp_path):
    (tmp_path / "intents.json").write_text(json.dumps({"intents": {}}), encoding="utf-8")
    table = JsonKnowledgeSource(tmp_path).load_pattern_table()
    assert table.phrases_for("greeting")[:2] == ("hello", "hi")


def test_string_directions_and_numeric_lines(tmp_path):
    schedule = {
        "location": {
            "address": "Calle Mayor 1",
            "directions": "Cerca del mercado",
            "public_transport": {"bus": [{"line": 7}], "metro": []},
        }
    }
    (tmp_path / "schedule.json").write_text(json.dumps(schedule), encoding="utf-8")
    location = JsonKnowledgeSource(tmp_path).load_knowledge_base().schedule.location
    assert location.directions_for("en") == "Cerca del mercado"
    assert location.public_transport.bus[0].line == "7"
