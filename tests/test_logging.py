"""Tests for log_context and the entity binding done by repository finders."""

from unittest.mock import MagicMock, patch

import pytest
import structlog

from surisql.core.logging import get_logger, log_context
from surisql.criteria import query_builder
from surisql.repositories import EntityRepositorySupport, GenericEntityRepositorySupport
from surisql.repositories import support
from tests.models import Item, Tag


def _recording_logger(events):
    """Mock logger that records each event with the context bound at call time."""
    recorder = MagicMock()

    def record(event, **fields):
        events.append((event, dict(structlog.contextvars.get_contextvars()), fields))

    recorder.debug.side_effect = record
    return recorder


class TestLogContext:
    def test_binds_inside_block(self) -> None:
        with log_context(entity="items", request_id="abc"):
            assert structlog.contextvars.get_contextvars() == {
                "entity": "items",
                "request_id": "abc",
            }
        assert "entity" not in structlog.contextvars.get_contextvars()

    def test_merged_into_events(self) -> None:
        with log_context(entity="items"):
            event = structlog.contextvars.merge_contextvars(None, "debug", {"event": "Executing query"})
        assert event == {"event": "Executing query", "entity": "items"}

    def test_nested_blocks_restore_parent(self) -> None:
        with log_context(entity="items"):
            with log_context(entity="tags", named_query="Tag.findByLabel"):
                assert structlog.contextvars.get_contextvars()["entity"] == "tags"
            assert structlog.contextvars.get_contextvars() == {"entity": "items"}

    def test_restored_when_block_raises(self) -> None:
        with pytest.raises(RuntimeError):
            with log_context(entity="items"):
                raise RuntimeError("boom")
        assert structlog.contextvars.get_contextvars() == {}

    def test_get_logger_is_usable(self) -> None:
        get_logger("surisql.tests").debug("ready", entity="items")


class TestRepositoryContext:
    def test_find_all_tags_query_event(self, session, items) -> None:
        events = []
        with patch.object(query_builder, "logger", _recording_logger(events)):
            EntityRepositorySupport(Item, session).find_all(0, 2)

        event, context, fields = events[0]
        assert event == "Executing query"
        assert context == {"entity": "items"}
        assert fields["query"] == "select * from items"
        assert fields["max_results"] == 2
        assert structlog.contextvars.get_contextvars() == {}

    def test_generic_find_all_tags_query_event(self, session, tags) -> None:
        events = []
        with patch.object(query_builder, "logger", _recording_logger(events)):
            GenericEntityRepositorySupport(session).find_all(Tag)
        assert events[0][1] == {"entity": "tags"}

    def test_named_query_event(self, session, tags) -> None:
        events = []
        with patch.object(support, "logger", _recording_logger(events)):
            GenericEntityRepositorySupport(session).find_by_named_query(
                Tag, "Tag.findByLabel", {"label": "new"}
            )
        assert events == [("Executing named query", {"entity": "tags"}, {"named_query": "Tag.findByLabel"})]

    def test_plain_builder_has_no_entity(self, session, items) -> None:
        events = []
        with patch.object(query_builder, "logger", _recording_logger(events)):
            query_builder.QueryBuilder(session).select("count(*)").from_("items").get_single_result(int)
        assert events[0][1] == {}
